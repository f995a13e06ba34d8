"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from typing import cast

from . import ui_messages as ui
from .contracts import cli_help_epilog
from .i18n import AUTO_LANGUAGE, LANGUAGE_CHOICES

LANG_ENV_VAR = "CSSCLONE_LANG"


class _HelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawDescriptionHelpFormatter
):
    def _get_help_string(self, action: argparse.Action) -> str:
        if action.dest == "inputs":
            return action.help or ""
        return cast(str, super()._get_help_string(action))


def default_language(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    value = env.get(LANG_ENV_VAR, "").strip().lower()
    return value if value in LANGUAGE_CHOICES else AUTO_LANGUAGE


def build_parser(
    version: str, *, environ: Mapping[str, str] | None = None
) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cssclone",
        description="Find groups of CSS declarations duplicated across selectors.",
        epilog=cli_help_epilog(),
        formatter_class=_HelpFormatter,
    )
    ap.add_argument(
        "--version",
        action="version",
        version=ui.version_output(version),
        help=ui.HELP_VERSION,
    )

    core_group = ap.add_argument_group("Target")
    core_group.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        help=ui.HELP_INPUTS,
    )

    tune_group = ap.add_argument_group("Analysis Tuning")
    tune_group.add_argument(
        "--processes",
        type=int,
        default=1,
        help=ui.HELP_PROCESSES,
    )

    out_group = ap.add_argument_group("Reporting")
    out_group.add_argument(
        "--lang",
        choices=LANGUAGE_CHOICES,
        default=default_language(environ),
        help=ui.HELP_LANG,
    )
    out_group.add_argument(
        "--json",
        dest="json_out",
        metavar="FILE",
        help=ui.HELP_JSON,
    )
    out_group.add_argument(
        "--no-color",
        action="store_true",
        help=ui.HELP_NO_COLOR,
    )
    out_group.add_argument(
        "--verbose",
        action="store_true",
        help=ui.HELP_VERBOSE,
    )
    out_group.add_argument(
        "--debug",
        action="store_true",
        help=ui.HELP_DEBUG,
    )
    return ap
