from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

from rich.console import Console
from rich.theme import Theme

from . import __version__
from . import ui_messages as ui
from ._cli_args import build_parser
from ._cli_paths import _validate_output_path
from ._cli_summary import _print_summary
from .clusterer import find_common_declarations
from .contracts import ISSUES_URL, ExitCode
from .errors import FileProcessingError, ParseError, UsageError
from .extractor import DeclarationBlock, extract_blocks, process_file
from .i18n import Messages
from .report import to_json_report, to_text_report
from .scanner import Inputs, resolve_paths, split_inputs

# Custom theme for Rich
custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
    }
)


def _make_console(*, no_color: bool, stderr: bool = False) -> Console:
    return Console(theme=custom_theme, width=100, no_color=no_color, stderr=stderr)


console = _make_console(no_color=False)
err_console = _make_console(no_color=False, stderr=True)


def _is_debug_enabled(
    *,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    args = list(sys.argv[1:] if argv is None else argv)
    debug_from_flag = any(arg == "--debug" for arg in args)
    env = os.environ if environ is None else environ
    debug_from_env = env.get("CSSCLONE_DEBUG") == "1"
    return debug_from_flag or debug_from_env


def _resolve_inputs(raw: Sequence[str], messages: Messages) -> tuple[Inputs, list[str]]:
    inputs = split_inputs(raw)
    for number in inputs.ignored_numbers:
        err_console.print(ui.fmt_warning(messages.get("ignored-integer", value=number)))
    if inputs.min_set_size < 1:
        raise UsageError(
            messages.get("invalid-min-set-size", value=inputs.min_set_size)
        )
    paths = resolve_paths(inputs.paths)
    if not paths:
        raise UsageError(messages.get("no-path-error"))
    return inputs, paths


def collect_blocks(paths: Sequence[str], *, processes: int) -> list[DeclarationBlock]:
    """Parse every stylesheet, keeping the order of ``paths``."""
    if processes <= 1 or len(paths) < 2:
        return extract_blocks(paths)
    try:
        with ProcessPoolExecutor(max_workers=processes) as executor:
            per_file = list(executor.map(process_file, paths))
    except (OSError, RuntimeError, PermissionError) as e:
        err_console.print(ui.fmt_parallel_fallback(e))
        return extract_blocks(paths)
    return [block for blocks in per_file for block in blocks]


def _write_report_output(*, out: Path, content: str, label: str) -> None:
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, "utf-8")
    except OSError as e:
        err_console.print(
            ui.MARKER_INPUT_ERROR
            + "\n"
            + ui.fmt_report_write_failed(label=label, path=out, error=e)
        )
        sys.exit(ExitCode.INPUT_ERROR)


def _main_impl() -> None:
    ap = build_parser(__version__)
    args = ap.parse_intermixed_args()

    global console, err_console
    console = _make_console(no_color=args.no_color)
    err_console = _make_console(no_color=args.no_color, stderr=True)

    messages = Messages.from_config(args.lang)

    try:
        if args.processes < 1:
            raise UsageError(ui.ERR_INVALID_PROCESSES)
        inputs, paths = _resolve_inputs(args.inputs, messages)
    except UsageError as e:
        err_console.print(ui.fmt_usage_error(str(e)))
        sys.exit(ExitCode.USAGE_ERROR)

    json_out_path: Path | None = None
    if args.json_out:
        json_out_path = _validate_output_path(
            args.json_out,
            expected_suffix=".json",
            label="JSON",
            console=err_console,
            invalid_message=ui.fmt_invalid_output_extension,
        )

    try:
        if args.verbose:
            with err_console.status(ui.STATUS_PARSING, spinner="dots"):
                blocks = collect_blocks(paths, processes=args.processes)
        else:
            blocks = collect_blocks(paths, processes=args.processes)
    except ParseError as e:
        err_console.print(ui.fmt_input_error(messages.get("parse-error", error=e)))
        sys.exit(ExitCode.INPUT_ERROR)
    except FileProcessingError as e:
        err_console.print(ui.fmt_input_error(messages.get("file-error", error=e)))
        sys.exit(ExitCode.INPUT_ERROR)

    if args.verbose:
        with err_console.status(ui.STATUS_CLUSTERING, spinner="dots"):
            clusters = find_common_declarations(blocks, inputs.min_set_size)
    else:
        clusters = find_common_declarations(blocks, inputs.min_set_size)

    # Raw output: selectors may contain "[...]" which Rich would read as markup.
    console.out(to_text_report(clusters, messages), end="", highlight=False)

    if args.verbose:
        _print_summary(
            console=err_console,
            files_analyzed=len(paths),
            rules_extracted=len(blocks),
            nested_rules=sum(1 for block in blocks if block.is_nested),
            min_set_size=inputs.min_set_size,
            clusters_count=len(clusters),
        )

    if json_out_path:
        _write_report_output(
            out=json_out_path,
            content=to_json_report(
                clusters,
                {
                    "cssclone_version": __version__,
                    "min_set_size": inputs.min_set_size,
                    "files": len(paths),
                    "lang": messages.lang,
                },
            ),
            label="JSON",
        )
        err_console.print(ui.fmt_path(ui.INFO_JSON_REPORT_SAVED, json_out_path))


def main() -> None:
    try:
        _main_impl()
    except SystemExit:
        raise
    except Exception as e:
        err_console.print(
            ui.fmt_internal_error(
                e,
                issues_url=ISSUES_URL,
                debug=_is_debug_enabled(),
            )
        )
        sys.exit(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    main()
