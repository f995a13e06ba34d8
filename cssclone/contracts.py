"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

DEFAULT_MIN_SET_SIZE: Final = 3
REPORT_SCHEMA_VERSION: Final = "1.0"


class ExitCode(IntEnum):
    SUCCESS = 0
    USAGE_ERROR = 1
    INPUT_ERROR = 2
    INTERNAL_ERROR = 5


REPOSITORY_URL: Final = "https://github.com/orenlab/cssclone"
ISSUES_URL: Final = "https://github.com/orenlab/cssclone/issues"

EXIT_CODE_DESCRIPTIONS: Final[tuple[tuple[ExitCode, str], ...]] = (
    (ExitCode.SUCCESS, "success (also when no duplication is found)"),
    (ExitCode.USAGE_ERROR, "usage error (no stylesheet paths, invalid set size)"),
    (
        ExitCode.INPUT_ERROR,
        "input error (unreadable or malformed stylesheet, unwritable report)",
    ),
    (
        ExitCode.INTERNAL_ERROR,
        "internal error (unexpected exception; please report)",
    ),
)


def cli_help_epilog() -> str:
    lines = ["Exit codes"]
    for code, description in EXIT_CODE_DESCRIPTIONS:
        lines.append(f"  - {int(code)} - {description}")
    lines.extend(
        [
            "",
            f"Repository: {REPOSITORY_URL}",
            f"Issues: {ISSUES_URL}",
        ]
    )
    return "\n".join(lines)
