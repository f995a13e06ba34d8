from __future__ import annotations

import platform
import shlex
import sys
import traceback
from pathlib import Path

from rich.markup import escape

from . import __version__
from .contracts import ISSUES_URL

MARKER_USAGE_ERROR = "[error]USAGE ERROR:[/error]"
MARKER_INPUT_ERROR = "[error]INPUT ERROR:[/error]"
MARKER_INTERNAL_ERROR = "[error]INTERNAL ERROR:[/error]"

HELP_VERSION = "Print the CSSClone version and exit."
HELP_INPUTS = (
    "Optional minimum number of shared declarations (first integer argument, "
    "default 3) followed by stylesheet files or directories."
)
HELP_LANG = "Message language: auto follows the system locale (env: CSSCLONE_LANG)."
HELP_PROCESSES = "Number of worker processes used to parse stylesheets."
HELP_JSON = "Also write a JSON report to FILE."
HELP_NO_COLOR = "Disable ANSI colors in diagnostics."
HELP_VERBOSE = "Print an analysis summary to stderr."
HELP_DEBUG = "Print debug details (traceback and environment) on internal errors."

SUMMARY_TITLE = "Analysis Summary"
CLI_LAYOUT_WIDTH = 40
SUMMARY_LABEL_FILES = "Stylesheets analyzed"
SUMMARY_LABEL_RULES = "Rules extracted"
SUMMARY_LABEL_NESTED = "Nested rules"
SUMMARY_LABEL_MIN_SET_SIZE = "Minimum set size"
SUMMARY_LABEL_CLUSTERS = "Duplicate clusters"

STATUS_PARSING = "[bold green]Parsing stylesheets..."
STATUS_CLUSTERING = "[bold green]Comparing declaration blocks..."

INFO_JSON_REPORT_SAVED = "[info]JSON report saved:[/info] {path}"

WARN_PARALLEL_FALLBACK = (
    "[warning]Parallel processing unavailable, "
    "falling back to sequential: {error}[/warning]"
)

ERR_INVALID_PROCESSES = "Number of processes must be a positive integer."
ERR_INVALID_OUTPUT_EXT = (
    "[error]Invalid {label} output extension: {path} "
    "(expected {expected_suffix}).[/error]"
)
ERR_REPORT_WRITE_FAILED = (
    "[error]Failed to write {label} report: {path} ({error}).[/error]"
)


def version_output(version: str) -> str:
    return f"CSSClone {version}"


def fmt_invalid_output_extension(
    *, label: str, path: Path, expected_suffix: str
) -> str:
    return ERR_INVALID_OUTPUT_EXT.format(
        label=label, path=escape(str(path)), expected_suffix=expected_suffix
    )


def fmt_report_write_failed(*, label: str, path: Path, error: object) -> str:
    return ERR_REPORT_WRITE_FAILED.format(
        label=label, path=escape(str(path)), error=escape(str(error))
    )


def fmt_path(template: str, path: Path) -> str:
    return template.format(path=escape(str(path)))


def fmt_parallel_fallback(error: object) -> str:
    return WARN_PARALLEL_FALLBACK.format(error=escape(str(error)))


def fmt_warning(message: str) -> str:
    return f"[warning]{escape(message)}[/warning]"


def fmt_usage_error(message: str) -> str:
    return f"{MARKER_USAGE_ERROR}\n{escape(message)}"


def fmt_input_error(message: str) -> str:
    return f"{MARKER_INPUT_ERROR}\n{escape(message)}"


def fmt_internal_error(
    error: BaseException,
    *,
    issues_url: str = ISSUES_URL,
    debug: bool = False,
) -> str:
    bug_report_url = issues_url.rstrip("/") + "/new"
    error_name = type(error).__name__
    error_text = str(error).strip() or "<no message>"
    lines = [
        MARKER_INTERNAL_ERROR,
        "Unexpected exception.",
        escape(f"Reason: {error_name}: {error_text}"),
        "",
        "Next steps:",
        "- Re-run with --debug to include a traceback.",
        f"- If this is reproducible, open an issue: {bug_report_url}.",
        (
            "- Attach: command line, CSSClone version, Python version, "
            "and the stylesheet that triggers the error if possible."
        ),
    ]
    if not debug:
        return "\n".join(lines)

    traceback_lines = traceback.format_exception(
        type(error), error, error.__traceback__
    )
    command_line = shlex.join(sys.argv)
    lines.extend(
        [
            "",
            "DEBUG DETAILS",
            f"Platform: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            f"CSSClone: {__version__}",
            escape(f"Command: {command_line}"),
            escape(f"CWD: {Path.cwd()}"),
            "Traceback:",
            escape("".join(traceback_lines).rstrip()),
        ]
    )
    return "\n".join(lines)
