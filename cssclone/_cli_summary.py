"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import ui_messages as ui


def _summary_value_style(*, label: str, value: int) -> str:
    if value == 0:
        return "dim"
    if label == ui.SUMMARY_LABEL_CLUSTERS:
        return "bold yellow"
    return "bold"


def _build_summary_rows(
    *,
    files_analyzed: int,
    rules_extracted: int,
    nested_rules: int,
    min_set_size: int,
    clusters_count: int,
) -> list[tuple[str, int]]:
    return [
        (ui.SUMMARY_LABEL_FILES, files_analyzed),
        (ui.SUMMARY_LABEL_RULES, rules_extracted),
        (ui.SUMMARY_LABEL_NESTED, nested_rules),
        (ui.SUMMARY_LABEL_MIN_SET_SIZE, min_set_size),
        (ui.SUMMARY_LABEL_CLUSTERS, clusters_count),
    ]


def _build_summary_table(rows: list[tuple[str, int]]) -> Table:
    summary_table = Table(
        title=ui.SUMMARY_TITLE,
        show_header=True,
        width=ui.CLI_LAYOUT_WIDTH,
    )
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    for label, value in rows:
        summary_table.add_row(
            label,
            Text(str(value), style=_summary_value_style(label=label, value=value)),
        )
    return summary_table


def _print_summary(
    *,
    console: Console,
    files_analyzed: int,
    rules_extracted: int,
    nested_rules: int,
    min_set_size: int,
    clusters_count: int,
) -> None:
    rows = _build_summary_rows(
        files_analyzed=files_analyzed,
        rules_extracted=rules_extracted,
        nested_rules=nested_rules,
        min_set_size=min_set_size,
        clusters_count=clusters_count,
    )
    console.print(_build_summary_table(rows))
