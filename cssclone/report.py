"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence

from .clusterer import Cluster
from .contracts import REPORT_SCHEMA_VERSION
from .i18n import Messages


def display_path(filepath: str, cwd: str | None = None) -> str:
    base = os.getcwd() if cwd is None else cwd
    try:
        return os.path.relpath(filepath, base)
    except ValueError:
        # No relative path exists (e.g. another drive on Windows).
        return filepath


def to_text(cluster: Cluster, messages: Messages, *, cwd: str | None = None) -> str:
    selectors = ", ".join(cluster.unique_selectors())
    lines = [
        f"{selectors} {messages.get('share')} "
        f"{len(cluster.declarations)} {messages.get('rules')}."
    ]
    lines.extend(f"  {declaration}" for declaration in cluster.declarations)
    lines.extend(
        f"{ref.selector} -> {display_path(ref.filepath, cwd)}:{ref.line}"
        for ref in cluster.selectors
    )
    return "\n".join(lines)


def to_text_report(
    clusters: Sequence[Cluster],
    messages: Messages,
    *,
    cwd: str | None = None,
) -> str:
    """
    Serialize the console report.

    Clusters keep discovery order; each one is followed by a blank line.
    """
    if not clusters:
        return messages.get("no-duplication-found") + "\n"

    lines = [messages.get("duplicated-pattern")]
    for cluster in clusters:
        lines.append(to_text(cluster, messages, cwd=cwd))
        lines.append("")
    return "\n".join(lines) + "\n"


def to_json_report(
    clusters: Sequence[Cluster],
    meta: Mapping[str, object] | None = None,
    *,
    cwd: str | None = None,
) -> str:
    payload = {
        "report_schema_version": REPORT_SCHEMA_VERSION,
        "meta": dict(meta or {}),
        "cluster_count": len(clusters),
        "clusters": [
            {
                "declaration_count": len(cluster.declarations),
                "declarations": list(cluster.declarations),
                "selectors": [
                    {
                        "selector": ref.selector,
                        "file": display_path(ref.filepath, cwd),
                        "line": ref.line,
                    }
                    for ref in cluster.selectors
                ],
            }
            for cluster in clusters
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)
