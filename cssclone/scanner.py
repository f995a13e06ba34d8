"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .contracts import DEFAULT_MIN_SET_SIZE

DEFAULT_EXCLUDES = (
    ".git",
    ".venv",
    "venv",
    "node_modules",
    "bower_components",
    "__pycache__",
    "dist",
    "build",
    ".tox",
)

STYLESHEET_SUFFIXES = frozenset({".css"})

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class Inputs:
    min_set_size: int
    paths: list[str] = field(default_factory=list)
    ignored_numbers: list[str] = field(default_factory=list)


def parse_int(arg: str) -> int | None:
    if _INTEGER_RE.fullmatch(arg) is None:
        return None
    return int(arg, 10)


def split_inputs(
    args: Sequence[str], *, default_min_set_size: int = DEFAULT_MIN_SET_SIZE
) -> Inputs:
    """
    Separate the minimum set size from stylesheet paths.

    The first integer argument is the minimum set size, later integers are
    reported as ignored, everything else is a path.
    """
    min_set_size: int | None = None
    paths: list[str] = []
    ignored: list[str] = []
    for arg in args:
        number = parse_int(arg)
        if number is None:
            paths.append(arg)
        elif min_set_size is None:
            min_set_size = number
        else:
            ignored.append(arg)
    return Inputs(
        min_set_size=default_min_set_size if min_set_size is None else min_set_size,
        paths=paths,
        ignored_numbers=ignored,
    )


def iter_css_files(
    root: str | Path, excludes: Iterable[str] = DEFAULT_EXCLUDES
) -> Iterator[str]:
    rootp = Path(root).resolve()
    excluded = set(excludes)
    for p in sorted(rootp.rglob("*")):
        if p.suffix.lower() not in STYLESHEET_SUFFIXES or not p.is_file():
            continue
        if excluded.intersection(p.relative_to(rootp).parts):
            continue
        yield str(p)


def resolve_paths(args: Iterable[str]) -> list[str]:
    """
    Resolve path arguments to absolute stylesheet paths.

    Directories expand to the stylesheets below them. Missing files are kept
    so that reading them fails loudly later.
    """
    resolved: dict[str, None] = {}
    for arg in args:
        p = Path(arg).expanduser().resolve()
        if p.is_dir():
            for fp in iter_css_files(p):
                resolved.setdefault(fp)
        else:
            resolved.setdefault(str(p))
    return list(resolved)
