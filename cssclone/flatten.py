"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import tinycss2
from tinycss2.ast import FunctionBlock, Node

NESTING_SELECTOR = "&"


def normalize_space(text: str) -> str:
    return " ".join(text.split())


def _is_literal(token: Node, value: str) -> bool:
    return token.type == "literal" and token.value == value


def _split_tokens(tokens: Iterable[Node]) -> list[list[Node]]:
    parts: list[list[Node]] = [[]]
    for token in tokens:
        if _is_literal(token, ","):
            parts.append([])
        else:
            parts[-1].append(token)
    return parts


def split_selector_list(prelude: Sequence[Node]) -> list[str]:
    """
    Split a rule prelude into its selectors.

    Only top-level commas separate selectors: commas inside functional
    pseudo-classes or attribute brackets are nested token blocks.
    """
    selectors: list[str] = []
    for part in _split_tokens(prelude):
        text = normalize_space(tinycss2.serialize(part))
        if text:
            selectors.append(text)
    return selectors


def _contains_nesting(tokens: Iterable[Node]) -> bool:
    for token in tokens:
        if _is_literal(token, NESTING_SELECTOR):
            return True
        if isinstance(token, FunctionBlock) and _contains_nesting(token.arguments):
            return True
    return False


def _substitute(tokens: Iterable[Node], parent: str) -> str:
    chunks: list[str] = []
    for token in tokens:
        if _is_literal(token, NESTING_SELECTOR):
            chunks.append(parent)
        elif isinstance(token, FunctionBlock) and _contains_nesting(token.arguments):
            name = tinycss2.serialize_identifier(token.name)
            chunks.append(f"{name}({_substitute(token.arguments, parent)})")
        else:
            chunks.append(tinycss2.serialize([token]))
    return "".join(chunks)


def _combine_one(parent: str, child: str) -> str:
    child_tokens = tinycss2.parse_component_value_list(child, skip_comments=True)
    if _contains_nesting(child_tokens):
        return normalize_space(_substitute(child_tokens, parent))
    return f"{parent} {child}"


def combine_selectors(parents: Sequence[str], children: Sequence[str]) -> list[str]:
    """Resolve nested selectors against their enclosing selector list."""
    if not parents:
        return list(children)
    return [_combine_one(parent, child) for parent in parents for child in children]


def join_selectors(selectors: Iterable[str]) -> str:
    return ", ".join(selectors)
