"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import tinycss2
from tinycss2.ast import AtRule, Declaration, Node, QualifiedRule

from .errors import FileProcessingError, ParseError
from .flatten import combine_selectors, join_selectors, split_selector_list

# =========================
# Data structures
# =========================


@dataclass(frozen=True, slots=True)
class DeclarationBlock:
    selector: str
    declarations: tuple[str, ...]
    filepath: str
    line: int
    is_nested: bool = False
    parent_selectors: tuple[str, ...] = ()

    @property
    def context(self) -> tuple[str, ...] | None:
        """Comparability key: ``None`` for top-level rules."""
        return self.parent_selectors if self.is_nested else None


# =========================
# Helpers
# =========================

# Group rules whose style rules apply to the enclosing context unchanged.
CONDITIONAL_AT_RULES = frozenset(
    {"container", "document", "layer", "media", "scope", "supports"}
)

_PARSE_OPTIONS = {"skip_comments": True, "skip_whitespace": True}


def format_declaration(declaration: Declaration) -> str:
    value = tinycss2.serialize(declaration.value).strip()
    text = f"{declaration.name}: {value}"
    if declaration.important:
        text += " !important"
    return text


def _is_conditional(node: Node) -> bool:
    return (
        isinstance(node, AtRule)
        and node.lower_at_keyword in CONDITIONAL_AT_RULES
        and node.content is not None
    )


class _BlockCollector:
    __slots__ = ("blocks", "filepath")

    def __init__(self, filepath: str) -> None:
        self.filepath = filepath
        self.blocks: list[DeclarationBlock] = []

    def _check(self, node: Node) -> None:
        if node.type == "error":
            raise ParseError(
                node.message,
                filepath=self.filepath,
                line=node.source_line,
                column=node.source_column,
            )

    def visit_rule_list(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self._check(node)
            if isinstance(node, QualifiedRule):
                self.visit_style_rule(node, parents=[], ancestors=())
            elif _is_conditional(node):
                self.visit_rule_list(
                    tinycss2.parse_rule_list(node.content, **_PARSE_OPTIONS)
                )

    def visit_style_rule(
        self,
        rule: QualifiedRule,
        *,
        parents: Sequence[str],
        ancestors: tuple[str, ...],
    ) -> None:
        written = split_selector_list(rule.prelude)
        self._visit_contents(
            tinycss2.parse_blocks_contents(rule.content, **_PARSE_OPTIONS),
            selectors=combine_selectors(parents, written),
            line=rule.source_line,
            ancestors=ancestors,
            chain=(*ancestors, join_selectors(written)),
            emit_empty=True,
        )

    def _visit_contents(
        self,
        contents: Iterable[Node],
        *,
        selectors: list[str],
        line: int,
        ancestors: tuple[str, ...],
        chain: tuple[str, ...],
        emit_empty: bool,
    ) -> None:
        # dict keeps first-seen order while collapsing repeats
        declarations: dict[str, None] = {}
        children: list[Node] = []
        for node in contents:
            self._check(node)
            if isinstance(node, Declaration):
                declarations.setdefault(format_declaration(node))
            else:
                children.append(node)

        if declarations or emit_empty:
            self.blocks.append(
                DeclarationBlock(
                    selector=join_selectors(selectors),
                    declarations=tuple(declarations),
                    filepath=self.filepath,
                    line=line,
                    is_nested=bool(ancestors),
                    parent_selectors=ancestors,
                )
            )

        for child in children:
            if isinstance(child, QualifiedRule):
                self.visit_style_rule(child, parents=selectors, ancestors=chain)
            elif _is_conditional(child):
                # Bare declarations inside a nested @media apply to the
                # enclosing selector; they are nested under it.
                self._visit_contents(
                    tinycss2.parse_blocks_contents(child.content, **_PARSE_OPTIONS),
                    selectors=selectors,
                    line=child.source_line,
                    ancestors=chain,
                    chain=chain,
                    emit_empty=False,
                )


# =========================
# Public API
# =========================


def extract_blocks_from_source(source: str, filepath: str) -> list[DeclarationBlock]:
    """
    Convert one stylesheet into its declaration blocks.

    Nested rules are flattened while the rule tree is walked, so every block
    keeps the source line of the rule as the author wrote it. Blocks come in
    pre-order: a rule precedes the rules nested inside it.

    Raises:
        ParseError: the stylesheet contains a syntax error.
    """
    collector = _BlockCollector(filepath)
    collector.visit_rule_list(tinycss2.parse_stylesheet(source, **_PARSE_OPTIONS))
    return collector.blocks


def read_stylesheet(filepath: str) -> str:
    try:
        source = Path(filepath).read_text("utf-8")
    except UnicodeDecodeError as e:
        raise FileProcessingError(f"Encoding error: {filepath}: {e}") from e
    except OSError as e:
        raise FileProcessingError(f"Cannot read file: {filepath}: {e}") from e
    return source.removeprefix("\ufeff")


def process_file(filepath: str) -> list[DeclarationBlock]:
    return extract_blocks_from_source(read_stylesheet(filepath), filepath)


def extract_blocks(paths: Iterable[str]) -> list[DeclarationBlock]:
    """Extract blocks from every file, in argument order. Fails on the first error."""
    blocks: list[DeclarationBlock] = []
    for filepath in paths:
        blocks.extend(process_file(filepath))
    return blocks
