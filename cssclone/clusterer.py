"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .extractor import DeclarationBlock


@dataclass(frozen=True, slots=True)
class SelectorRef:
    selector: str
    filepath: str
    line: int


@dataclass(slots=True)
class Cluster:
    declarations: tuple[str, ...]
    selectors: list[SelectorRef] = field(default_factory=list)
    _declaration_set: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._declaration_set = frozenset(self.declarations)

    def covers(self, declarations: Sequence[str]) -> bool:
        return self._declaration_set.issuperset(declarations)

    def has_selector(self, selector: str) -> bool:
        return any(ref.selector == selector for ref in self.selectors)

    def add(self, block: DeclarationBlock) -> None:
        """Add an occurrence unless the same selector is listed at that line."""
        if any(
            ref.selector == block.selector and ref.line == block.line
            for ref in self.selectors
        ):
            return
        self.selectors.append(
            SelectorRef(
                selector=block.selector, filepath=block.filepath, line=block.line
            )
        )

    def unique_selectors(self) -> list[str]:
        return list(dict.fromkeys(ref.selector for ref in self.selectors))


def is_comparable(a: DeclarationBlock, b: DeclarationBlock) -> bool:
    """
    Top-level rules compare with top-level rules; nested rules compare only
    with nested rules under the same chain of ancestor selectors.
    """
    if not a.is_nested and not b.is_nested:
        return True
    if a.is_nested and b.is_nested:
        return a.parent_selectors == b.parent_selectors
    return False


def _find_cluster(
    clusters: list[Cluster],
    intersection: Sequence[str],
    a: DeclarationBlock,
    b: DeclarationBlock,
) -> Cluster | None:
    for cluster in clusters:
        if (
            cluster.has_selector(a.selector) or cluster.has_selector(b.selector)
        ) and cluster.covers(intersection):
            return cluster
    return None


def find_common_declarations(
    blocks: Sequence[DeclarationBlock], min_set_size: int
) -> list[Cluster]:
    """
    Group blocks sharing at least ``min_set_size`` declarations.

    Every ordered pair of comparable blocks is intersected. A pair joins the
    first cluster that already lists one of its selectors and whose
    declarations include the intersection; otherwise it starts a new cluster
    holding exactly the intersection. A selector may therefore appear in
    several clusters with different declaration sets.
    """
    if min_set_size < 1:
        raise ValueError(f"min_set_size must be >= 1, got {min_set_size}")

    # Blocks of one comparability context, in list order. Restricting the
    # inner loop to a bucket keeps the pair order of the full all-pairs scan.
    buckets: dict[tuple[str, ...] | None, list[int]] = {}
    for index, block in enumerate(blocks):
        buckets.setdefault(block.context, []).append(index)

    declaration_sets = [frozenset(block.declarations) for block in blocks]
    clusters: list[Cluster] = []

    for index, block in enumerate(blocks):
        if len(block.declarations) < min_set_size:
            continue
        for other_index in buckets[block.context]:
            if other_index == index:
                continue
            other = blocks[other_index]
            other_set = declaration_sets[other_index]
            intersection = tuple(d for d in block.declarations if d in other_set)
            if len(intersection) < min_set_size:
                continue

            cluster = _find_cluster(clusters, intersection, block, other)
            if cluster is None:
                cluster = Cluster(declarations=intersection)
                clusters.append(cluster)
            cluster.add(block)
            cluster.add(other)

    return [cluster for cluster in clusters if len(cluster.selectors) >= 2]
