from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from cssclone.extractor import DeclarationBlock

CssWriter = Callable[[str, str], Path]
BlockFactory = Callable[..., DeclarationBlock]


@pytest.fixture
def write_css(tmp_path: Path) -> CssWriter:
    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, "utf-8")
        return path

    return _write


@pytest.fixture
def block_factory() -> BlockFactory:
    def _make(
        selector: str,
        *declarations: str,
        line: int = 1,
        filepath: str = "/repo/a.css",
        parents: tuple[str, ...] = (),
    ) -> DeclarationBlock:
        return DeclarationBlock(
            selector=selector,
            declarations=tuple(declarations),
            filepath=filepath,
            line=line,
            is_nested=bool(parents),
            parent_selectors=parents,
        )

    return _make
