"""Helper utilities for writing throwaway single-file components in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class SfcBuilder:
    """Writes ``.vue`` documents under a temporary project root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> list[Path]:
        """Write `path -> contents` entries and return their paths in order."""
        written: list[Path] = []
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")
            written.append(path)
        return written

    def component(self, relative: str, content: str) -> Path:
        """Write a single document and return its path."""
        return self.write({relative: content})[0]


__all__ = ["SfcBuilder"]
