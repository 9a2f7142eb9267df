"""Discovery of ``.vue`` documents under files and directories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger

VUE_SUFFIX = ".vue"

_EXCLUDED_DIRS = {
    "node_modules",
    ".git",
    ".hg",
    ".svn",
    ".nuxt",
    ".output",
    "__pycache__",
}

logger = get_logger("scanner")


@dataclass
class IgnoreRule:
    """A gitignore-style exclusion pattern from .vue-analyzer.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rules(patterns: Iterable[str]) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    for raw in patterns:
        pattern = raw.strip()
        if not pattern or pattern.startswith("#"):
            continue
        directory_only = pattern.endswith("/")
        if directory_only:
            pattern = pattern[:-1]
        anchored = pattern.startswith("/")
        if anchored:
            pattern = pattern[1:]
        rules.append(
            IgnoreRule(
                pattern=pattern,
                directory_only=directory_only,
                anchored=anchored,
                has_slash="/" in pattern,
            )
        )
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _iter_vue_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in dirnames:
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = sorted(kept)

        for filename in sorted(filenames):
            if not filename.endswith(VUE_SUFFIX):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


class RepoScanner:
    """Expands CLI targets into the list of documents to analyse."""

    def __init__(self, exclude_paths: Sequence[str] | None = None) -> None:
        self._rules = build_ignore_rules(exclude_paths or [])

    def scan(self, targets: Sequence[str | Path]) -> List[Path]:
        """Return files in target order; directories expand to their sorted ``.vue`` files.

        Explicit file targets are kept even when missing so the per-file
        analysis can report them.
        """
        files: List[Path] = []
        seen: set[Path] = set()
        for target in targets:
            path = Path(target).expanduser()
            if path.is_dir():
                found = list(_iter_vue_files(path, self._rules))
                logger.debug("Found %d %s files under %s", len(found), VUE_SUFFIX, path)
            else:
                found = [path]
            for item in found:
                if item not in seen:
                    seen.add(item)
                    files.append(item)
        return files


__all__ = ["IgnoreRule", "RepoScanner", "VUE_SUFFIX", "build_ignore_rules"]
