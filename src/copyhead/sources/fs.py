# fs.py
# SPDX-License-Identifier: MIT
"""Filesystem helpers for repository traversal and text file I/O."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.globs import compile_glob
from ..core.interfaces import FileRecord

__all__ = [
    "DEFAULT_SKIP_DIRS",
    "GitignoreRule",
    "GitignoreMatcher",
    "iter_repo_files",
    "collect_repo_files",
    "read_record",
    "write_text",
]

# Version control metadata; never part of the working tree proper.
DEFAULT_SKIP_DIRS: frozenset[str] = frozenset({".git", ".hg", ".svn"})


@dataclass(frozen=True)
class GitignoreRule:
    pattern: str  # cleaned pattern, leading '/' kept when anchored
    negate: bool  # True if the rule began with '!'
    dir_only: bool  # True if the rule ended with '/'
    base: str  # POSIX path (relative to repo root) of the .gitignore's directory

    @property
    def anchored(self) -> bool:
        return self.pattern.startswith("/") or "/" in self.pattern

    def matches(self, subpath: str) -> bool:
        pat = self.pattern.lstrip("/")
        if not self.anchored:
            pat = "**/" + pat
        return compile_glob(pat, dot=True).match(subpath) is not None


class GitignoreMatcher:
    """Evaluator for .gitignore-style rules.

    The matcher maintains an ordered list of rules. The last matching rule wins.
    """

    def __init__(self, rules: Sequence[GitignoreRule] | None = None) -> None:
        self._rules: list[GitignoreRule] = list(rules or [])

    def with_additional(self, extra: Sequence[GitignoreRule]) -> GitignoreMatcher:
        """Return a new matcher that appends extra rules after current ones."""
        return GitignoreMatcher([*self._rules, *extra])

    @staticmethod
    def _rel_to_base(base: str, rel: str) -> str | None:
        if base == ".":
            return rel
        if rel.startswith(base + "/"):
            return rel[len(base) + 1:]
        return None

    def ignores(self, rel: str, is_dir: bool) -> bool:
        """Return True if ``rel`` (POSIX path relative to repo root) is ignored."""
        # Ignored parent directories are pruned by the walker, so only the
        # path itself is checked here.
        ignored = False
        rel = rel.rstrip("/")
        for rule in self._rules:
            if rule.dir_only and not is_dir:
                continue
            sub = self._rel_to_base(rule.base, rel)
            if not sub:
                continue
            if rule.matches(sub):
                ignored = not rule.negate
        return ignored


def _parse_gitignore_lines(lines: Iterable[str], base: str) -> list[GitignoreRule]:
    """Parse .gitignore lines into rules anchored at base."""
    rules: list[GitignoreRule] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            continue
        if line.startswith("\\#"):
            line = line[1:]
        elif line.lstrip().startswith("#"):
            continue
        negate = False
        if line.startswith("\\!"):
            line = line[1:]
        elif line.startswith("!"):
            negate = True
            line = line[1:]
        # Trailing spaces only count when escaped.
        if not line.endswith("\\ "):
            line = line.rstrip(" ")
        line = line.replace("\\ ", " ")
        dir_only = line.endswith("/")
        anchored = line.startswith("/")
        parts = [part for part in line.split("/") if part not in ("", ".")]
        pat = "/".join(parts)
        if not pat:
            continue
        if anchored:
            pat = "/" + pat
        rules.append(GitignoreRule(pattern=pat, negate=negate, dir_only=dir_only, base=base))
    return rules


def _load_gitignore_file(path: Path, base: str) -> list[GitignoreRule]:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            return _parse_gitignore_lines(f.readlines(), base)
    except OSError:
        return []


def iter_repo_files(
    root: os.PathLike[str] | str,
    *,
    follow_symlinks: bool = False,
    respect_gitignore: bool = True,
    skip_hidden: bool = True,
) -> Iterator[str]:
    """Yield repository-relative POSIX paths of regular files under ``root``.

    Args:
        root: Repository directory to traverse.
        follow_symlinks: Whether to descend into symlinked directories and
            yield symlinked files.
        respect_gitignore: Honor .gitignore files while walking.
        skip_hidden: Skip dotfiles and dot-directories.

    Yields:
        str: Relative paths such as ``src/main.c``, in a deterministic order.

    Raises:
        NotADirectoryError: If ``root`` is not a directory.
    """
    walk_root = Path(root)
    if not walk_root.is_dir():
        raise NotADirectoryError(walk_root)

    matchers: dict[str, GitignoreMatcher] = {".": GitignoreMatcher()}

    for dirpath, dirnames, filenames in os.walk(walk_root, topdown=True, followlinks=follow_symlinks):
        dirnames.sort(key=str.casefold)
        filenames.sort(key=str.casefold)
        dpath = Path(dirpath)
        base = dpath.relative_to(walk_root).as_posix()
        matcher = matchers.get(base, GitignoreMatcher())

        if respect_gitignore:
            gi = dpath / ".gitignore"
            if gi.is_file():
                rules = _load_gitignore_file(gi, base)
                if rules:
                    matcher = matcher.with_additional(rules)

        prefix = "" if base == "." else base + "/"

        for name in list(dirnames):
            rel = prefix + name
            if (
                (skip_hidden and name.startswith("."))
                or name in DEFAULT_SKIP_DIRS
                or (not follow_symlinks and (dpath / name).is_symlink())
                or (respect_gitignore and matcher.ignores(rel, is_dir=True))
            ):
                dirnames.remove(name)
                continue
            matchers[rel] = matcher

        for fname in filenames:
            if skip_hidden and fname.startswith("."):
                continue
            rel = prefix + fname
            if respect_gitignore and matcher.ignores(rel, is_dir=False):
                continue
            try:
                st = os.stat(dpath / fname, follow_symlinks=follow_symlinks)
            except OSError:
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            yield rel


def collect_repo_files(*args, **kwargs) -> list[str]:
    """Return a list of paths produced by iter_repo_files.

    This is a convenience wrapper useful in tests.
    """
    return list(iter_repo_files(*args, **kwargs))


def read_record(root: str | Path, rel: str) -> FileRecord:
    """Read ``rel`` under ``root`` as UTF-8 text with line endings untouched."""
    with (Path(root) / rel).open("r", encoding="utf-8", newline="") as fh:
        return FileRecord(path=rel, content=fh.read())


def write_text(root: str | Path, rel: str, content: str) -> None:
    """Write ``content`` to ``rel`` under ``root`` without newline translation."""
    with (Path(root) / rel).open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
