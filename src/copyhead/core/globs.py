# globs.py
# SPDX-License-Identifier: MIT
"""Glob matching for repository-relative POSIX paths.

Supported syntax:

- ``*`` matches within one path segment, ``?`` one character of it.
- ``**`` as a whole segment matches any number of segments; ``**/`` also
  matches zero directories, so ``**/*.py`` matches ``setup.py``.
- ``[abc]``, ``[a-z]`` and ``[!abc]`` character classes.
- ``{a,b}`` alternation, which may nest and contain other wildcards.
- ``\\`` escapes the next character.

Wildcards do not match a leading ``.`` of a segment unless ``dot=True``, so
hidden files and directories are only matched by patterns naming them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache
from pathlib import Path

__all__ = [
    "compile_glob",
    "glob_match",
    "GlobSet",
    "filter_paths",
    "match_files",
]


def _find_brace_end(pattern: str, start: int) -> int:
    depth = 0
    i = start
    while i < len(pattern):
        c = pattern[i]
        if c == "\\":
            i += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _split_alternatives(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\" and i + 1 < len(body):
            current.append(body[i:i + 2])
            i += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == "," and depth == 0:
            parts.append("".join(current))
            current = []
            i += 1
            continue
        current.append(c)
        i += 1
    parts.append("".join(current))
    return parts


def _translate(pattern: str, dot: bool, seg_start: bool = True) -> str:
    out: list[str] = []
    i, n = 0, len(pattern)
    no_dot = "" if dot else r"(?!\.)"
    while i < n:
        c = pattern[i]
        at_seg_start = seg_start if i == 0 else pattern[i - 1] == "/"
        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            whole_segment = at_seg_start and (j == n or pattern[j] == "/")
            if j - i >= 2 and whole_segment:
                if j < n:
                    out.append(rf"(?:{no_dot}[^/]*/)*")
                    i = j + 1
                else:
                    out.append(rf"(?:{no_dot}[^/]*(?:/{no_dot}[^/]*)*)?")
                    i = j
                continue
            out.append(f"{no_dot}[^/]*" if at_seg_start else "[^/]*")
            i = j
        elif c == "?":
            out.append(f"{no_dot}[^/]" if at_seg_start else "[^/]")
            i += 1
        elif c == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                out.append(r"\[")
                i += 1
                continue
            body = pattern[i + 1:j]
            if body[:1] in ("!", "^"):
                body = "^" + body[1:]
            body = body.replace("\\", "\\\\")
            out.append(f"(?!/)[{body}]")
            i = j + 1
        elif c == "{":
            end = _find_brace_end(pattern, i)
            if end < 0:
                out.append(r"\{")
                i += 1
                continue
            alternatives = _split_alternatives(pattern[i + 1:end])
            out.append(
                "(?:" + "|".join(_translate(alt, dot, at_seg_start) for alt in alternatives) + ")"
            )
            i = end + 1
        elif c == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out)


def _strip_dot_slash(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


def _normalize(path: str) -> str:
    return _strip_dot_slash(path.replace("\\", "/"))


@lru_cache(maxsize=512)
def compile_glob(pattern: str, dot: bool = False) -> re.Pattern[str]:
    """Compile a glob into an anchored regular expression over POSIX paths.

    Backslash escapes the next character in the pattern; only the paths
    being matched have their separators normalized.
    """
    return re.compile(rf"\A{_translate(_strip_dot_slash(pattern), dot)}\Z")


def glob_match(path: str, pattern: str, dot: bool = False) -> bool:
    return compile_glob(pattern, dot).match(_normalize(path)) is not None


class GlobSet:
    """Include/ignore glob lists evaluated together.

    A path is selected when it matches any include glob and no ignore glob.
    """

    def __init__(self, globs: Iterable[str], ignore: Iterable[str] | None = None) -> None:
        self.globs = [g for g in globs if g]
        self.ignore = [g for g in (ignore or ()) if g]
        self._include = [compile_glob(g) for g in self.globs]
        self._exclude = [compile_glob(g) for g in self.ignore]

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return self.matches(path)

    def matches(self, path: str) -> bool:
        rel = _normalize(path)
        if not any(rx.match(rel) for rx in self._include):
            return False
        return not any(rx.match(rel) for rx in self._exclude)


def filter_paths(
    paths: Iterable[str],
    globs: Sequence[str],
    ignore: Sequence[str] | None = None,
) -> list[str]:
    """Keep ``paths`` that match a glob and no ignore pattern, in input order."""
    selector = GlobSet(globs, ignore)
    seen: set[str] = set()
    out: list[str] = []
    for path in paths:
        if path in seen or not selector.matches(path):
            continue
        seen.add(path)
        out.append(path)
    return out


def match_files(
    root: str | Path,
    globs: Sequence[str],
    ignore: Sequence[str] | None = None,
    *,
    respect_gitignore: bool = True,
) -> list[str]:
    """Walk ``root`` and return sorted relative paths selected by the globs."""
    from ..sources.fs import iter_repo_files  # local import to avoid cycles

    selector = GlobSet(globs, ignore)
    return sorted(
        rel for rel in iter_repo_files(root, respect_gitignore=respect_gitignore)
        if selector.matches(rel)
    )
