# interfaces.py
# SPDX-License-Identifier: MIT
"""Shared data types and collaborator protocols.

Every value here is created per invocation and discarded afterwards; nothing
is shared between files or between runs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

__all__ = [
    "HeaderMatch",
    "FileRecord",
    "ChangeSet",
    "FileResult",
    "PushInfo",
    "RunResult",
    "DiffProvider",
    "Persister",
]


# -----------------------------------------------------------------------------
# Header engine values
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HeaderMatch:
    """An existing copyright header located in file content.

    Attributes:
        start (int): Offset of the first character of the header.
        end (int): Offset one past the last character of the header.
        year (str | None): Copyright year parsed from the header.
        block (bool): True when the header is a ``/* ... */`` block.
    """

    start: int
    end: int
    year: Optional[str] = None
    block: bool = False

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end


@dataclass(frozen=True, slots=True)
class FileRecord:
    """A single file held by the updater while it is processed.

    Attributes:
        path (str): Repository-relative POSIX path, e.g. ``src/main.c``.
        content (str): Full text content of the file.
    """

    path: str
    content: str

    @property
    def extension(self) -> str:
        name = self.path.rsplit("/", 1)[-1]
        if "." not in name.lstrip("."):
            return ""
        return name.rsplit(".", 1)[-1]


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Paths changed by the push being processed."""

    paths: frozenset[str] = frozenset()

    @classmethod
    def of(cls, paths: Iterable[str]) -> "ChangeSet":
        return cls(frozenset(p for p in paths if p))

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __len__(self) -> int:
        return len(self.paths)

    def sorted(self) -> list[str]:
        return sorted(self.paths)


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of processing one file.

    ``warning`` is set when reading, updating or writing the file failed; the
    file is then left as it was on disk.
    """

    path: str
    changed: bool = False
    warning: Optional[str] = None


# -----------------------------------------------------------------------------
# Run values
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PushInfo:
    """The push whose changes are being processed.

    Attributes:
        sha (str | None): Commit at the tip of the push.
        commits (int): Number of commits in the push.
        owner (str | None): Repository owner; the default copyright holder.
        branch (str | None): Branch the push landed on.
    """

    sha: Optional[str] = None
    commits: int = 1
    owner: Optional[str] = None
    branch: Optional[str] = None


@dataclass(slots=True)
class RunResult:
    """Final status of a run, suitable for printing as JSON."""

    ok: bool
    message: str
    license_id: Optional[str] = None
    warnings: list[str] = field(default_factory=list)
    changed_files: list[str] = field(default_factory=list)
    committed: bool = False

    def as_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "message": self.message,
            "license": self.license_id,
            "warnings": list(self.warnings),
            "changed_files": list(self.changed_files),
            "committed": self.committed,
        }


# -----------------------------------------------------------------------------
# Collaborators
# -----------------------------------------------------------------------------

@runtime_checkable
class DiffProvider(Protocol):
    """Lists the files changed across ``commits`` ancestors ending at ``sha``."""

    def changed_files(self, root: Path, sha: str, commits: int) -> list[str]:
        ...


@runtime_checkable
class Persister(Protocol):
    """Persists updated files back to the repository."""

    def persist(self, root: Path, paths: Sequence[str], message: str, branch: str) -> bool:
        """Return True when something was persisted."""
        ...
