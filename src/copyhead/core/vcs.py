# vcs.py
# SPDX-License-Identifier: MIT
"""Git helpers: changed files of a push, repository owner, local commits.

Everything shells out to the ``git`` executable in the repository root.
"""

from __future__ import annotations

import re
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .errors import DiffError, PersistError
from .log import get_logger

log = get_logger(__name__)

__all__ = [
    "GitDiffProvider",
    "GitCommitPersister",
    "changed_files",
    "head_sha",
    "current_branch",
    "parse_remote_owner",
    "repo_owner_from_git",
]

_GH_HTTPS = re.compile(r"^https?://(?:[^@/]+@)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/#?]+?)(?:\.git)?(?:$|[?#/])")
_GH_SSH = re.compile(r"^(?:git@|ssh://git@)github\.com[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?$")
# Any other host: scheme://[user@]host[:port]/owner/repo or user@host:owner/repo
_GENERIC_URL = re.compile(r"^[a-z][a-z0-9+.-]*://(?:[^@/]+@)?[^/]+/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")
_GENERIC_SCP = re.compile(r"^(?:[^@/]+@)?[^:/]+:(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def _git(root: str | Path, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=str(root),
        check=False,
        capture_output=True,
        text=True,
    )


def _describe_failure(proc: subprocess.CompletedProcess[str]) -> str:
    detail = (proc.stderr or proc.stdout or "").strip()
    return detail or f"git exited with status {proc.returncode}"


def changed_files(root: str | Path, sha: str, commits: int) -> list[str]:
    """List paths changed across ``commits`` ancestors ending at ``sha``.

    Runs ``git diff --name-only <sha>~<commits>`` in ``root``.

    Raises:
        DiffError: If git is unavailable or the diff fails.
    """
    try:
        proc = _git(root, "diff", "--name-only", f"{sha}~{commits}")
    except OSError as exc:
        raise DiffError(str(exc)) from exc
    if proc.returncode != 0:
        raise DiffError(_describe_failure(proc))
    return [line for line in proc.stdout.split("\n") if line]


def head_sha(root: str | Path) -> str | None:
    try:
        proc = _git(root, "rev-parse", "HEAD")
    except OSError:
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


def current_branch(root: str | Path) -> str | None:
    """Return the checked-out branch name, or None when detached."""
    try:
        proc = _git(root, "symbolic-ref", "--quiet", "--short", "HEAD")
    except OSError:
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


def parse_remote_owner(url: str) -> str | None:
    """Extract the owner (user or organization) from a git remote URL.

    Supported forms include:
        - https://github.com/owner/repo(.git)
        - git@github.com:owner/repo(.git)
        - https://host/owner/repo and user@host:owner/repo for other hosts
    """
    u = url.strip()
    for pattern in (_GH_HTTPS, _GH_SSH, _GENERIC_URL, _GENERIC_SCP):
        m = pattern.match(u)
        if m:
            return m.group("owner")
    return None


def repo_owner_from_git(repo_root: str | Path) -> str | None:
    """
    Infer the repository owner from the ``origin`` remote in ``.git/config``.

    Falls back to the first remote with a URL when there is no ``origin``.

    Args:
        repo_root (str | Path): Repository root containing a ``.git`` folder.

    Returns:
        str | None: Owner name or ``None`` when it cannot be determined.
    """
    cfg_path = Path(repo_root) / ".git" / "config"
    try:
        text = cfg_path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return None

    current_remote: str | None = None
    origin_url: str | None = None
    fallback_url: str | None = None
    remote_header = re.compile(r'\s*\[remote\s+"([^"]+)"\]')
    section_header = re.compile(r"\s*\[")
    url_line = re.compile(r"^\s*url\s*=\s*([^\r\n]+)$")

    for line in text.splitlines():
        header = remote_header.match(line)
        if header:
            current_remote = header.group(1)
            continue
        if section_header.match(line):
            current_remote = None
            continue
        if current_remote is None:
            continue
        m = url_line.match(line)
        if not m:
            continue
        url_value = m.group(1).strip()
        if current_remote == "origin":
            origin_url = url_value
            break
        if fallback_url is None:
            fallback_url = url_value

    remote = origin_url or fallback_url
    if not remote:
        return None
    return parse_remote_owner(remote)


class GitDiffProvider:
    """:class:`~copyhead.core.interfaces.DiffProvider` backed by ``git diff``."""

    def changed_files(self, root: Path, sha: str, commits: int) -> list[str]:
        return changed_files(root, sha, commits)


class GitCommitPersister:
    """Commit updated files to a dedicated branch of the local repository.

    The branch is created (or reset) at the current ``HEAD``, the given paths
    are committed there, and the previous checkout is restored: the original
    branch, or the original commit when ``HEAD`` was detached.
    """

    def persist(self, root: Path, paths: Sequence[str], message: str, branch: str) -> bool:
        if not paths:
            return False
        original = current_branch(root)
        detached = None if original else head_sha(root)
        self._run(root, "checkout", "-B", branch)
        try:
            self._run(root, "add", "--", *paths)
            staged = _git(root, "diff", "--cached", "--quiet")
            if staged.returncode == 0:
                log.info("Nothing to commit on %s", branch)
                return False
            self._run(root, "commit", "--quiet", "-m", message)
            log.info("Committed %d file(s) to %s", len(paths), branch)
            return True
        finally:
            if original and original != branch:
                self._run(root, "checkout", "--quiet", original)
            elif detached:
                self._run(root, "checkout", "--quiet", "--detach", detached)

    @staticmethod
    def _run(root: Path, *args: str) -> None:
        try:
            proc = _git(root, *args)
        except OSError as exc:
            raise PersistError(str(exc)) from exc
        if proc.returncode != 0:
            raise PersistError(f"git {args[0]} failed: {_describe_failure(proc)}")
