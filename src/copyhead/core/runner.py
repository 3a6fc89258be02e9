# runner.py
# SPDX-License-Identifier: MIT
"""Orchestration of a copyright header run over one repository.

:func:`fix_copyright_license_header` selects files and folds the header
updater over them. :func:`run` wraps it with license resolution, the license
file check and optional persistence of the result.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from ..sources.fs import read_record, write_text
from .concurrency import Executor, ExecutorConfig, resolve_executor_config
from .config import CopyheadConfig, PersistStrategy
from .errors import ConfigurationError, DiffError, PersistError, UnknownLicenseError
from .globs import filter_paths, match_files
from .header import license_header, process_file
from .interfaces import ChangeSet, DiffProvider, FileResult, Persister, PushInfo, RunResult
from .licenses import ensure_license, find_license, license_matcher, read_license_file
from .log import get_logger
from .spdx import lookup
from .vcs import GitCommitPersister, GitDiffProvider, current_branch, head_sha, repo_owner_from_git

log = get_logger(__name__)

__all__ = [
    "GENERATED_BRANCH_PREFIX",
    "HeaderRun",
    "fix_copyright_license_header",
    "resolve_push",
    "run",
]

# Branches created by copyhead itself; pushes to them are never processed.
GENERATED_BRANCH_PREFIX = "copyhead/"


@dataclass(frozen=True)
class _HeaderTask:
    """Per-file unit of work; picklable so process pools can run it."""

    root: str
    header: str
    block_comment: bool
    only_changed: bool
    changes: ChangeSet

    def __call__(self, path: str) -> FileResult:
        try:
            record = read_record(self.root, path)
            updated = process_file(
                record,
                self.header,
                block_comment=self.block_comment,
                update_year=self.only_changed or path in self.changes,
            )
            if updated == record.content:
                return FileResult(path)
            write_text(self.root, path, updated)
            return FileResult(path, changed=True)
        except Exception as exc:  # noqa: BLE001
            return FileResult(path, warning=f"Failed to process '{path}': {exc}")


@dataclass(slots=True)
class HeaderRun:
    """Outcome of the header phase: warnings plus the files rewritten."""

    warnings: list[str]
    changed_files: list[str]


def _changed_files(
    root: Path,
    push: PushInfo,
    diff_provider: DiffProvider,
) -> list[str]:
    if not push.sha:
        raise DiffError("no commit to diff against")
    return diff_provider.changed_files(root, push.sha, push.commits)


def _run_headers(
    cfg: CopyheadConfig,
    root: Path,
    push: PushInfo,
    *,
    diff_provider: Optional[DiffProvider] = None,
    executor_cfg: Optional[ExecutorConfig] = None,
) -> HeaderRun:
    hc = cfg.header
    warnings: list[str] = []
    if not hc.license:
        warnings.append("No license configured")
        return HeaderRun(warnings, [])
    lookup(hc.license)
    holder = hc.copyright_holder or push.owner
    if not holder:
        raise ConfigurationError("No copyright holder configured and the repository owner is unknown")

    file_globs = hc.resolved_file_globs()
    provider = diff_provider or GitDiffProvider()
    try:
        changes = ChangeSet.of(_changed_files(root, push, provider))
    except Exception as exc:  # noqa: BLE001
        warnings.append(f"Failed to get list of changed files: {exc}")
        changes = ChangeSet()

    if hc.only_changed:
        files = filter_paths(changes.sorted(), file_globs, hc.ignore_globs)
    else:
        files = match_files(root, file_globs, hc.ignore_globs, respect_gitignore=hc.respect_gitignore)
    if not files:
        warnings.append("No matching files found")
        return HeaderRun(warnings, [])
    warnings.append(f"Matched {len(files)} files")
    log.info("Matched %d files under %s", len(files), root)

    header = license_header(holder, hc.license)
    task = _HeaderTask(
        root=str(root),
        header=header,
        block_comment=hc.block_comment,
        only_changed=hc.only_changed,
        changes=changes,
    )

    results: list[FileResult] = []

    def _on_result(result: FileResult) -> None:
        if result.warning:
            log.warning(result.warning)
        elif result.changed:
            log.debug("Updated header in %s", result.path)
        results.append(result)

    executor = Executor(executor_cfg or resolve_executor_config(cfg.pipeline))
    executor.map_unordered(files, task, _on_result, fail_fast=cfg.pipeline.fail_fast)

    results.sort(key=lambda r: r.path)
    warnings.extend(r.warning for r in results if r.warning)
    return HeaderRun(warnings, [r.path for r in results if r.changed])


def fix_copyright_license_header(
    cfg: CopyheadConfig,
    root: str | Path,
    push: PushInfo,
    *,
    diff_provider: Optional[DiffProvider] = None,
    executor_cfg: Optional[ExecutorConfig] = None,
) -> list[str]:
    """Add or refresh copyright headers in the files selected by ``cfg``.

    With ``only_changed`` the candidates are the files changed by ``push``
    that match the globs; otherwise every matching file in the tree. Headers
    are only inserted where missing, and outdated years are only rewritten
    in changed files. A file whose update fails is reported and skipped.

    Args:
        cfg (CopyheadConfig): Run configuration.
        root (str | Path): Repository working tree.
        push (PushInfo): Push being processed; ``owner`` is the fallback
            copyright holder.
        diff_provider (DiffProvider | None): Source of changed files;
            defaults to ``git diff``.
        executor_cfg (ExecutorConfig | None): Worker pool override.

    Returns:
        list[str]: Human-readable messages, including one per failed file.

    Raises:
        UnknownLicenseError: If the license id is not in the corpus.
        ConfigurationError: If no copyright holder can be determined.
    """
    return _run_headers(
        cfg,
        Path(root),
        push,
        diff_provider=diff_provider,
        executor_cfg=executor_cfg,
    ).warnings


def resolve_push(root: str | Path, push: Optional[PushInfo] = None) -> PushInfo:
    """Fill unset push fields from the local git checkout."""
    push = push or PushInfo()
    return replace(
        push,
        sha=push.sha or head_sha(root),
        owner=push.owner or repo_owner_from_git(root),
        branch=push.branch or current_branch(root),
    )


def _resolve_license(cfg: CopyheadConfig, root: Path) -> tuple[Optional[str], Optional[str]]:
    """Return ``(license_id, message)``; a message means the run stops there."""
    configured = cfg.header.license
    if configured:
        try:
            ensure_license(root, configured)
        except OSError as exc:
            log.warning("Failed to ensure repository %s has license file: %s", root, exc)
        return configured, None

    license_file = find_license(root)
    if not license_file:
        return None, "No license configured and no license file found"
    try:
        content = read_license_file(root, license_file)
    except OSError as exc:
        return None, f"No license configured and failed to read license file: {exc}"
    license_id = license_matcher(content)
    if not license_id:
        return None, f"No license configured and no license found matching {license_file} file content"
    log.info("Detected license %s from %s", license_id, license_file)
    return license_id, None


def run(
    cfg: CopyheadConfig,
    root: str | Path,
    push: Optional[PushInfo] = None,
    *,
    diff_provider: Optional[DiffProvider] = None,
    persister: Optional[Persister] = None,
    executor_cfg: Optional[ExecutorConfig] = None,
    dry_run: bool = False,
) -> RunResult:
    """Process one push end to end.

    Resolves the license (ensuring the license file when one is configured,
    detecting it from the license file otherwise), updates headers and, with
    the ``commit`` persist strategy, commits the rewritten files to
    ``persist.branch_prefix + branch``. Runs that have nothing to do succeed
    with an explanatory message; only a failing header phase fails the run.

    Args:
        cfg (CopyheadConfig): Run configuration.
        root (str | Path): Repository working tree.
        push (PushInfo | None): Push to process; unset fields are taken
            from the local checkout.
        diff_provider (DiffProvider | None): Source of changed files.
        persister (Persister | None): Commit collaborator; defaults to a
            local git commit.
        executor_cfg (ExecutorConfig | None): Worker pool override.
        dry_run (bool): Skip persistence even when configured.

    Returns:
        RunResult: Final status of the run.
    """
    root = Path(root)
    if cfg.header.license:
        try:
            lookup(cfg.header.license)
        except UnknownLicenseError as exc:
            reason = f"Failed to update copyright license headers: {exc}"
            log.error(reason)
            return RunResult(ok=False, message=reason)
    push = resolve_push(root, push)
    branch = push.branch or "main"
    prefix = cfg.persist.branch_prefix
    if branch.startswith(GENERATED_BRANCH_PREFIX) or (prefix and branch.startswith(prefix)):
        return RunResult(ok=True, message=f"Ignore generated branch {branch}")

    license_id, stop = _resolve_license(cfg, root)
    if stop:
        log.info(stop)
        return RunResult(ok=True, message=stop)

    header_cfg = replace(cfg, header=replace(cfg.header, license=license_id))
    try:
        outcome = _run_headers(header_cfg, root, push, diff_provider=diff_provider, executor_cfg=executor_cfg)
    except Exception as exc:  # noqa: BLE001
        reason = f"Failed to update copyright license headers: {exc}"
        log.error(reason)
        return RunResult(ok=False, message=reason, license_id=license_id)
    for warning in outcome.warnings:
        log.info(warning)

    committed = False
    strategy = PersistStrategy.normalize(cfg.persist.strategy)
    if strategy == PersistStrategy.COMMIT and outcome.changed_files and not dry_run:
        target = cfg.persist.branch_for(branch)
        try:
            committed = (persister or GitCommitPersister()).persist(
                root,
                outcome.changed_files,
                cfg.persist.message,
                target,
            )
        except PersistError as exc:
            reason = f"Failed to commit copyright license fixes: {exc}"
            log.error(reason)
            return RunResult(
                ok=False,
                message=reason,
                license_id=license_id,
                warnings=outcome.warnings,
                changed_files=outcome.changed_files,
            )
        if committed and cfg.persist.labels:
            log.info("Branch %s ready for review with labels: %s", target, ", ".join(cfg.persist.labels))

    msg = f"Completed copyright license fixes on {root}"
    log.info(msg)
    return RunResult(
        ok=True,
        message=msg,
        license_id=license_id,
        warnings=outcome.warnings,
        changed_files=outcome.changed_files,
        committed=committed,
    )

