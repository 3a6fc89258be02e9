# runner.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Sequence

from ..core.comment_styles import style_for
from ..core.config import CopyheadConfig, PersistStrategy
from ..core.fmt import fmt
from ..core.header import license_header, prefix_header
from ..core.interfaces import DiffProvider, Persister, PushInfo, RunResult
from ..core.licenses import detect_license
from ..core.log import get_logger
from ..core.runner import run

log = get_logger(__name__)

__all__ = [
    "make_local_config",
    "fix_local_dir",
    "run_config",
    "render_header",
    "reflow_text",
    "detect_repo_license",
]


def _clone_base_config(base_config: CopyheadConfig | None) -> CopyheadConfig:
    """Clone a base configuration or build a fresh default one.

    Section objects are copied too so the caller's config is never mutated.
    """
    if base_config is None:
        return CopyheadConfig()
    return replace(
        base_config,
        header=replace(base_config.header),
        persist=replace(base_config.persist),
        pipeline=replace(base_config.pipeline),
    )


def make_local_config(
    *,
    license_id: str | None = None,
    copyright_holder: str | None = None,
    file_globs: Sequence[str] | None = None,
    ignore_globs: Sequence[str] | None = None,
    only_changed: bool = True,
    block_comment: bool = False,
    commit: bool = False,
    base_config: CopyheadConfig | None = None,
) -> CopyheadConfig:
    """Build a config for fixing a local checkout.

    Explicit arguments override the matching fields of ``base_config``.
    """
    cfg = _clone_base_config(base_config)
    hc = cfg.header
    if license_id:
        hc.license = license_id
    if copyright_holder:
        hc.copyright_holder = copyright_holder
    if file_globs:
        hc.file_globs = list(file_globs)
    if ignore_globs:
        hc.ignore_globs = [*hc.ignore_globs, *ignore_globs]
    hc.only_changed = only_changed
    hc.block_comment = block_comment or hc.block_comment
    if commit:
        cfg.persist.strategy = PersistStrategy.COMMIT
    cfg.validate()
    return cfg


def fix_local_dir(
    root: str | Path,
    *,
    push: PushInfo | None = None,
    diff_provider: DiffProvider | None = None,
    persister: Persister | None = None,
    **config_kwargs,
) -> RunResult:
    """Fix copyright headers in a local checkout in one call.

    Keyword arguments other than the collaborators are passed to
    :func:`make_local_config`.
    """
    cfg = make_local_config(**config_kwargs)
    return run(cfg, root, push, diff_provider=diff_provider, persister=persister)


def run_config(
    cfg: CopyheadConfig,
    root: str | Path,
    *,
    push: PushInfo | None = None,
    dry_run: bool = False,
) -> RunResult:
    """Validate ``cfg`` and run it against ``root``."""
    cfg.validate()
    result = run(cfg, root, push, dry_run=dry_run)
    log.info("run complete: %s", result.message)
    return result


def render_header(
    license_id: str,
    copyright_holder: str,
    *,
    extension: str | None = None,
    block_comment: bool = False,
) -> str:
    """Return the header for ``license_id``, commented for ``extension``.

    Without an extension the plain header text is returned.

    Raises:
        UnknownLicenseError: If ``license_id`` is not known.
        ValueError: If ``extension`` has no known comment style.
    """
    header = license_header(copyright_holder, license_id)
    if not extension:
        return header + "\n"
    style = style_for(extension)
    if style is None:
        raise ValueError(f"No comment style for extension {extension!r}")
    return prefix_header(header, style.prefix, block_comment)


def reflow_text(text: str, width: int | None = None) -> str:
    return fmt(text, width or 0)


def detect_repo_license(root: str | Path) -> dict[str, str | None]:
    """Locate and identify the license file of a repository."""
    license_file, license_id = detect_license(root)
    return {"file": license_file, "license": license_id}
