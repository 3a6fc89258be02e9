# __init__.py
# SPDX-License-Identifier: MIT
"""
Top-level package exports for :mod:`copyhead`.

copyhead keeps source files carrying a correct copyright/license header and
makes sure a repository has a matching license file.

Public surface and stability
----------------------------
The symbols listed in :data:`PRIMARY_API` are the recommended public surface
and are exported via :data:`__all__`. In general, callers should:

- Build a configuration via :class:`CopyheadConfig` or load one from
  TOML/JSON/YAML with :func:`load_config_from_path`.
- Process a repository with :func:`run` (or :func:`fix_local_dir` for a quick
  ad-hoc fix), or drive the pieces directly with
  :func:`update_copyright_header` and :func:`fmt`.

Anything *not* listed in :data:`PRIMARY_API` is an expert surface and may
change between releases.

Examples:
    Header for a single file::

        >>> from copyhead import license_header, update_copyright_header
        >>> header = license_header("Acme, Inc.", "Apache-2.0")
        >>> new = update_copyright_header("print('hi')\\n", "hello.py", header)

    Config-driven run::

        >>> from copyhead import load_config_from_path, run
        >>> cfg = load_config_from_path("copyhead.toml")
        >>> result = run(cfg, "path/to/repo")
"""


from __future__ import annotations

# ---------------------------------------------------------------------------
# Package version
# ---------------------------------------------------------------------------
try:
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("copyhead")
except Exception:  # PackageNotFoundError or runtime env oddities
    __version__ = "0.0.0+unknown"


# ---------------------------------------------------------------------------
# Primary public API (stable; exported via __all__)
# ---------------------------------------------------------------------------
from .cli.runner import fix_local_dir, make_local_config, render_header
from .core.config import CopyheadConfig, load_config_from_path
from .core.errors import ConfigurationError, CopyheadError, DiffError, PersistError, UnknownLicenseError
from .core.fmt import fmt, reflow
from .core.header import license_header, prefix_header, update_copyright_header
from .core.interfaces import PushInfo, RunResult
from .core.licenses import ensure_license, find_license, license_matcher
from .core.runner import fix_copyright_license_header, run

# ---------------------------------------------------------------------------
# Advanced / expert API (imported for convenience; not exported via __all__)
# ---------------------------------------------------------------------------
from .core.comment_styles import COMMENT_STYLES, CommentStyle, default_file_globs, style_for
from .core.concurrency import Executor, ExecutorConfig
from .core.config import HeaderConfig, LoggingConfig, PersistConfig, PipelineConfig
from .core.globs import GlobSet, compile_glob, filter_paths, match_files
from .core.interfaces import ChangeSet, DiffProvider, FileRecord, FileResult, HeaderMatch, Persister
from .core.log import configure_logging, get_logger
from .core.patterns import copyright_header_regex, find_copyright_header, find_preamble, preamble_regex
from .core.spdx import LicenseInfo, license_ids, lookup
from .core.vcs import GitCommitPersister, GitDiffProvider
from .sources.fs import collect_repo_files, iter_repo_files

# ---------------------------------------------------------------------------
# Stable export list
# ---------------------------------------------------------------------------
PRIMARY_API = [
    "__version__",
    "CopyheadConfig",
    "load_config_from_path",
    "run",
    "fix_copyright_license_header",
    "fix_local_dir",
    "make_local_config",
    "render_header",
    "PushInfo",
    "RunResult",
    "license_header",
    "prefix_header",
    "update_copyright_header",
    "fmt",
    "reflow",
    "ensure_license",
    "find_license",
    "license_matcher",
    "CopyheadError",
    "ConfigurationError",
    "UnknownLicenseError",
    "DiffError",
    "PersistError",
]

# Export the stable surface area only.
__all__ = list(PRIMARY_API)
