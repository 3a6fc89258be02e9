# config.py
# SPDX-License-Identifier: MIT
"""Configuration models and helpers for copyhead runs.

This module defines declarative dataclasses for the header engine, change
persistence, the worker pool and logging, along with helpers for
serializing and loading configurations from JSON, TOML and YAML.
"""
from __future__ import annotations

import json
try:  # pragma: no cover - optional dependency
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    try:
        import tomli as tomllib  # type: ignore[assignment]
    except Exception:  # pragma: no cover
        tomllib = None  # type: ignore[assignment]
import types
from collections.abc import Sequence as ABCSequence
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union, get_args, get_origin, get_type_hints

import yaml

from .comment_styles import default_file_globs
from .errors import ConfigurationError
from .log import PACKAGE_LOGGER_NAME, configure_logging
from .spdx import lookup

__all__ = [
    "CopyheadConfig",
    "HeaderConfig",
    "PersistConfig",
    "PipelineConfig",
    "LoggingConfig",
    "PersistStrategy",
    "load_config_from_path",
]

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class HeaderConfig:
    """What header to apply and to which files.

    Attributes:
        license (str | None): SPDX identifier. When unset, the license is
            inferred from the repository's license file.
        copyright_holder (str | None): Holder named in the header; the
            repository owner is used when unset.
        file_globs (list[str] | None): Files to manage. Defaults to every
            extension with a known comment style.
        ignore_globs (list[str]): Files never to touch.
        only_changed (bool): Only add headers to files changed by the push.
            Outdated years are only ever refreshed in changed files.
        block_comment (bool): Use ``/* ... */`` headers where supported.
        respect_gitignore (bool): Skip ignored files when walking the tree.
    """
    license: Optional[str] = None
    copyright_holder: Optional[str] = None
    file_globs: Optional[List[str]] = None
    ignore_globs: List[str] = field(default_factory=list)
    only_changed: bool = True
    block_comment: bool = False
    respect_gitignore: bool = True

    def resolved_file_globs(self) -> List[str]:
        return list(self.file_globs) if self.file_globs else default_file_globs()

    def validate(self) -> None:
        if self.license:
            lookup(self.license)
        for name in ("file_globs", "ignore_globs"):
            value = getattr(self, name) or []
            if isinstance(value, str) or not all(isinstance(g, str) for g in value):
                raise ConfigurationError(f"header.{name} must be a list of strings.")


class PersistStrategy:
    """How updated files are persisted.

    Strategies:
    * ``NONE``: Leave changes in the working tree.
    * ``COMMIT``: Commit changes to a dedicated branch.
    """

    NONE = "none"
    COMMIT = "commit"
    ALL = {NONE, COMMIT}

    @classmethod
    def normalize(cls, value: Optional[str]) -> str:
        strategy = (value or cls.NONE).strip().lower()
        if strategy not in cls.ALL:
            raise ConfigurationError(
                f"Invalid persist.strategy {value!r}; expected one of {sorted(cls.ALL)}."
            )
        return strategy


@dataclass(slots=True)
class PersistConfig:
    """Commit metadata used when persisting header fixes.

    The first line of ``commit_message`` doubles as the change title; the
    ``labels`` are reported alongside the result for whatever opens a review
    from the branch.
    """
    strategy: str = PersistStrategy.NONE
    commit_message: Optional[str] = None
    branch_prefix: str = "copyhead/copyright-"
    labels: List[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        first = (self.commit_message or "").split("\n")[0]
        return first or "Copyright license fixes"

    @property
    def message(self) -> str:
        return self.commit_message or self.title

    def branch_for(self, branch: str) -> str:
        return f"{self.branch_prefix}{branch}"

    def validate(self) -> None:
        self.strategy = PersistStrategy.normalize(self.strategy)
        if not self.branch_prefix:
            raise ConfigurationError("persist.branch_prefix must not be empty.")


@dataclass(slots=True)
class PipelineConfig:
    """Worker pool settings for per-file processing.

    ``max_workers=0`` means one worker per CPU. ``submit_window`` bounds the
    number of in-flight tasks and defaults to four per worker.
    """
    max_workers: int = 0
    submit_window: Optional[int] = None
    executor_kind: str = "thread"
    fail_fast: bool = False

    def validate(self) -> None:
        if self.max_workers < 0:
            raise ConfigurationError("pipeline.max_workers must be >= 0.")
        if self.submit_window is not None and self.submit_window < 1:
            raise ConfigurationError("pipeline.submit_window must be >= 1 when set.")
        kind = (self.executor_kind or "thread").strip().lower()
        if kind not in {"thread", "process"}:
            raise ConfigurationError("pipeline.executor_kind must be 'thread' or 'process'.")
        self.executor_kind = kind


@dataclass(slots=True)
class LoggingConfig:
    """Controls the package logger; set propagate=True/logger_name to
    integrate with host apps.
    """
    level: Union[int, str] = "INFO"
    propagate: bool = False
    fmt: Optional[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    logger_name: str = PACKAGE_LOGGER_NAME

    def apply(self) -> None:
        """Apply this logging configuration to the package logger."""
        configure_logging(
            level=self.level,
            propagate=self.propagate,
            fmt=self.fmt,
            logger_name=self.logger_name or PACKAGE_LOGGER_NAME,
        )


# ---------------------------------------------------------------------------
# Master config
# ---------------------------------------------------------------------------

# Option names as they appear in existing skill configurations.
_ALIASES: Dict[str, str] = {
    "copyrightHolder": "copyright_holder",
    "fileGlobs": "file_globs",
    "ignoreGlobs": "ignore_globs",
    "onlyChanged": "only_changed",
    "blockComment": "block_comment",
    "respectGitignore": "respect_gitignore",
    "commitMessage": "commit_message",
    "branchPrefix": "branch_prefix",
    "maxWorkers": "max_workers",
    "submitWindow": "submit_window",
    "executorKind": "executor_kind",
    "failFast": "fail_fast",
}

_HEADER_KEYS = {f.name for f in fields(HeaderConfig)}
_PERSIST_KEYS = {"commit_message", "labels"}


@dataclass(slots=True)
class CopyheadConfig:
    """Top-level configuration for a copyhead run.

    Sections map to TOML tables ``[header]``, ``[persist]``, ``[pipeline]``
    and ``[logging]``. Header options and ``commit_message``/``labels`` may
    also be given at the top level, in either snake_case or camelCase.
    """
    header: HeaderConfig = field(default_factory=HeaderConfig)
    persist: PersistConfig = field(default_factory=PersistConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises:
            ConfigurationError: If any section is invalid.
            UnknownLicenseError: If ``header.license`` is not a known id.
        """
        self.header.validate()
        self.persist.validate()
        self.pipeline.validate()

    def to_dict(self) -> Dict[str, Any]:
        return _dataclass_to_dict(self)

    def to_json(self, path: Optional[str | Path] = None, *, indent: int = 2) -> str:
        """Serialize to JSON, optionally writing it to ``path``."""
        text = json.dumps(self.to_dict(), indent=indent, sort_keys=True)
        if path is not None:
            Path(path).write_text(text, encoding="utf-8")
        return text

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CopyheadConfig":
        """Build a config from a mapping, accepting flat and aliased keys.

        Raises:
            ConfigurationError: On unknown keys or malformed sections.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Config must be a mapping; got {type(data).__name__}.")
        sections: Dict[str, Dict[str, Any]] = {"header": {}, "persist": {}, "pipeline": {}, "logging": {}}
        for raw_key, value in data.items():
            key = _ALIASES.get(raw_key, raw_key)
            if key in sections:
                if value is None:
                    continue
                if not isinstance(value, Mapping):
                    raise ConfigurationError(f"Config section {key!r} must be a mapping.")
                sections[key].update(_normalize_keys(value))
            elif key in _HEADER_KEYS:
                sections["header"][key] = value
            elif key in _PERSIST_KEYS:
                sections["persist"][key] = value
            else:
                raise ConfigurationError(f"Unknown config key {raw_key!r}.")
        try:
            return cls(
                header=_dataclass_from_dict(HeaderConfig, sections["header"]),
                persist=_dataclass_from_dict(PersistConfig, sections["persist"]),
                pipeline=_dataclass_from_dict(PipelineConfig, sections["pipeline"]),
                logging=_dataclass_from_dict(LoggingConfig, sections["logging"]),
            )
        except (TypeError, ValueError) as exc:
            if isinstance(exc, ConfigurationError):
                raise
            raise ConfigurationError(str(exc)) from exc

    @classmethod
    def from_json(cls, path: Path | str) -> "CopyheadConfig":
        """Load a CopyheadConfig from a JSON file."""
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(payload)

    @classmethod
    def from_toml(cls, path: Path | str) -> "CopyheadConfig":
        """
        Load a CopyheadConfig from a TOML file.

        The TOML layout mirrors this dataclass: tables ``[header]``,
        ``[persist]``, ``[pipeline]`` and ``[logging]``.
        """
        if tomllib is None:
            raise RuntimeError(
                "TOML support requires Python 3.11+ (tomllib) or installing the 'tomli' package."
            )
        data = tomllib.loads(Path(path).read_bytes().decode("utf-8"))
        if not isinstance(data, Mapping):
            raise TypeError(f"Top-level TOML document must be a mapping; got {type(data).__name__}.")
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "CopyheadConfig":
        """Load a CopyheadConfig from a YAML file; an empty file yields defaults."""
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(data or {})


def load_config_from_path(path: str | Path) -> CopyheadConfig:
    """Load a CopyheadConfig from a JSON, TOML or YAML file.

    Args:
        path (Path | str): Path to a ``.toml``, ``.json``, ``.yaml`` or
            ``.yml`` config file.

    Returns:
        CopyheadConfig: Parsed configuration instance.

    Raises:
        ValueError: If the file extension is not supported.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".toml":
        return CopyheadConfig.from_toml(p)
    if suffix == ".json":
        return CopyheadConfig.from_json(p)
    if suffix in {".yaml", ".yml"}:
        return CopyheadConfig.from_yaml(p)
    raise ValueError(f"Unsupported config extension {p.suffix!r}; expected .toml, .json or .yaml.")


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_ALIASES.get(str(k), str(k)): v for k, v in data.items()}


def _dataclass_to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize dataclasses to JSON-friendly dicts, skipping None fields."""
    result: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        serialized = _serialize_value(value)
        if serialized is not None:
            result[f.name] = serialized
    return result


def _serialize_value(value: Any) -> Any:
    """Best-effort JSON-friendly coercion; drops values that cannot be serialized."""
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (list, tuple, set)):
        return [_serialize_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items() if v is not None}
    if is_dataclass(value):
        return _dataclass_to_dict(value)
    return None


def _dataclass_from_dict(cls: Type[T], data: Mapping[str, Any] | None) -> T:
    """Instantiate a dataclass of type `cls` from a mapping.

    Args:
        cls (type[T]): Dataclass type to construct.
        data (Mapping[str, Any] | None): Source mapping, or None to use
            the type's default constructor.

    Returns:
        T: New dataclass instance.

    Raises:
        ConfigurationError: If ``data`` holds keys that are not fields.
    """
    if data is None:
        return cls()  # type: ignore[call-arg]
    type_hints = get_type_hints(cls)
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        raise ConfigurationError(f"Unknown {cls.__name__} option(s): {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        field_type = type_hints.get(f.name, f.type)
        kwargs[f.name] = _coerce_value(field_type, data[f.name])
    return cls(**kwargs)  # type: ignore[arg-type]


def _coerce_value(expected_type: Any, value: Any) -> Any:
    """Coerce `value` into the shape implied by `expected_type`.

    This handles nested dataclasses, container types, unions, and Paths,
    recursing into sequences when necessary.
    """
    base_type, _ = _strip_optional(expected_type)
    if value is None:
        return None
    if is_dataclass_type(base_type):
        return _dataclass_from_dict(base_type, value)
    origin = get_origin(base_type)
    if origin in (list, tuple, ABCSequence):
        if isinstance(value, str):
            value = [value]
        args = get_args(base_type)
        inner = args[0] if args else Any
        items = [_coerce_value(inner, v) for v in value]
        return tuple(items) if origin is tuple else list(items)
    if base_type is Path:
        return Path(value)
    if base_type is bool:
        return _coerce_bool(value)
    if base_type in {str, int, float}:
        return base_type(value)
    return value


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
        raise ConfigurationError(f"Cannot interpret {value!r} as a boolean.")
    return bool(value)


def _strip_optional(typ: Any) -> Tuple[Any, bool]:
    """Strip Optional from a type annotation.

    Args:
        typ (Any): Type annotation that may be a Union including ``None``.

    Returns:
        tuple[Any, bool]: A pair ``(base_type, is_optional)`` where
        ``is_optional`` is True if ``None`` was present in the union.
    """
    origin = get_origin(typ)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(typ) if arg is not type(None)]
        if len(args) == 1:
            base, _ = _strip_optional(args[0])
            return base, True
    return typ, False


def is_dataclass_type(typ: Any) -> bool:
    """Return True if `typ` is a dataclass type (not an instance)."""
    try:
        return isinstance(typ, type) and is_dataclass(typ)
    except Exception:
        return False
