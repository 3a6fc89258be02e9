# comment_styles.py
# SPDX-License-Identifier: MIT
"""Registry mapping file extensions to line-comment dialects.

The table is data: each :class:`CommentStyle` names a line-comment prefix and
the extensions that use it. The extension index is built once at import time
and exposed read-only; building it fails loudly if two styles claim the same
extension.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

__all__ = [
    "BLOCK_PREFIX",
    "CommentStyle",
    "COMMENT_STYLES",
    "build_extension_index",
    "known_extensions",
    "default_file_globs",
    "style_for",
    "style_for_path",
]

# Only the C family has a block-comment form (/* ... */).
BLOCK_PREFIX = "//"


@dataclass(frozen=True, slots=True)
class CommentStyle:
    """A comment dialect shared by a set of file extensions.

    Attributes:
        prefix (str): Line-comment token, e.g. ``//`` or ``#``.
        family (str): Human-readable family name used in logs.
        extensions (frozenset[str]): Lowercase extensions without the dot.
    """

    prefix: str
    family: str
    extensions: frozenset[str]

    @property
    def supports_block(self) -> bool:
        return self.prefix == BLOCK_PREFIX


COMMENT_STYLES: tuple[CommentStyle, ...] = (
    CommentStyle(
        prefix="//",
        family="C",
        extensions=frozenset({
            "c", "cc", "cpp", "cs", "cxx", "go", "h", "hpp", "java", "js",
            "jsx", "kt", "m", "php", "rs", "scala", "swift", "ts", "tsx",
        }),
    ),
    CommentStyle(
        prefix=";",
        family="Lisp",
        extensions=frozenset({"cl", "clj", "cljc", "cljs", "edn", "el", "lisp", "lsp", "scm"}),
    ),
    CommentStyle(
        prefix="#",
        family="Script",
        extensions=frozenset({
            "bash", "csh", "ksh", "pl", "py", "r", "rb", "sh", "tcsh", "toml",
            "yaml", "yml", "zsh",
        }),
    ),
    CommentStyle(
        prefix="--",
        family="SQL",
        extensions=frozenset({"ada", "adb", "ads", "elm", "hs", "lua", "sql"}),
    ),
    CommentStyle(
        prefix="%",
        family="TeX",
        extensions=frozenset({"erl", "hrl", "sty", "tex"}),
    ),
)


def build_extension_index(styles: Iterable[CommentStyle]) -> Mapping[str, CommentStyle]:
    """Index comment styles by extension.

    Raises:
        ValueError: If an extension is claimed by more than one style.
    """
    index: dict[str, CommentStyle] = {}
    for style in styles:
        for ext in style.extensions:
            owner = index.get(ext)
            if owner is not None and owner is not style:
                raise ValueError(
                    f"Extension {ext!r} claimed by both {owner.family} and {style.family} comment styles"
                )
            index[ext] = style
    return MappingProxyType(index)


_STYLE_BY_EXT = build_extension_index(COMMENT_STYLES)


def _normalize_ext(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def style_for(extension: str) -> CommentStyle | None:
    """Return the comment style for ``extension`` (``"py"`` or ``".py"``)."""
    if not extension:
        return None
    return _STYLE_BY_EXT.get(_normalize_ext(extension))


def style_for_path(path: str) -> CommentStyle | None:
    """Return the comment style for a file path based on its final suffix."""
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name.lstrip("."):
        return None
    return style_for(name.rsplit(".", 1)[-1])


def known_extensions() -> list[str]:
    return sorted(_STYLE_BY_EXT)


def default_file_globs() -> list[str]:
    """One ``**/*.<ext>`` glob per supported extension."""
    return [f"**/*.{ext}" for ext in known_extensions()]
