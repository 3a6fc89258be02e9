# patterns.py
# SPDX-License-Identifier: MIT
"""Regular expressions that locate copyright headers and file preambles.

Both pattern families are parameterized only by a dialect's line-comment
prefix. The C-family prefix additionally gets ``/* ... */`` block branches.

Header pattern groups:

1. Copyright year from a line-comment header.
2. Copyright year from a block-comment header (``//`` prefix only).
"""

from __future__ import annotations

import re
from functools import lru_cache

from .comment_styles import BLOCK_PREFIX, CommentStyle
from .interfaces import HeaderMatch

__all__ = [
    "HORIZONTAL_SPACE",
    "NEWLINE",
    "copyright_header_regex",
    "preamble_regex",
    "find_copyright_header",
    "find_preamble",
]

NEWLINE = "(?:\r\n|\n|\r|\u2028|\u2029)"
HORIZONTAL_SPACE = "[^\\S\n\r\u2028\u2029]"
# "Any character" on a single line: line terminators excluded.
_ANY = "[^\n\r\u2028\u2029]"

_COPYRIGHT = rf"\bCopyright\b{_ANY}*?\b([0-9]{{4,}})\b"


def _line_comment(prefix: str) -> str:
    return f"{HORIZONTAL_SPACE}*{re.escape(prefix)}{_ANY}*{NEWLINE}"


@lru_cache(maxsize=None)
def copyright_header_regex(prefix: str) -> re.Pattern[str]:
    """Return the copyright-header pattern for a comment prefix.

    A line header is the first prefix line mentioning ``Copyright`` and a
    4+ digit year, plus every directly following prefix line. For the
    C family a ``/* ... */`` block mentioning the same is accepted too.
    """
    lc = _line_comment(prefix)
    line_header = (
        f"{HORIZONTAL_SPACE}*{re.escape(prefix)}{_ANY}*{_COPYRIGHT}{_ANY}*{NEWLINE}(?:{lc})*"
    )
    if prefix == BLOCK_PREFIX:
        block_header = (
            rf"{HORIZONTAL_SPACE}*/\*[\S\s]*?{_COPYRIGHT}[\S\s]*?\*/{HORIZONTAL_SPACE}*{NEWLINE}?"
        )
        return re.compile(f"(?:{line_header}|{block_header})", re.IGNORECASE)
    return re.compile(line_header, re.IGNORECASE)


@lru_cache(maxsize=None)
def preamble_regex(prefix: str) -> re.Pattern[str]:
    """Return the pattern for a file's leading description comments.

    The preamble is anchored at the start of the content: an optional shebang
    line and a run of line comments, or for the C family a run of ``//``
    lines or one leading block comment.
    """
    line_comments = f"(?:{_line_comment(prefix)})+"
    if prefix == BLOCK_PREFIX:
        block_comment = rf"{HORIZONTAL_SPACE}*/\*[\S\s]*?\*/"
        return re.compile(f"^(?:{line_comments}|{block_comment})")
    shebang = f"#!{_ANY}*{NEWLINE}"
    return re.compile(f"^(?:{shebang})?{line_comments}")


def find_copyright_header(content: str, style: CommentStyle) -> HeaderMatch | None:
    """Locate the existing copyright header in ``content``, if any."""
    m = copyright_header_regex(style.prefix).search(content)
    if m is None:
        return None
    line_year = m.group(1)
    block_year = m.group(2) if style.supports_block else None
    return HeaderMatch(
        start=m.start(),
        end=m.end(),
        year=line_year or block_year,
        block=line_year is None and block_year is not None,
    )


def find_preamble(content: str, style: CommentStyle) -> tuple[int, int] | None:
    """Return the span of the leading preamble, or None."""
    m = preamble_regex(style.prefix).match(content)
    if m is None:
        return None
    return m.span()
