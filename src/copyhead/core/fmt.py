# fmt.py
# SPDX-License-Identifier: MIT
"""Paragraph reflow for license and header text.

Only lines longer than the target width are touched: each one is broken at
whichever nearby whitespace costs least, where overshooting the target costs
twice as much per column as falling short of it. Lines that already fit are
left exactly as they are.
"""

from __future__ import annotations

import re

from .patterns import HORIZONTAL_SPACE

__all__ = ["DEFAULT_WIDTH", "fmt", "reflow"]

DEFAULT_WIDTH = 72

_LONG_FACTOR = 2
_SHORT_FACTOR = 1

# Leading indent with an optional list marker: "1.", "a.", "(2)", "(iv)".
_MARKER = r"(?:[0-9]+|[A-Z]+|[a-z]+)"
_INDENT_RE = re.compile(
    rf"^{HORIZONTAL_SPACE}+(?:(?:{_MARKER}\.|\({_MARKER}\)){HORIZONTAL_SPACE}*)?"
)
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def _split_at(s: str, index: int) -> tuple[str, str]:
    return s[:index].rstrip(), s[index:].lstrip()


def _is_space(s: str, index: int) -> bool:
    return 0 <= index < len(s) and s[index].isspace()


def _break_index(current: str, width: int) -> int:
    long = next((i for i in range(width, len(current)) if _is_space(current, i)), len(current))
    short = next((i for i in range(width, -1, -1) if _is_space(current, i)), None)
    if long == 0 or short is None:
        return width
    long_penalty = (long - width) * _LONG_FACTOR
    short_penalty = (width - short) * _SHORT_FACTOR
    return long if long_penalty < short_penalty else short


def _fmt_paragraph(paragraph: str, target: int) -> str:
    m = _INDENT_RE.match(paragraph)
    indent = len(m.group(0)) if m else 0
    pad = " " * indent
    lines: list[str] = []
    for number, current in enumerate(paragraph.split("\n")):
        if number and indent:
            # Continuation lines from an earlier reflow carry the pad already.
            current = current.removeprefix(pad)
        width = target
        while len(current) > width:
            if lines:
                # Never below one column so every pass consumes input.
                width = max(target - indent, 1)
            piece, current = _split_at(current, _break_index(current, width))
            lines.append(piece)
        if current:
            lines.append(current)
    return ("\n" + pad).join(lines)


def fmt(text: str, target: int = DEFAULT_WIDTH) -> str:
    """Reflow ``text`` so long lines wrap near ``target`` columns.

    Paragraphs are separated by blank lines. A paragraph whose first line is
    indented, optionally with a list marker such as ``(a)``, has its
    continuation lines indented to the same width. Physical lines are never
    merged; a line with no usable whitespace is cut hard at the target.

    Args:
        text (str): Text to reflow.
        target (int): Desired line width. Defaults to 72.

    Returns:
        str: Reflowed text without trailing whitespace.
    """
    target = target or DEFAULT_WIDTH
    paragraphs = (p.rstrip() for p in _PARAGRAPH_BREAK.split(text))
    return "\n\n".join(_fmt_paragraph(p, target) for p in paragraphs if p)


reflow = fmt
