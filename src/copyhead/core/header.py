# header.py
# SPDX-License-Identifier: MIT
"""Copyright header generation and in-place update.

:func:`license_header` produces the plain header text for a license and
copyright holder, :func:`prefix_header` renders it as comments for a dialect,
and :func:`update_copyright_header` decides whether a file's content needs the
header inserted, refreshed, or left alone.
"""

from __future__ import annotations

import re
from datetime import date

from .comment_styles import BLOCK_PREFIX, style_for_path
from .fmt import fmt
from .interfaces import FileRecord
from .license_headers import HOLDER_PLACEHOLDER, YEAR_PLACEHOLDER, template_for
from .log import get_logger
from .patterns import find_copyright_header, find_preamble
from .spdx import lookup

log = get_logger(__name__)

__all__ = [
    "current_year",
    "license_header",
    "default_header",
    "prefix_header",
    "update_copyright_header",
    "process_file",
]

_ENDS_WITH_LICENSE = re.compile(r"license$", re.IGNORECASE)
_NON_SPACE = re.compile(r"\S")


def current_year() -> str:
    return str(date.today().year)


def default_header(copyright_holder: str, license_name: str) -> str:
    """Synthesize a header for a license without a curated usage text."""
    name = license_name if _ENDS_WITH_LICENSE.search(license_name) else f"{license_name} License"
    text = (
        f"Copyright © {current_year()} {copyright_holder}\n"
        "\n"
        f"Licensed under the {name};\n"
        "you may not use this file except in compliance with the License."
    )
    return fmt(text)


def license_header(copyright_holder: str, license_id: str) -> str:
    """Return the plain-text copyright header for a license.

    Curated usage texts are used verbatim after placeholder substitution;
    other licenses get a short synthesized notice naming the license.

    Args:
        copyright_holder (str): Legal entity holding the copyright.
        license_id (str): SPDX license identifier.

    Returns:
        str: Header text without comment markers or trailing newline.

    Raises:
        UnknownLicenseError: If ``license_id`` is not a known SPDX id.
    """
    info = lookup(license_id)
    template = template_for(license_id)
    if template is None:
        return default_header(copyright_holder, info.name)
    return (
        template
        .replace(YEAR_PLACEHOLDER, current_year())
        .replace(HOLDER_PLACEHOLDER, copyright_holder)
    )


def prefix_header(header: str, prefix: str, block_comment: bool = False) -> str:
    """Render header text as a comment in the dialect of ``prefix``.

    Args:
        header (str): Plain header text.
        prefix (str): Line-comment prefix of the target dialect.
        block_comment (bool): Use a ``/* ... */`` block when the dialect
            supports one.

    Returns:
        str: Commented header ending in a single newline, or an empty
        string when ``header`` is empty.
    """
    if not header:
        return header
    block = block_comment and prefix == BLOCK_PREFIX
    if prefix == ";":
        marker = ";;"
    elif block:
        marker = " *"
    else:
        marker = prefix
    lines = [f"{marker} {line}".rstrip() for line in header.split("\n")]
    if block:
        lines = ["/*", *lines, " */"]
    return "\n".join(lines) + "\n"


def update_copyright_header(
    content: str,
    file: str,
    header: str,
    *,
    block_comment: bool = False,
    update_year: bool = False,
) -> str:
    """Return ``content`` with its copyright header inserted or refreshed.

    An existing header is replaced only when ``update_year`` is set and its
    year is not the current year. Without an existing header the rendered
    header goes after any shebang or leading description comment, or at the
    top of the file, separated from the rest by a blank line.

    Args:
        content (str): Current file content.
        file (str): File path; its extension selects the comment dialect.
        header (str): Plain header text from :func:`license_header`.
        block_comment (bool): Prefer a block comment where supported.
        update_year (bool): Whether an outdated header may be rewritten.

    Returns:
        str: The new content, or ``content`` itself when nothing changes.
    """
    style = style_for_path(file)
    if style is None:
        log.warning("Glob matched file but extension matched no comment type: %s", file)
        return content

    rendered = prefix_header(header, style.prefix, block_comment)
    if not rendered:
        log.warning("Glob matched file but extension matched no prefix: %s", file)
        return content

    match = find_copyright_header(content, style)
    if match is not None:
        if match.year == current_year() or not update_year:
            return content
        return content[:match.start] + rendered + content[match.end:]

    preamble = find_preamble(content, style)
    if preamble is not None:
        cut = preamble[1]
        before = content[:cut]
        start = f"{before}\n" if before.endswith("*/") else before
        after = content[cut:].lstrip()
        end = f"\n{after}" if _NON_SPACE.search(after) else ""
        return start + rendered + end
    if not content.strip():
        return rendered
    return rendered + "\n" + content.lstrip()


def process_file(
    record: FileRecord,
    header: str,
    block_comment: bool = False,
    update_year: bool = False,
) -> str:
    """Apply :func:`update_copyright_header` to a :class:`FileRecord`."""
    return update_copyright_header(
        record.content,
        record.path,
        header,
        block_comment=block_comment,
        update_year=update_year,
    )
