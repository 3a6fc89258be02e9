# licenses.py
# SPDX-License-Identifier: MIT
"""
License file helpers for local repositories.

- :func:`find_license` locates the repository license file by name.
- :func:`license_matcher` infers an SPDX id from license text by comparing it
  against the bundled corpus texts.
- :func:`ensure_license` writes the canonical text for a license id unless an
  existing license file already matches it.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping
from pathlib import Path

from .log import get_logger
from .spdx import license_texts, lookup

log = get_logger(__name__)

__all__ = [
    "MATCH_THRESHOLD",
    "DEFAULT_LICENSE_FILE",
    "find_license",
    "read_license_file",
    "similarity",
    "license_matcher",
    "detect_license",
    "ensure_license",
]

MAX_LICENSE_BYTES = 128 * 1024
MATCH_THRESHOLD = 0.99
DEFAULT_LICENSE_FILE = "LICENSE"

_WHITESPACE = re.compile(r"\s+")


def _is_license_name(name: str) -> bool:
    lowered = name.lower()
    return lowered == "license" or lowered.startswith("license.")


def find_license(root: str | Path) -> str | None:
    """Return the name of the license file at the root of ``root``.

    Matches ``license`` and ``license.*`` case-insensitively; when several
    files qualify the first in sorted order wins.
    """
    try:
        entries = sorted(Path(root).iterdir(), key=lambda p: p.name)
    except OSError as exc:
        log.debug("Cannot list %s: %s", root, exc)
        return None
    for entry in entries:
        if _is_license_name(entry.name) and entry.is_file():
            return entry.name
    return None


def read_license_file(root: str | Path, name: str) -> str:
    """Read a license file as text, raising ``OSError`` on failure."""
    with (Path(root) / name).open("rb") as fh:
        data = fh.read(MAX_LICENSE_BYTES)
    return data.decode("utf-8-sig", errors="replace")


def _bigrams(s: str) -> Counter[str]:
    return Counter(s[i:i + 2] for i in range(len(s) - 1))


def similarity(first: str, second: str) -> float:
    """Dice coefficient of the character bigrams of two strings.

    Whitespace is ignored entirely, so reflowed copies of the same text
    compare as identical.

    Returns:
        float: Rating between 0.0 (nothing shared) and 1.0 (identical).
    """
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0
    overlap = sum((_bigrams(first) & _bigrams(second)).values())
    return 2.0 * overlap / (len(first) + len(second) - 2)


def license_matcher(text: str, candidates: Mapping[str, str] | None = None) -> str | None:
    """Return the SPDX id whose text best matches ``text``.

    Args:
        text (str): License text to identify.
        candidates (Mapping[str, str] | None): ``id -> text`` pairs to compare
            against. Defaults to every corpus license with a bundled text.

    Returns:
        str | None: The best-matching id when its rating exceeds
        :data:`MATCH_THRESHOLD`, else None.
    """
    if not text or not text.strip():
        return None
    if candidates is None:
        candidates = license_texts()
    best_id: str | None = None
    best_rating = 0.0
    for license_id, candidate in candidates.items():
        rating = similarity(text, candidate)
        if rating > best_rating:
            best_id, best_rating = license_id, rating
    if best_id is not None and best_rating > MATCH_THRESHOLD:
        log.debug("License text matched %s (rating %.4f)", best_id, best_rating)
        return best_id
    return None


def detect_license(root: str | Path) -> tuple[str | None, str | None]:
    """Return ``(license_file, license_id)`` for a repository.

    Either element may be None: no license file, or a file whose content
    matches no corpus text. Read errors propagate as ``OSError``.
    """
    name = find_license(root)
    if name is None:
        return None, None
    return name, license_matcher(read_license_file(root, name))


def ensure_license(root: str | Path, license_id: str) -> bool:
    """Make sure the repository license file carries ``license_id``'s text.

    An existing license file is kept when its content already matches the
    id, and overwritten otherwise. Without one, ``LICENSE`` is created.

    Args:
        root (str | Path): Repository root.
        license_id (str): SPDX identifier of the desired license.

    Returns:
        bool: True when a file was written.

    Raises:
        UnknownLicenseError: If ``license_id`` is not in the corpus.
    """
    if not license_id:
        return False
    info = lookup(license_id)
    if not info.text:
        log.warning("No bundled text for license %s; leaving license file as is", license_id)
        return False
    root = Path(root)
    existing = find_license(root)
    if existing is not None:
        if license_matcher(read_license_file(root, existing)) == license_id:
            return False
    target = root / (existing or DEFAULT_LICENSE_FILE)
    with target.open("w", encoding="utf-8", newline="") as fh:
        fh.write(info.text + "\n")
    log.info("Wrote %s license text to %s", license_id, target.name)
    return True
