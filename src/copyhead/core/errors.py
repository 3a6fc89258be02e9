# errors.py
# SPDX-License-Identifier: MIT
"""Exception types raised by copyhead.

Per-file failures are not exceptions: the runner folds them into
:class:`~copyhead.core.interfaces.FileResult` warnings so one bad file never
aborts a batch.
"""

from __future__ import annotations

__all__ = [
    "CopyheadError",
    "ConfigurationError",
    "UnknownLicenseError",
    "DiffError",
    "PersistError",
]


class CopyheadError(Exception):
    """Base class for copyhead errors."""


class ConfigurationError(CopyheadError, ValueError):
    """Invalid configuration; fatal to the whole run."""


class UnknownLicenseError(ConfigurationError, KeyError):
    """Raised when an SPDX identifier is not present in the license corpus."""

    def __init__(self, license_id: str) -> None:
        self.license_id = license_id
        super().__init__(f"Unknown license id: {license_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return f"Unknown license id: {self.license_id}"


class DiffError(CopyheadError, RuntimeError):
    """Raised when the changed-files lookup for a push fails."""


class PersistError(CopyheadError, RuntimeError):
    """Raised when updated files cannot be committed."""
