"""Error types raised by the sync layers.

Each kind has a fixed blast radius: a ConfigError stops the whole run,
a DirectoryCreateError or FingerprintError aborts one pair, and a
CopyError skips a single file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class MirrorSyncError(Exception):
    """Base class for mirrorsync failures."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ConfigError(MirrorSyncError):
    """Raised when the pair list cannot be read or parsed."""


class DirectoryCreateError(MirrorSyncError):
    """Raised when a target directory cannot be created."""


class FingerprintError(MirrorSyncError):
    """Raised when walking or hashing a tree fails."""


class CopyError(MirrorSyncError):
    """Raised when a single file cannot be copied."""
