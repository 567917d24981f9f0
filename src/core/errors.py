"""
Error Types

Failures raised by the preset store and band editing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PresetStoreError(RuntimeError):
    """Base class for preset store errors"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class StorageUnavailable(PresetStoreError):
    """The durable file could not be read or written."""
    pass


class StorageCorrupt(PresetStoreError):
    """The durable file exists but is not a valid preset property list."""
    pass


class PresetNotFound(PresetStoreError, LookupError):
    """No preset with the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Preset not found: {name!r}")
        self.name = name


class BandConfigurationError(ValueError):
    """Invalid band/value edit."""
    pass
