"""
Equalizer Core Module
"""

from .errors import (
    PresetStoreError,
    StorageUnavailable,
    StorageCorrupt,
    PresetNotFound,
    BandConfigurationError,
)
from .event_bus import EventBus, EventType
from .preset_store import PresetStore, BUNDLED_PRESETS_PATH, PRESETS_FILE_NAME

__all__ = [
    'PresetStoreError',
    'StorageUnavailable',
    'StorageCorrupt',
    'PresetNotFound',
    'BandConfigurationError',
    'EventBus',
    'EventType',
    'PresetStore',
    'BUNDLED_PRESETS_PATH',
    'PRESETS_FILE_NAME',
]
