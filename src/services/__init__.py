"""
Service Layer Module
"""

from .config_service import ConfigService
from .local_settings import LocalSettings, EqualizerSettings
from .equalizer_service import EqualizerService, PresetEntry

__all__ = [
    'ConfigService',
    'LocalSettings',
    'EqualizerSettings',
    'EqualizerService',
    'PresetEntry',
]
