"""
Data Models Module
"""

from .eq_preset import EqualizerValue, EqualizerPreset, sort_presets
from .eq_curve import EqualizerCurve
from .band_config import BandConfiguration, DEFAULT_BANDS

__all__ = [
    'EqualizerValue',
    'EqualizerPreset',
    'sort_presets',
    'EqualizerCurve',
    'BandConfiguration',
    'DEFAULT_BANDS',
]
