"""
Band Configuration Module

The editable column layout of the equalizer: one frequency and one gain
per column, index-aligned.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from core.errors import BandConfigurationError
from models.eq_curve import EqualizerCurve
from models.eq_preset import EqualizerValue


# Bands used when no saved configuration or preset curve is available (Hz)
DEFAULT_BANDS: Tuple[float, ...] = (60.0, 150.0, 400.0, 1000.0, 2400.0, 15000.0)

DEFAULT_GAIN = 0.0

MIN_BANDS = 2


@dataclass(frozen=True)
class BandConfiguration:
    """
    Band/value columns.

    Attributes:
        bands: Band center frequencies (Hz), ascending and distinct.
        values: Gain (dB) for each band.
    """
    bands: Tuple[float, ...]
    values: Tuple[float, ...]

    def __post_init__(self):
        bands = tuple(float(b) for b in self.bands)
        values = tuple(float(v) for v in self.values)
        if len(bands) != len(values):
            raise BandConfigurationError(
                f"bands and values differ in length ({len(bands)} != {len(values)})"
            )
        if len(set(bands)) < MIN_BANDS:
            raise BandConfigurationError(f"at least {MIN_BANDS} distinct bands are required")
        if any(lower >= upper for lower, upper in zip(bands, bands[1:])):
            raise BandConfigurationError(f"bands must be ascending and distinct: {list(bands)}")
        object.__setattr__(self, 'bands', bands)
        object.__setattr__(self, 'values', values)

    @classmethod
    def default(cls, bands: Iterable[float] = DEFAULT_BANDS, gain: float = DEFAULT_GAIN) -> 'BandConfiguration':
        """Default bands, all at the same gain"""
        bands = sorted(float(b) for b in bands)
        return cls(tuple(bands), tuple(gain for _ in bands))

    @classmethod
    def from_curve(cls, curve: EqualizerCurve) -> 'BandConfiguration':
        """Columns for every frequency stored in a curve"""
        bands = curve.frequencies()
        return cls(tuple(bands), tuple(curve.value_for_frequency(b) for b in bands))

    @property
    def is_flat(self) -> bool:
        return all(v == 0 for v in self.values)

    def __len__(self) -> int:
        return len(self.bands)

    def to_values(self) -> List[EqualizerValue]:
        """
        Pairs for saving as a preset.

        Duplicate frequencies collapse to the last gain.
        """
        mapping = dict(zip(self.bands, self.values))
        return [EqualizerValue(f, g) for f, g in mapping.items()]

    def with_values(self, values: Iterable[float]) -> 'BandConfiguration':
        return BandConfiguration(self.bands, tuple(values))

    def with_value(self, index: int, gain: float) -> 'BandConfiguration':
        """
        Replace the gain of a single column.

        Raises:
            BandConfigurationError: Index out of range.
        """
        if not 0 <= index < len(self.values):
            raise BandConfigurationError(f"band index out of range: {index}")
        values = list(self.values)
        values[index] = float(gain)
        return BandConfiguration(self.bands, tuple(values))

    def add_band(self, frequency: float, gain: float = DEFAULT_GAIN) -> 'BandConfiguration':
        """
        Insert a band, keeping bands sorted.

        Raises:
            BandConfigurationError: Frequency is not positive or already present.
        """
        frequency = float(frequency)
        if frequency <= 0:
            raise BandConfigurationError(f"band frequency must be positive: {frequency}")
        if frequency in self.bands:
            raise BandConfigurationError(f"band already exists: {frequency}")

        index = bisect.bisect_left(self.bands, frequency)
        bands = self.bands[:index] + (frequency,) + self.bands[index:]
        values = self.values[:index] + (float(gain),) + self.values[index:]
        return BandConfiguration(bands, values)

    def remove_band(self, index: int) -> 'BandConfiguration':
        """
        Remove a band and its gain.

        Raises:
            BandConfigurationError: Index out of range, or only the minimum
                number of bands remains.
        """
        if not 0 <= index < len(self.bands):
            raise BandConfigurationError(f"band index out of range: {index}")
        if len(self.bands) <= MIN_BANDS:
            raise BandConfigurationError(f"Cannot have less than {MIN_BANDS} EQ bands")
        bands = self.bands[:index] + self.bands[index + 1:]
        values = self.values[:index] + self.values[index + 1:]
        return BandConfiguration(bands, values)


def format_frequency(frequency: float) -> str:
    """
    Short column label for a frequency.

    Examples: 60 -> "60", 1000 -> "1k", 2400 -> "2.4k".
    """
    if frequency >= 1000:
        return f"{frequency / 1000:g}k"
    return f"{frequency:g}"
