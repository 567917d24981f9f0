"""
Equalizer curve model
"""

from __future__ import annotations

import bisect
import math
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from models.eq_preset import EqualizerPreset, EqualizerValue


class EqualizerCurve:
    """
    Immutable frequency -> gain curve.

    Gains between two stored frequencies are interpolated linearly on a
    log-frequency axis; outside the stored range the nearest gain is used.
    """

    __slots__ = ('_frequencies', '_gains')

    def __init__(self, values: Optional[Mapping[float, float]] = None):
        items = sorted((float(f), float(g)) for f, g in (values or {}).items())
        self._frequencies: Tuple[float, ...] = tuple(f for f, _ in items)
        self._gains: Tuple[float, ...] = tuple(g for _, g in items)

    @classmethod
    def from_preset(cls, preset: EqualizerPreset) -> 'EqualizerCurve':
        return cls(preset.as_mapping())

    @classmethod
    def from_values(cls, values: Iterable[EqualizerValue]) -> 'EqualizerCurve':
        return cls({v.frequency: v.value for v in values})

    @property
    def values(self) -> Dict[float, float]:
        return dict(zip(self._frequencies, self._gains))

    def frequencies(self) -> List[float]:
        return list(self._frequencies)

    def value_for_frequency(self, frequency: float) -> float:
        """
        Get the gain at a frequency.

        Args:
            frequency: Frequency (Hz).

        Returns:
            Gain (dB); 0.0 for an empty curve.
        """
        if not self._frequencies:
            return 0.0

        index = bisect.bisect_left(self._frequencies, frequency)
        if index < len(self._frequencies) and self._frequencies[index] == frequency:
            return self._gains[index]
        if index == 0:
            return self._gains[0]
        if index == len(self._frequencies):
            return self._gains[-1]

        f0, f1 = self._frequencies[index - 1], self._frequencies[index]
        g0, g1 = self._gains[index - 1], self._gains[index]
        if f0 <= 0 or frequency <= 0:
            ratio = (frequency - f0) / (f1 - f0)
        else:
            ratio = (math.log(frequency) - math.log(f0)) / (math.log(f1) - math.log(f0))
        return g0 + (g1 - g0) * ratio

    def to_values(self) -> List[EqualizerValue]:
        return [EqualizerValue(f, g) for f, g in zip(self._frequencies, self._gains)]

    def __len__(self) -> int:
        return len(self._frequencies)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EqualizerCurve):
            return NotImplemented
        return self._frequencies == other._frequencies and self._gains == other._gains

    def __hash__(self) -> int:
        return hash((self._frequencies, self._gains))

    def __repr__(self) -> str:
        return f"EqualizerCurve({self.values!r})"
