"""
EQ Preset Module

Named equalizer presets made of (frequency, gain) pairs, and the
property-list payload they are persisted as.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class EqualizerValue:
    """
    A single band of a preset.

    Attributes:
        frequency: Band center frequency (Hz).
        value: Gain (dB). The range is not constrained here.
    """
    frequency: float
    value: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary"""
        return {'frequency': float(self.frequency), 'value': float(self.value)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EqualizerValue':
        """Create EqualizerValue from dictionary"""
        return cls(frequency=float(data['frequency']), value=float(data['value']))


@dataclass(frozen=True)
class EqualizerPreset:
    """
    Named equalizer preset.

    Values are kept ordered by frequency so two presets holding the same
    pairs compare equal regardless of the order they were given in.
    """
    name: str
    values: Tuple[EqualizerValue, ...] = field(default_factory=tuple)

    def __post_init__(self):
        ordered = tuple(sorted(self.values, key=lambda v: v.frequency))
        object.__setattr__(self, 'values', ordered)

    @property
    def frequencies(self) -> List[float]:
        """Distinct frequencies, ascending"""
        return sorted({v.frequency for v in self.values})

    @property
    def is_degenerate(self) -> bool:
        """Fewer than 2 distinct frequencies; callers fall back to the default curve."""
        return len(self.frequencies) < 2

    def as_mapping(self) -> Dict[float, float]:
        """Frequency -> gain mapping (later pairs win on duplicate frequencies)"""
        return {v.frequency: v.value for v in self.values}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'values': [v.to_dict() for v in self.values],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EqualizerPreset':
        """
        Create EqualizerPreset from dictionary.

        Raises:
            KeyError, TypeError, ValueError: The record does not have the
                expected shape.
        """
        name = data['name']
        if not isinstance(name, str):
            raise TypeError(f"preset name must be a string, got {type(name).__name__}")
        raw_values = data['values']
        if not isinstance(raw_values, list):
            raise TypeError("preset values must be a list")
        return cls(name=name, values=tuple(EqualizerValue.from_dict(v) for v in raw_values))

    @classmethod
    def from_mapping(cls, name: str, mapping: Dict[float, float]) -> 'EqualizerPreset':
        """Create a preset from a frequency -> gain mapping"""
        return cls(
            name=name,
            values=tuple(EqualizerValue(float(f), float(g)) for f, g in mapping.items()),
        )


def sort_presets(presets: Iterable[EqualizerPreset]) -> List[EqualizerPreset]:
    """
    Sort presets by name.

    Case-sensitive, code-point ordering. The sort is stable, so presets
    sharing a name keep their relative order.
    """
    return sorted(presets, key=lambda p: p.name)


def presets_to_payload(presets: Iterable[EqualizerPreset]) -> Dict[str, Any]:
    """Build the property-list root dictionary for a collection"""
    return {'presets': [p.to_dict() for p in sort_presets(presets)]}


def presets_from_payload(payload: Any) -> List[EqualizerPreset]:
    """
    Parse the property-list root dictionary.

    Raises:
        KeyError, TypeError, ValueError: The payload does not have the
            expected shape.
    """
    if not isinstance(payload, dict):
        raise TypeError("root object must be a dictionary")
    records = payload['presets']
    if not isinstance(records, list):
        raise TypeError("'presets' must be a list")
    return sort_presets(EqualizerPreset.from_dict(r) for r in records)
