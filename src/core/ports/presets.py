# -*- coding: utf-8 -*-
"""
Preset Storage Port Interface

Defines the durable preset collection interface, ensuring the equalizer
service does not depend on the property-list file implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from models.eq_preset import EqualizerPreset, EqualizerValue


@runtime_checkable
class IPresetStore(Protocol):
    """Preset Store Interface
    
    Current implementation: PresetStore (property list file)
    """
    
    def load(self) -> List["EqualizerPreset"]:
        """Read all presets, sorted by name
        
        Raises:
            StorageUnavailable: Storage cannot be read
            StorageCorrupt: Stored data cannot be parsed
        """
        ...
    
    def save(self, presets: Iterable["EqualizerPreset"]) -> None:
        """Replace the stored collection
        
        Raises:
            StorageUnavailable: Storage cannot be written
        """
        ...
    
    def upsert(self, name: str, values: Iterable["EqualizerValue"]) -> int:
        """Insert or replace a preset by name
        
        Returns:
            Position of the preset in the sorted collection
        """
        ...
    
    def delete(self, name: str) -> None:
        """Delete a preset by name (absent names are ignored)"""
        ...
    
    def get(self, name: str) -> Optional["EqualizerPreset"]:
        """Get a preset by name, or None"""
        ...
