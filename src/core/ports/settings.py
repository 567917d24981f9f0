# -*- coding: utf-8 -*-
"""
Settings Port Interface

Defines the key/value settings store the equalizer persists its
current bands, values and selected preset name into.
"""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class ILocalSettings(Protocol):
    """Local Settings Interface
    
    Flat key/value store that survives restarts.
    Current implementation: LocalSettings (YAML file)
    """
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get a value
        
        Args:
            key: Settings key
            default: Returned when the key is absent
            
        Returns:
            Stored value or the default
        """
        ...
    
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one"""
        ...
    
    def remove(self, key: str) -> None:
        """Remove a key; removing an absent key does nothing"""
        ...
    
    def list_keys(self) -> List[str]:
        """All stored keys"""
        ...
