# -*- coding: utf-8 -*-
"""
Protocols Definition Module

Defines the interface protocols (Protocol) for the services a UI layer talks to.
Uses Protocol instead of ABC to support structural subtyping checks.

Design Decisions:
- Default to using Protocol + @runtime_checkable
- Runtime checks are performed as one-time assertions during container assembly or testing
"""

from __future__ import annotations

from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    List,
    Optional,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from models.eq_curve import EqualizerCurve


# =============================================================================
# Event Bus Protocol
# =============================================================================

@runtime_checkable
class IEventBus(Protocol):
    """Event Bus Interface
    
    Provides a publish-subscribe pattern event system.
    """
    
    def subscribe(
        self, 
        event_type: Enum, 
        callback: Callable[[Any], None]
    ) -> str:
        """Subscribe to an event
        
        Returns:
            Subscription ID, used to unsubscribe
        """
        ...
    
    def unsubscribe(self, subscription_id: str) -> bool:
        """Unsubscribe from an event"""
        ...
    
    def publish(self, event_type: Enum, data: Any = None) -> None:
        """Publish an event"""
        ...


# =============================================================================
# Storage Protocols
# =============================================================================

# Re-export infrastructure interfaces from core.ports
from core.ports.presets import IPresetStore
from core.ports.settings import ILocalSettings


# =============================================================================
# Configuration Service Protocol
# =============================================================================

@runtime_checkable
class IConfigService(Protocol):
    """Configuration Service Interface"""
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value
        
        Args:
            key: Configuration key, supports dot-separated nested keys
            default: Default value
            
        Returns:
            Configuration value
        """
        ...
    
    def set(self, key: str, value: Any) -> None:
        """Set a configuration value"""
        ...
    
    def save(self) -> bool:
        """Save configuration to file"""
        ...


# =============================================================================
# Equalizer Service Protocol
# =============================================================================

@runtime_checkable
class IEqualizerService(Protocol):
    """Equalizer Service Interface
    
    What an equalizer screen reads and edits.
    """
    
    @property
    def bands(self) -> List[float]:
        """Band frequencies (Hz), ascending"""
        ...
    
    @property
    def values(self) -> List[float]:
        """Gain per band (dB)"""
        ...
    
    @property
    def preset(self) -> Optional[str]:
        """Selected preset name"""
        ...
    
    @property
    def preset_names(self) -> List[str]:
        """Preset names, sorted"""
        ...
    
    @property
    def preset_curves(self) -> List["EqualizerCurve"]:
        """Curves in the same order as preset_names"""
        ...
    
    def select_preset(self, name: Optional[str]) -> None:
        """Apply a preset, or the defaults for None"""
        ...
    
    def set_values(self, values: List[float]) -> None:
        """Replace all gains"""
        ...
    
    def set_band_value(self, index: int, value: float) -> None:
        """Replace one gain"""
        ...
    
    def add_band(self, frequency: float) -> int:
        """Add a band; returns its index"""
        ...
    
    def remove_band(self, index: int) -> None:
        """Remove a band"""
        ...
    
    def save_preset(self, name: str) -> int:
        """Save current gains as a preset; returns its index"""
        ...
    
    def delete_preset(self, name: str) -> Optional[int]:
        """Delete a preset; returns the index it occupied"""
        ...
    
    def column_label(self, index: int) -> str:
        """Column title for a band"""
        ...


__all__ = [
    "IEventBus",
    "IPresetStore",
    "ILocalSettings",
    "IConfigService",
    "IEqualizerService",
]
