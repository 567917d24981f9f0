# -*- coding: utf-8 -*-
"""
Application Container Module

Defines the dependency container for the application, holding all service instances centrally.

Design Principles:
- Only the top-level UI holds the complete AppContainer
- Equalizer screens receive the equalizer service, not the container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols import IConfigService, IEqualizerService, IEventBus, ILocalSettings, IPresetStore


@dataclass
class AppContainer:
    """Application Dependency Container
    
    Holds all service instances centrally, serving as the composition root for dependency injection.
    
    Usage Example:
        container = AppContainerFactory.create()
        screen = EqualizerScreen(container.equalizer)
    """
    
    config: "IConfigService"
    event_bus: "IEventBus"
    equalizer: "IEqualizerService"
    
    # === Storage (owned by the equalizer service) ===
    # Use field(repr=False) to avoid leaking in debug output
    preset_store: "IPresetStore" = field(default=None, repr=False)
    settings: "ILocalSettings" = field(default=None, repr=False)
    
    def cleanup(self) -> None:
        """Clean up all resources
        
        Should be called when the application exits.
        """
        if self.event_bus and hasattr(self.event_bus, 'shutdown'):
            self.event_bus.shutdown()
