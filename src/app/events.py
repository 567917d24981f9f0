# -*- coding: utf-8 -*-
"""
Event Types Module

Re-exports EventType from core.event_bus for use by the UI layer.
This ensures the UI layer does not need to import directly from the core layer.

Usage Example:
    from app.events import EventType
    
    # Subscribe to an event
    container.event_bus.subscribe(EventType.PRESET_SAVED, on_preset_saved)
"""

from core.event_bus import EventType

__all__ = ["EventType"]
