# -*- coding: utf-8 -*-
"""
Event Bus Module - Publish-Subscribe Pattern Implementation

Notifies the UI layer about equalizer and preset changes.

Design Notes:
- Pure Python, does not depend on any UI framework
- Callbacks run synchronously on the publishing thread; the equalizer is
  driven from a single UI thread, so there is no worker pool
"""

from typing import Dict, Callable, Any, Optional
from enum import Enum
import threading
import uuid
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event type enumeration"""

    # Preset events
    PRESET_SAVED = "preset_saved"
    PRESET_DELETED = "preset_deleted"
    PRESET_SELECTED = "preset_selected"

    # Band events
    EQUALIZER_VALUES_CHANGED = "equalizer_values_changed"
    EQUALIZER_BANDS_CHANGED = "equalizer_bands_changed"


class EventBus:
    """
    Event Bus - Singleton Pattern

    Usage example:
        event_bus = EventBus()

        def on_preset_saved(data):
            logger.info("Saved: %s", data["name"])

        sub_id = event_bus.subscribe(EventType.PRESET_SAVED, on_preset_saved)
        event_bus.publish(EventType.PRESET_SAVED, {"name": "Jazz", "index": 2})
        event_bus.unsubscribe(sub_id)
    """

    _instance: Optional['EventBus'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'EventBus':
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._subscribers: Dict[EventType, Dict[str, Callable]] = {}
        self._initialized = True

    def subscribe(
        self,
        event_type: EventType,
        callback: Callable[[Any], None]
    ) -> str:
        """
        Subscribe to event

        Args:
            event_type: Event type
            callback: Callback function, receiving event data as an argument

        Returns:
            str: Subscription ID, used for unsubscription
        """
        subscription_id = str(uuid.uuid4())
        self._subscribers.setdefault(event_type, {})[subscription_id] = callback
        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Unsubscribe

        Args:
            subscription_id: The ID returned when subscribing

        Returns:
            bool: Whether the unsubscription was successful
        """
        for callbacks in self._subscribers.values():
            if subscription_id in callbacks:
                del callbacks[subscription_id]
                return True
        return False

    def publish(self, event_type: EventType, data: Any = None) -> None:
        """Publish event to every subscriber, in subscription order."""
        for callback in list(self._subscribers.get(event_type, {}).values()):
            self._safe_call(callback, data)

    def _safe_call(self, callback: Callable, data: Any) -> None:
        """Safely call a callback function"""
        try:
            callback(data)
        except Exception as e:
            # Avoid loop: Do not use publish to report error events
            logger.error("Event callback execution error: %s", e)

    def clear(self) -> None:
        """Clear all subscriptions"""
        self._subscribers.clear()

    def shutdown(self) -> None:
        """Drop all subscribers."""
        self.clear()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing only)"""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.shutdown()
                cls._instance = None
