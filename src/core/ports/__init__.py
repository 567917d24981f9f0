# -*- coding: utf-8 -*-
"""
Ports Interfaces Package

Defines the interfaces between the equalizer and its storage (preset file, settings store).

Design Principles:
- Use Protocol to define interfaces, supporting structural subtyping.
- Service layer depends on these interfaces rather than concrete implementations.
- Facilitates replacing with fake/mock during testing.
"""

from core.ports.presets import IPresetStore
from core.ports.settings import ILocalSettings

__all__ = [
    "IPresetStore",
    "ILocalSettings",
]
