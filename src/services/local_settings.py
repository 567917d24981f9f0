"""
Local Settings Module

Flat key/value settings persisted to a YAML file, and the typed view the
equalizer uses over it.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from core.ports.settings import ILocalSettings

logger = logging.getLogger(__name__)


class LocalSettings:
    """
    YAML-backed key/value store.

    Every mutation is written through to disk. An unreadable or corrupt
    file is treated as empty: these settings only mirror the current
    editor state and can be rebuilt from defaults.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()
        self._values: Dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load settings from %s: %s", self._path, e)
            return

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: root is not a mapping", self._path)
            return
        self._values = {str(k): v for k, v in data.items()}

    def _save(self) -> None:
        """Write all values atomically."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self._values, f, allow_unicode=True, default_flow_style=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key not in self._values:
            return
        del self._values[key]
        self._save()

    def list_keys(self) -> List[str]:
        return list(self._values)


class EqualizerSettings:
    """
    Typed access to the equalizer's persisted state.

    Getters return None when the stored value is missing or has the wrong
    type, so callers fall back to defaults instead of failing.

    Usage Example:
        settings = EqualizerSettings(LocalSettings("settings.yaml"))
        settings.bands = [60.0, 1000.0]
        settings.preset_name = None   # removes the key
    """

    BANDS_KEY = "enhancedBands"
    VALUES_KEY = "enhancedValues"
    PRESET_NAME_KEY = "enhancedPersistedPresetName"

    def __init__(self, store: ILocalSettings):
        self._store = store

    @property
    def store(self) -> ILocalSettings:
        return self._store

    @staticmethod
    def _float_list(raw: Any) -> Optional[List[float]]:
        if not isinstance(raw, (list, tuple)):
            return None
        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in raw):
            return None
        return [float(v) for v in raw]

    @property
    def bands(self) -> Optional[List[float]]:
        return self._float_list(self._store.get(self.BANDS_KEY))

    @bands.setter
    def bands(self, bands: Optional[List[float]]) -> None:
        self._set_or_remove(self.BANDS_KEY, None if bands is None else [float(b) for b in bands])

    @property
    def values(self) -> Optional[List[float]]:
        return self._float_list(self._store.get(self.VALUES_KEY))

    @values.setter
    def values(self, values: Optional[List[float]]) -> None:
        self._set_or_remove(self.VALUES_KEY, None if values is None else [float(v) for v in values])

    @property
    def preset_name(self) -> Optional[str]:
        name = self._store.get(self.PRESET_NAME_KEY)
        return name if isinstance(name, str) else None

    @preset_name.setter
    def preset_name(self, name: Optional[str]) -> None:
        self._set_or_remove(self.PRESET_NAME_KEY, name)

    def _set_or_remove(self, key: str, value: Any) -> None:
        if value is None:
            if self._store.get(key) is not None:
                self._store.remove(key)
        else:
            self._store.set(key, value)
