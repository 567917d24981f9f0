"""
Equalizer Service

Editable equalizer state backed by the preset store: current bands and
gains, the preset list, and the selected preset.
"""

from __future__ import annotations

import bisect
import logging
from typing import Iterable, List, NamedTuple, Optional, Sequence

from core.event_bus import EventBus, EventType
from core.errors import BandConfigurationError
from core.ports.presets import IPresetStore
from models.band_config import DEFAULT_BANDS, DEFAULT_GAIN, BandConfiguration, format_frequency
from models.eq_curve import EqualizerCurve
from services.local_settings import EqualizerSettings

logger = logging.getLogger(__name__)


class PresetEntry(NamedTuple):
    """A preset name paired with its curve"""
    name: str
    curve: EqualizerCurve


class EqualizerService:
    """
    Equalizer Service

    Every change that touches durable storage is written before the
    in-memory state is updated, so a storage failure propagates to the
    caller and leaves this object exactly as it was.

    Usage Example:
        service = EqualizerService(store, EqualizerSettings(local_settings))

        service.add_band(8000)
        service.set_band_value(0, 3.5)
        index = service.save_preset("Jazz")
        service.select_preset("Flat")
    """

    def __init__(
        self,
        store: IPresetStore,
        settings: EqualizerSettings,
        event_bus: Optional[EventBus] = None,
        default_bands: Sequence[float] = DEFAULT_BANDS,
        default_gain: float = DEFAULT_GAIN,
    ):
        self._store = store
        self._settings = settings
        self._event_bus = event_bus or EventBus()
        self._default_bands = tuple(float(b) for b in default_bands)
        self._default_gain = float(default_gain)

        self._entries: List[PresetEntry] = [
            PresetEntry(p.name, EqualizerCurve.from_preset(p)) for p in store.load()
        ]
        self._config = self._restore_configuration()
        self._on = not self._config.is_flat

        self._preset: Optional[str] = None
        persisted = settings.preset_name
        if persisted is not None:
            if self._index_of(persisted) is not None:
                self._preset = persisted
            else:
                logger.debug("Persisted preset %r no longer exists", persisted)

    def _restore_configuration(self) -> BandConfiguration:
        bands = self._settings.bands
        values = self._settings.values
        if bands and values and len(bands) > 1 and len(values) == len(bands):
            try:
                return BandConfiguration(tuple(bands), tuple(values))
            except BandConfigurationError as e:
                logger.warning("Ignoring saved bands: %s", e)
        return self._default_configuration()

    def _default_configuration(self) -> BandConfiguration:
        return BandConfiguration.default(self._default_bands, self._default_gain)

    # ===== State =====

    @property
    def bands(self) -> List[float]:
        return list(self._config.bands)

    @property
    def values(self) -> List[float]:
        return list(self._config.values)

    @property
    def configuration(self) -> BandConfiguration:
        return self._config

    @property
    def preset(self) -> Optional[str]:
        """Selected preset name; None once the gains were edited by hand"""
        return self._preset

    @property
    def on(self) -> bool:
        """Whether any band has a non-zero gain"""
        return self._on

    @property
    def presets(self) -> List[PresetEntry]:
        return list(self._entries)

    @property
    def preset_names(self) -> List[str]:
        return [e.name for e in self._entries]

    @property
    def preset_curves(self) -> List[EqualizerCurve]:
        return [e.curve for e in self._entries]

    def curve_for(self, name: str) -> Optional[EqualizerCurve]:
        index = self._index_of(name)
        return None if index is None else self._entries[index].curve

    def column_label(self, index: int) -> str:
        """Column title: frequency label and gain on two lines"""
        return f"{format_frequency(self._config.bands[index])}\n{self._config.values[index]:.2f}"

    def _index_of(self, name: str) -> Optional[int]:
        for i, entry in enumerate(self._entries):
            if entry.name == name:
                return i
        return None

    # ===== Preset selection =====

    def select_preset(self, name: Optional[str]) -> None:
        """
        Apply a preset's curve, or the default bands when name is None.

        Presets with fewer than 2 frequencies also fall back to the default
        bands. Unknown names are ignored.
        """
        if name == self._preset:
            return

        config = self._default_configuration()
        if name is not None:
            index = self._index_of(name)
            if index is None:
                logger.warning("Cannot select unknown preset %r", name)
                return
            curve = self._entries[index].curve
            if len(curve) > 1:
                config = BandConfiguration.from_curve(curve)

        self._settings.bands = list(config.bands)
        self._settings.values = list(config.values)
        self._settings.preset_name = name

        self._config = config
        self._preset = name
        self._on = not config.is_flat
        self._event_bus.publish(EventType.PRESET_SELECTED, name)

    def persist_preset(self, name: Optional[str]) -> None:
        """Remember the selected preset across restarts"""
        self._settings.preset_name = name

    def reset_persisted_preset(self) -> None:
        self._settings.preset_name = None

    # ===== Band editing =====

    def set_values(self, values: Iterable[float]) -> None:
        """
        Replace all gains.

        Editing gains by hand deselects the current preset.

        Raises:
            BandConfigurationError: Length differs from the number of bands.
        """
        config = self._config.with_values(values)
        if config == self._config:
            return
        self._apply_edit(config)
        self._event_bus.publish(EventType.EQUALIZER_VALUES_CHANGED, list(config.values))
        self._event_bus.publish(EventType.PRESET_SELECTED, None)

    def set_band_value(self, index: int, value: float) -> None:
        self.set_values(self._config.with_value(index, value).values)

    def add_band(self, frequency: float) -> int:
        """
        Add a band with zero gain.

        Returns:
            int: Index of the new band.

        Raises:
            BandConfigurationError: Frequency not positive or already present.
        """
        config = self._config.add_band(frequency)
        self._apply_edit(config)
        self._event_bus.publish(EventType.EQUALIZER_BANDS_CHANGED, list(config.bands))
        return config.bands.index(float(frequency))

    def remove_band(self, index: int) -> None:
        """
        Remove a band.

        Raises:
            BandConfigurationError: Only 2 bands remain or index out of range.
        """
        config = self._config.remove_band(index)
        self._apply_edit(config)
        self._event_bus.publish(EventType.EQUALIZER_BANDS_CHANGED, list(config.bands))

    def _apply_edit(self, config: BandConfiguration) -> None:
        if config.bands != self._config.bands:
            self._settings.bands = list(config.bands)
        self._settings.values = list(config.values)
        if self._preset is not None:
            self._settings.preset_name = None

        self._config = config
        self._preset = None
        self._on = not config.is_flat

    # ===== Preset CRUD =====

    def save_preset(self, name: str) -> int:
        """
        Save the current bands and gains under a name.

        An existing preset with the same name is replaced. The saved preset
        becomes the selected one.

        Returns:
            int: Position of the preset in the sorted preset list.

        Raises:
            ValueError: Blank name.
            StorageUnavailable, StorageCorrupt: Store failure; nothing changed.
        """
        if not name or not name.strip():
            raise ValueError("Preset name cannot be empty")

        values = self._config.to_values()
        index = self._store.upsert(name, values)

        entry = PresetEntry(name, EqualizerCurve.from_values(values))
        existing = self._index_of(name)
        if existing is not None:
            self._entries[existing] = entry
        else:
            self._insert_sorted(entry)

        self._preset = None
        self.select_preset(name)
        self._event_bus.publish(EventType.PRESET_SAVED, {'name': name, 'index': index})
        return index

    def _insert_sorted(self, entry: PresetEntry) -> None:
        names = [e.name for e in self._entries]
        self._entries.insert(bisect.bisect_right(names, entry.name), entry)

    def delete_preset(self, name: str) -> Optional[int]:
        """
        Delete a preset.

        Returns:
            Optional[int]: Index the preset occupied, or None if it did not exist.

        Raises:
            StorageUnavailable, StorageCorrupt: Store failure; nothing changed.
        """
        index = self._index_of(name)
        if index is None:
            logger.debug("Preset %r not found, nothing to delete", name)
            return None

        self._store.delete(name)
        del self._entries[index]

        if self._preset == name:
            self._settings.preset_name = None
            self._preset = None

        self._event_bus.publish(EventType.PRESET_DELETED, {'name': name, 'index': index})
        return index

    def reload_presets(self) -> None:
        """Re-read the preset list from the store."""
        presets = self._store.load()
        self._entries = [PresetEntry(p.name, EqualizerCurve.from_preset(p)) for p in presets]
        if self._preset is not None and self._index_of(self._preset) is None:
            self._preset = None
