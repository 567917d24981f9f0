"""
Preset Store Module

Owns the durable equalizer preset collection: a property list holding
``{"presets": [{"name": ..., "values": [{"frequency": ..., "value": ...}]}]}``.

The stored collection is always sorted by preset name and holds at most
one preset per name. Callers must not invoke mutating operations from more
than one thread at a time.
"""

from __future__ import annotations

import logging
import os
import plistlib
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union
from xml.parsers.expat import ExpatError

from core.errors import PresetNotFound, StorageCorrupt, StorageUnavailable
from models.eq_preset import (
    EqualizerPreset,
    EqualizerValue,
    presets_from_payload,
    presets_to_payload,
    sort_presets,
)

logger = logging.getLogger(__name__)


PRESETS_FILE_NAME = "equalizer-presets.plist"

# Bundled read-only defaults, copied into place on first run
BUNDLED_PRESETS_PATH = Path(__file__).parent / "resources" / PRESETS_FILE_NAME

PLIST_FORMATS = {
    'binary': plistlib.FMT_BINARY,
    'xml': plistlib.FMT_XML,
}


class PresetStore:
    """
    Preset Store

    Single authority for reading and writing the preset file.

    Usage Example:
        store = PresetStore("~/equalizer-presets.plist")

        presets = store.load()
        index = store.upsert("Jazz", [EqualizerValue(60, 2.0), EqualizerValue(1000, 1.5)])
        store.delete("Flat")
    """

    def __init__(
        self,
        path: Union[str, Path],
        bundled_path: Optional[Union[str, Path]] = BUNDLED_PRESETS_PATH,
        plist_format: str = "binary",
    ):
        if plist_format not in PLIST_FORMATS:
            raise ValueError(f"Unsupported plist format: {plist_format}")

        self._path = Path(path).expanduser()
        self._bundled_path = Path(bundled_path).expanduser() if bundled_path else None
        self._format = PLIST_FORMATS[plist_format]

    @property
    def path(self) -> Path:
        return self._path

    @property
    def bundled_path(self) -> Optional[Path]:
        return self._bundled_path

    # ===== Seeding =====

    def import_bundled_presets(self) -> bool:
        """
        Copy the bundled presets into place if no durable file exists yet.

        A missing bundled file is not an error; the store then starts empty.

        Returns:
            bool: True if the bundled file was copied.

        Raises:
            StorageUnavailable: The copy could not be written.
        """
        if self._path.exists():
            return False

        if self._bundled_path is None or not self._bundled_path.is_file():
            logger.info("No bundled presets found at %s, starting empty", self._bundled_path)
            return False

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self._bundled_path, self._path)
        except OSError as e:
            logger.error("Failed to import bundled presets to %s: %s", self._path, e)
            raise StorageUnavailable(f"Cannot write presets file: {e}", self._path) from e

        logger.info("Imported bundled presets from %s", self._bundled_path)
        return True

    # ===== Read / Write =====

    def load(self) -> List[EqualizerPreset]:
        """
        Read the preset collection, seeding it on first use.

        Returns:
            List[EqualizerPreset]: Presets sorted by name.

        Raises:
            StorageUnavailable: The file exists but cannot be read.
            StorageCorrupt: The file is not a valid preset property list.
        """
        self.import_bundled_presets()

        if not self._path.exists():
            return []

        try:
            raw = self._path.read_bytes()
        except OSError as e:
            logger.error("Failed to read presets file %s: %s", self._path, e)
            raise StorageUnavailable(f"Cannot read presets file: {e}", self._path) from e

        try:
            presets = presets_from_payload(plistlib.loads(raw))
        except (
            plistlib.InvalidFileException,
            ExpatError,
            KeyError,
            TypeError,
            ValueError,
            OverflowError,
            AttributeError,
        ) as e:
            logger.error("Presets file %s is corrupt: %s", self._path, e)
            raise StorageCorrupt(f"Cannot parse presets file: {e}", self._path) from e

        return self._collapse_duplicates(presets)

    def save(self, presets: Iterable[EqualizerPreset]) -> None:
        """
        Write the whole collection, sorted by name.

        The file is replaced atomically, so a failed write leaves the
        previous content in place.

        Raises:
            StorageUnavailable: The file cannot be written.
        """
        data = plistlib.dumps(presets_to_payload(presets), fmt=self._format)

        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            if self._path.exists():
                shutil.copymode(self._path, tmp_name)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            logger.error("Failed to save presets file %s: %s", self._path, e)
            raise StorageUnavailable(f"Cannot write presets file: {e}", self._path) from e

        logger.debug("Presets saved to: %s", self._path)

    # ===== Mutations =====

    def upsert(self, name: str, values: Iterable[EqualizerValue]) -> int:
        """
        Insert a preset, replacing any preset with the same name.

        Args:
            name: Preset name (exact, case-sensitive match).
            values: Band values; they replace the old ones wholesale.

        Returns:
            int: Position of the preset in the sorted collection.
        """
        preset = EqualizerPreset(name=name, values=tuple(values))
        presets = [p for p in self.load() if p.name != name]
        presets.append(preset)
        presets = sort_presets(presets)

        self.save(presets)
        logger.info("Saved preset %r", name)
        return next(i for i, p in enumerate(presets) if p.name == name)

    def delete(self, name: str) -> None:
        """Delete a preset; deleting an absent name does nothing."""
        presets = self.load()
        remaining = [p for p in presets if p.name != name]
        if len(remaining) == len(presets):
            logger.debug("Preset %r not found, nothing to delete", name)
            return

        self.save(remaining)
        logger.info("Deleted preset %r", name)

    # ===== Queries =====

    def get(self, name: str) -> Optional[EqualizerPreset]:
        for preset in self.load():
            if preset.name == name:
                return preset
        return None

    def require(self, name: str) -> EqualizerPreset:
        """
        Get a preset by name.

        Raises:
            PresetNotFound: No preset with that name.
        """
        preset = self.get(name)
        if preset is None:
            raise PresetNotFound(name)
        return preset

    def names(self) -> List[str]:
        return [p.name for p in self.load()]

    def _collapse_duplicates(self, presets: List[EqualizerPreset]) -> List[EqualizerPreset]:
        """Keep the last preset for each name (input is sorted by name)."""
        by_name = {}
        for preset in presets:
            if preset.name in by_name:
                logger.warning("Duplicate preset %r in %s, keeping the last one", preset.name, self._path)
            by_name[preset.name] = preset
        return sort_presets(by_name.values())
