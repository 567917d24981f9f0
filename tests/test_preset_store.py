"""
PresetStore Unit Tests
"""

import os
import plistlib
import stat
from pathlib import Path

import pytest

from core.errors import PresetNotFound, StorageCorrupt, StorageUnavailable
from core.preset_store import PresetStore
from models.eq_preset import EqualizerPreset, EqualizerValue


def _values(*pairs):
    return [EqualizerValue(float(f), float(v)) for f, v in pairs]


@pytest.fixture
def store(tmp_path: Path, bundled_presets: Path) -> PresetStore:
    return PresetStore(tmp_path / "data" / "equalizer-presets.plist", bundled_path=bundled_presets)


class TestSeedImport:
    """First-run import of the bundled presets."""

    def test_first_load_seeds_and_sorts(self, store):
        presets = store.load()

        assert [p.name for p in presets] == ["Bass Boost", "Flat"]
        assert store.path.exists()

    def test_seed_copies_bytes_verbatim(self, store, bundled_presets):
        assert store.import_bundled_presets() is True
        assert store.path.read_bytes() == bundled_presets.read_bytes()

    def test_seed_is_idempotent(self, store):
        assert store.import_bundled_presets() is True
        first = store.path.read_bytes()

        assert store.import_bundled_presets() is False
        assert store.path.read_bytes() == first

    def test_seed_does_not_overwrite_user_edits(self, store):
        store.load()
        store.upsert("Mine", _values((60, 1.0), (1000, 2.0)))
        edited = store.path.read_bytes()

        assert store.import_bundled_presets() is False
        assert store.path.read_bytes() == edited
        assert "Mine" in store.names()

    def test_missing_bundle_yields_empty_store(self, tmp_path):
        store = PresetStore(tmp_path / "presets.plist", bundled_path=tmp_path / "missing.plist")

        assert store.import_bundled_presets() is False
        assert store.load() == []
        assert not store.path.exists()

    def test_no_bundle_configured(self, tmp_path):
        store = PresetStore(tmp_path / "presets.plist", bundled_path=None)

        assert store.load() == []

    def test_packaged_bundle_is_valid(self, tmp_path):
        store = PresetStore(tmp_path / "presets.plist")

        presets = store.load()

        assert "Flat" in [p.name for p in presets]
        assert [p.name for p in presets] == sorted(p.name for p in presets)
        assert all(not p.is_degenerate for p in presets)


class TestPresetStoreOperations:
    """Load / save / upsert / delete."""

    def test_scenario_upsert_and_delete(self, store):
        assert store.names() == ["Bass Boost", "Flat"]

        index = store.upsert("Jazz", _values((60, 2.0), (1000, 1.5)))

        assert index == 2
        assert store.names() == ["Bass Boost", "Flat", "Jazz"]

        store.delete("Flat")

        assert store.names() == ["Bass Boost", "Jazz"]

    def test_upsert_replaces_values_wholesale(self, store):
        store.upsert("A", _values((60, 1.0), (1000, 1.0), (4000, 1.0)))
        store.upsert("A", _values((100, -3.0), (200, 3.0)))

        matches = [p for p in store.load() if p.name == "A"]

        assert len(matches) == 1
        assert matches[0].values == tuple(_values((100, -3.0), (200, 3.0)))

    def test_upsert_returns_sorted_index(self, store):
        assert store.upsert("Aardvark", _values((60, 0), (100, 0))) == 0
        assert store.upsert("Zulu", _values((60, 0), (100, 0))) == 3
        assert store.upsert("Bass Boost", _values((60, 9), (100, 9))) == 1

    def test_upsert_is_case_sensitive(self, store):
        store.upsert("flat", _values((60, 1.0), (100, 1.0)))

        assert store.names() == ["Bass Boost", "Flat", "flat"]

    def test_upsert_accepts_degenerate_preset(self, store):
        store.upsert("Single", _values((60, 3.0)))

        preset = store.get("Single")
        assert preset is not None
        assert preset.is_degenerate

    def test_delete_missing_is_noop(self, store):
        store.load()
        before = store.path.read_bytes()

        store.delete("Nope")

        assert store.path.read_bytes() == before
        assert store.names() == ["Bass Boost", "Flat"]

    def test_sequence_keeps_sorted_and_unique(self, store):
        for name in ["m", "B", "a", "Z", "m", "B"]:
            store.upsert(name, _values((60, 1.0), (100, 2.0)))
        store.delete("Z")
        store.delete("Z")

        names = store.names()

        assert names == sorted(names)
        assert len(names) == len(set(names))
        assert names == ["B", "Bass Boost", "Flat", "a", "m"]

    def test_save_and_load_round_trip(self, tmp_path):
        store = PresetStore(tmp_path / "presets.plist", bundled_path=None)
        presets = [
            EqualizerPreset("Zeta", tuple(_values((1000, 1.0), (60, -1.5)))),
            EqualizerPreset("Alpha", tuple(_values((60, 2.25), (400, 0.0)))),
        ]

        store.save(presets)

        assert store.load() == sorted(presets, key=lambda p: p.name)

    def test_load_resorts_unsorted_file(self, tmp_path, write_presets):
        path = write_presets(tmp_path / "presets.plist", {
            "c": [(60, 0)], "a": [(60, 0)], "b": [(60, 0)],
        })

        assert PresetStore(path, bundled_path=None).names() == ["a", "b", "c"]

    def test_load_collapses_duplicate_names(self, tmp_path):
        path = tmp_path / "presets.plist"
        path.write_bytes(plistlib.dumps({"presets": [
            {"name": "A", "values": [{"frequency": 60.0, "value": 1.0}]},
            {"name": "A", "values": [{"frequency": 60.0, "value": 2.0}]},
        ]}))

        presets = PresetStore(path, bundled_path=None).load()

        assert len(presets) == 1
        assert presets[0].values == (EqualizerValue(60.0, 2.0),)

    def test_reads_xml_and_writes_binary(self, tmp_path, write_presets):
        path = write_presets(tmp_path / "presets.plist", {"Flat": [(60, 0), (100, 0)]})
        store = PresetStore(path, bundled_path=None)

        store.upsert("Jazz", _values((60, 2.0), (1000, 1.5)))

        assert path.read_bytes().startswith(b"bplist00")
        assert store.names() == ["Flat", "Jazz"]

    def test_xml_format_option(self, tmp_path):
        store = PresetStore(tmp_path / "presets.plist", bundled_path=None, plist_format="xml")

        store.save([EqualizerPreset("Flat", tuple(_values((60, 0), (100, 0))))])

        assert store.path.read_bytes().startswith(b"<?xml")

    def test_unknown_format_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            PresetStore(tmp_path / "presets.plist", plist_format="json")

    def test_file_layout(self, tmp_path):
        store = PresetStore(tmp_path / "presets.plist", bundled_path=None)
        store.upsert("Jazz", _values((60, 2.0), (1000, 1.5)))

        payload = plistlib.loads(store.path.read_bytes())

        assert payload == {"presets": [{
            "name": "Jazz",
            "values": [
                {"frequency": 60.0, "value": 2.0},
                {"frequency": 1000.0, "value": 1.5},
            ],
        }]}

    def test_get_and_require(self, store):
        assert store.get("Flat").name == "Flat"
        assert store.get("Missing") is None

        with pytest.raises(PresetNotFound) as exc_info:
            store.require("Missing")
        assert exc_info.value.name == "Missing"


class TestPresetStoreFailures:
    """Storage errors."""

    def test_garbage_file_is_corrupt(self, tmp_path):
        path = tmp_path / "presets.plist"
        path.write_bytes(b"definitely not a plist")

        with pytest.raises(StorageCorrupt) as exc_info:
            PresetStore(path, bundled_path=None).load()
        assert exc_info.value.path == path

    def test_truncated_xml_is_corrupt(self, tmp_path, write_presets):
        path = write_presets(tmp_path / "presets.plist", {"Flat": [(60, 0)]})
        path.write_bytes(path.read_bytes()[:-40])

        with pytest.raises(StorageCorrupt):
            PresetStore(path, bundled_path=None).load()

    @pytest.mark.parametrize("payload", [
        ["not", "a", "dict"],
        {"other": []},
        {"presets": "nope"},
        {"presets": [{"name": 1, "values": []}]},
        {"presets": [{"name": "A", "values": [{"frequency": 60.0}]}]},
        {"presets": [{"name": "A", "values": [{"frequency": "x", "value": 1.0}]}]},
    ])
    def test_wrong_structure_is_corrupt(self, tmp_path, payload):
        path = tmp_path / "presets.plist"
        path.write_bytes(plistlib.dumps(payload))

        with pytest.raises(StorageCorrupt):
            PresetStore(path, bundled_path=None).load()

    @pytest.mark.parametrize("value", [
        "<date>not-a-date</date>",
        "<integer>" + "9" * 400 + "</integer>",
    ], ids=["bad-date", "huge-frequency"])
    def test_unconvertible_xml_value_is_corrupt(self, tmp_path, value):
        path = tmp_path / "presets.plist"
        path.write_bytes(
            (
                '<?xml version="1.0" encoding="UTF-8"?>\n'
                '<plist version="1.0"><dict><key>presets</key><array><dict>'
                "<key>name</key><string>A</string>"
                "<key>values</key><array><dict>"
                f"<key>frequency</key>{value}"
                "<key>value</key><real>1.0</real>"
                "</dict></array></dict></array></dict></plist>"
            ).encode("utf-8")
        )

        with pytest.raises(StorageCorrupt):
            PresetStore(path, bundled_path=None).load()

    def test_save_keeps_file_mode(self, store):
        store.save([EqualizerPreset("A")])
        os.chmod(store.path, 0o644)

        store.upsert("B", [])

        assert stat.S_IMODE(store.path.stat().st_mode) == 0o644
        assert store.names() == ["A", "B"]

    def test_unreadable_path_is_unavailable(self, tmp_path):
        path = tmp_path / "presets.plist"
        path.mkdir()

        with pytest.raises(StorageUnavailable):
            PresetStore(path, bundled_path=None).load()

    def test_failed_save_keeps_previous_file(self, store, monkeypatch):
        store.load()
        before = store.path.read_bytes()

        def fail_replace(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(StorageUnavailable):
            store.upsert("Jazz", _values((60, 2.0), (1000, 1.5)))

        monkeypatch.undo()
        assert store.path.read_bytes() == before
        assert store.names() == ["Bass Boost", "Flat"]
        assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]

    def test_corrupt_file_blocks_mutation(self, tmp_path):
        path = tmp_path / "presets.plist"
        path.write_bytes(b"garbage")
        store = PresetStore(path, bundled_path=None)

        with pytest.raises(StorageCorrupt):
            store.upsert("Jazz", _values((60, 2.0)))
        assert path.read_bytes() == b"garbage"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
