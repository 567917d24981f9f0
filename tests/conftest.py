"""
Test Configuration File

Unified setup for Python path, avoiding sys.path.insert in each test file.
Provides helpers for writing preset property lists.
"""

import plistlib
import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def write_presets_plist(path: Path, presets: dict, fmt=plistlib.FMT_XML) -> Path:
    """Write {name: [(frequency, value), ...]} as a preset property list."""
    payload = {
        "presets": [
            {
                "name": name,
                "values": [{"frequency": float(f), "value": float(v)} for f, v in values],
            }
            for name, values in presets.items()
        ]
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(plistlib.dumps(payload, fmt=fmt))
    return path


@pytest.fixture
def bundled_presets(tmp_path: Path) -> Path:
    """Bundled default file holding "Flat" and "Bass Boost" (unsorted)."""
    return write_presets_plist(
        tmp_path / "bundle" / "equalizer-presets.plist",
        {
            "Flat": [(60, 0.0), (1000, 0.0), (15000, 0.0)],
            "Bass Boost": [(60, 6.0), (150, 4.0), (1000, 0.0)],
        },
    )


@pytest.fixture
def write_presets():
    """Expose write_presets_plist to tests."""
    return write_presets_plist
