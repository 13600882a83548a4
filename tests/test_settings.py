"""
Tests for the JSON settings file

Usage:
    python tests/test_settings.py
"""

import json
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from klotski.settings import DEFAULT_SETTINGS, load_settings


def test_missing_file_gives_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        settings = load_settings(Path(tmp) / "config.json")
    assert settings == DEFAULT_SETTINGS
    assert settings["solve_step_delay_ms"] == 650
    assert settings["hint_delay_ms"] == 500
    assert settings["request_timeout_sec"] is None


def test_partial_file_merged_over_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        path.write_text(json.dumps({"server_url": "http://10.0.0.5:9000"}), encoding="utf-8")
        settings = load_settings(path)
    assert settings["server_url"] == "http://10.0.0.5:9000"
    assert settings["flash_ms"] == 250


def test_corrupt_file_falls_back():
    """Invalid JSON or a non-object top level yields defaults."""
    for text in ["{not json", "[1, 2, 3]"]:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(text, encoding="utf-8")
            assert load_settings(path) == DEFAULT_SETTINGS


def test_invalid_values_fall_back_per_key():
    """A bad value resets only its own key; unknown keys are dropped."""
    config = {
        "solve_step_delay_ms": 300,
        "hint_delay_ms": -5,
        "flash_ms": "fast",
        "debug_enabled": 1,
        "request_timeout_sec": 2.5,
        "server_url": "   ",
        "strategy_name": "greedy",
    }
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        path.write_text(json.dumps(config), encoding="utf-8")
        loaded = load_settings(path)

    assert loaded["solve_step_delay_ms"] == 300
    assert loaded["request_timeout_sec"] == 2.5
    assert loaded["hint_delay_ms"] == 500
    assert loaded["flash_ms"] == 250
    assert loaded["debug_enabled"] is False
    assert loaded["server_url"] == "http://localhost:8080"
    assert "strategy_name" not in loaded


def test_timeout_must_be_positive():
    for bad in [0, -1, True, "10"]:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"request_timeout_sec": bad}), encoding="utf-8")
            assert load_settings(path)["request_timeout_sec"] is None


def test_defaults_not_shared():
    """Callers get a copy, so edits never leak into DEFAULT_SETTINGS."""
    with tempfile.TemporaryDirectory() as tmp:
        settings = load_settings(Path(tmp) / "missing.json")
    settings["flash_ms"] = 1
    assert DEFAULT_SETTINGS["flash_ms"] == 250


def main():
    """Run all tests."""
    tests = [(name, fn) for name, fn in sorted(globals().items()) if name.startswith("test_")]
    failed = 0
    for name, fn in tests:
        try:
            fn()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {name}: [FAIL] {e}")
    print()
    print("All tests PASSED!" if not failed else f"{failed} tests FAILED!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
