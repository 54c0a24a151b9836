"""Tests for call-site capture and the capture configuration holder."""

from __future__ import annotations

import sys

import pytest

from terror import (
    NO_LOCATION,
    CaptureConfig,
    Location,
    capture,
    capture_config,
    clean_func_name,
    configure_capture,
    get_capture_config,
    new,
    reset_capture_config,
    set_capture_config,
)
from terror.config import TerrorSettings

THIS_FILE = "terror/tests/test_location.py"


def test_capture_caller() -> None:
    loc, line = capture(), sys._getframe().f_lineno
    assert loc == Location(THIS_FILE, line, "test_capture_caller")
    assert str(loc) == f"{THIS_FILE}:{line} (test_capture_caller)"


def test_capture_skip() -> None:
    def helper() -> Location:
        return capture(1)

    loc, line = helper(), sys._getframe().f_lineno
    assert loc.line == line
    assert loc.function == "test_capture_skip"


def test_capture_beyond_stack() -> None:
    assert capture(100_000) == NO_LOCATION


def test_no_location_sentinel() -> None:
    assert not NO_LOCATION
    assert NO_LOCATION == Location()
    assert capture()
    assert Location("f.py", 1, "f") != NO_LOCATION


@pytest.mark.parametrize(("qualname", "expected"), [
    ("func", "func"),
    ("Receiver.method", "Receiver.method"),
    ("outer.<locals>.inner", "outer.inner"),
    ("A.m.<locals>.B.n.<locals>.<lambda>", "A.m.B.n.<lambda>"),
    ("<module>", "<module>"),
])
def test_clean_func_name(qualname: str, expected: str) -> None:
    assert clean_func_name(qualname) == expected


# ═════════════════════════════════════════════════════════════════════════════
# Capture Configuration
# ═════════════════════════════════════════════════════════════════════════════


def test_custom_sanitizer_scoped() -> None:
    before = get_capture_config()
    with capture_config(CaptureConfig(clean_file_name=lambda _: "<redacted>")):
        assert new("x").location().file == "<redacted>"
    assert get_capture_config() is before
    assert new("x").location().file == THIS_FILE


def test_set_and_reset() -> None:
    previous = set_capture_config(CaptureConfig())
    try:
        assert new("x").location().file.endswith(THIS_FILE)
        assert new("x").location().file != THIS_FILE
        reset_capture_config()
        assert get_capture_config() == CaptureConfig()
    finally:
        set_capture_config(previous)


def test_trim_prefix() -> None:
    clean = CaptureConfig.trim_prefix("/build/").clean_file_name
    assert clean("/build/pkg/mod.py") == "pkg/mod.py"
    assert clean("/elsewhere/mod.py") == "/elsewhere/mod.py"


def test_configure_capture_from_settings() -> None:
    previous = get_capture_config()
    try:
        config = configure_capture(TerrorSettings(trim_prefix="/build"))
        assert get_capture_config() is config
        assert config.clean_file_name("/build/pkg/mod.py") == "pkg/mod.py"

        config = configure_capture(TerrorSettings())
        assert config.clean_file_name("/build/pkg/mod.py") == "/build/pkg/mod.py"
    finally:
        set_capture_config(previous)
