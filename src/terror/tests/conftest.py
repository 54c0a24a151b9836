"""Shared fixtures.

Captured file names are absolute and depend on where the checkout lives.
Every test trims the source root so traces read ``terror/tests/callsites.py``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import callsites
import pytest

from terror import CaptureConfig, capture_config
from terror.config import clear_settings_cache
from terror.logging import reset_logging

SOURCE_ROOT = str(Path(callsites.__file__).parents[2]) + os.sep


@pytest.fixture(autouse=True)
def trimmed_paths() -> Iterator[CaptureConfig]:
    """Strip the source root from captured file names."""
    with capture_config(CaptureConfig.trim_prefix(SOURCE_ROOT)) as config:
        yield config


@pytest.fixture(autouse=True)
def clean_globals() -> Iterator[None]:
    """Reset cached settings and logging configuration around each test."""
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()
