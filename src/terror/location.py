"""Call-site capture for chain nodes.

Resolves a single stack frame to a sanitized (file, line, function) triple.
File names pass through a process-wide, replaceable sanitizer so deployments
can redact build-machine paths without touching call sites.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator

if TYPE_CHECKING:
    from types import FrameType, TracebackType

    from .config import TerrorSettings

# ═══════════════════════════════════════════════════════════════════════════════
# Location
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Location:
    """A single stack frame position. The all-empty value means "not captured"."""

    file: str = ""
    line: int = 0
    function: str = ""

    def __bool__(self) -> bool:
        return bool(self.file or self.line or self.function)

    def __str__(self) -> str:
        return f"{self.file}:{self.line} ({self.function})"


NO_LOCATION = Location()


# ═══════════════════════════════════════════════════════════════════════════════
# Capture Configuration
# ═══════════════════════════════════════════════════════════════════════════════


def _identity(filename: str) -> str:
    return filename


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """Process-wide capture settings. Holds the file-name sanitizer."""

    clean_file_name: Callable[[str], str] = field(default=_identity)

    @classmethod
    def trim_prefix(cls, prefix: str) -> CaptureConfig:
        """Sanitizer stripping a leading path prefix (e.g. the checkout root)."""
        return cls(clean_file_name=lambda filename: filename.removeprefix(prefix))

    @classmethod
    def from_settings(cls, settings: TerrorSettings) -> CaptureConfig:
        return cls.trim_prefix(settings.trim_prefix) if settings.trim_prefix else cls()


_DEFAULT_CONFIG = CaptureConfig()
_config: CaptureConfig = _DEFAULT_CONFIG


def get_capture_config() -> CaptureConfig:
    return _config


def set_capture_config(config: CaptureConfig) -> CaptureConfig:
    """Install a new capture config, returning the previous one.

    Not safe against concurrent capture calls; configure once at start-up
    (or per test via capture_config()).
    """
    global _config
    previous, _config = _config, config
    return previous


def reset_capture_config() -> None:
    """Restore the identity sanitizer."""
    set_capture_config(_DEFAULT_CONFIG)


def configure_capture(settings: TerrorSettings | None = None) -> CaptureConfig:
    """Initialise the capture config from settings (TERROR_TRIM_PREFIX)."""
    if settings is None:
        from .config import get_settings
        settings = get_settings()
    config = CaptureConfig.from_settings(settings)
    set_capture_config(config)
    return config


@contextmanager
def capture_config(config: CaptureConfig) -> Iterator[CaptureConfig]:
    """Scoped capture config, restored on exit.

    Example:
        >>> with capture_config(CaptureConfig.trim_prefix("/build/")):
        ...     err = new("boom")
    """
    previous = set_capture_config(config)
    try:
        yield config
    finally:
        set_capture_config(previous)


# ═══════════════════════════════════════════════════════════════════════════════
# Capture
# ═══════════════════════════════════════════════════════════════════════════════


def clean_func_name(qualname: str) -> str:
    """Drop ``<locals>`` segments from a qualified name.

        FuncName                     --> FuncName
        Receiver.method              --> Receiver.method
        outer.<locals>.inner         --> outer.inner
    """
    if "<locals>" not in qualname:
        return qualname
    return ".".join(part for part in qualname.split(".") if part != "<locals>")


def _resolve(frame: FrameType, line: int) -> Location:
    code = frame.f_code
    return Location(_config.clean_file_name(code.co_filename), line, clean_func_name(code.co_qualname))


def capture(skip: int = 0) -> Location:
    """Read the frame ``skip + 1`` levels above this call.

    ``capture(0)`` is the caller of capture; constructors use ``capture(1)`` to
    report their own caller. Returns NO_LOCATION when the stack is too shallow.
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return NO_LOCATION
    return _resolve(frame, frame.f_lineno or 0)


def capture_traceback(tb: TracebackType | None) -> Location:
    """Location of the first traceback entry (the frame handling the exception)."""
    if tb is None:
        return NO_LOCATION
    return _resolve(tb.tb_frame, tb.tb_lineno or 0)
