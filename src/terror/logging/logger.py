"""Structured logging that knows how to render error chains.

Errors logged as values render compactly inline; wrap them with verbose() (or
pass ``verbose=True`` to ``error()``) to get the full chain trace below the
log line. JSON output carries the chain as structured frames.

Quick Start:
    >>> from terror.logging import configure_logging, get_logger
    >>> configure_logging(format="console")  # or "json" for production
    >>> log = get_logger("loader")
    >>> log.error("load failed", error=err)                 # one line
    >>> log.error("load failed", error=err, verbose=True)   # plus the chain

With the closing helpers (stdlib ``(msg, *args)`` signature):
    >>> close_and_log_on_error(log.printf("warning"), conn, cursor)
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Callable, Protocol, TextIO, runtime_checkable

from ..chain import Verbose, render_detailed

if TYPE_CHECKING:
    from ..config import TerrorSettings

# ─────────────────────────────────────────────────────────────────────────────
# Core Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. Immutable - bind() returns a new logger with merged context.

    Example:
        >>> log = BoundLogger(context={"service": "api"})
        >>> log.info("request received", path="/users")
        # => 10:30:45.123 [info] request received path="/users" service="api"
    """

    context: dict[str, object] = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int = logging.DEBUG

    def bind(self, **kw: object) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def unbind(self, *keys: str) -> BoundLogger:
        """Create new logger without specified keys."""
        return BoundLogger(context={k: v for k, v in self.context.items() if k not in keys},
                           _renderer=self._renderer, _level=self._level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= self._level

    def _log(self, level: int, event: str, **kw: object) -> None:
        if level < self._level:
            return
        if kw.pop("verbose", False) and isinstance(err := kw.get("error"), BaseException):
            kw["error"] = Verbose(err)
        (self._renderer or _get_renderer()).render(LogEntry(time.time(), _level_name(level), event, {**self.context, **kw}))

    def debug(self, event: str, **kw: object) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: object) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: object) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: object) -> None: self._log(logging.ERROR, event, **kw)

    def printf(self, level: str = "error") -> Callable[..., None]:
        """Adapter with the stdlib ``(msg, *args)`` signature.

        Arguments are only formatted if the level is enabled, so a Verbose
        argument never renders for a suppressed entry.
        """
        levelno = logging.getLevelName(level.upper())

        def log_fn(msg: str, *args: object) -> None:
            if self.is_enabled_for(levelno):
                self._log(levelno, msg % args if args else msg)
        return log_fn


@dataclass(slots=True)
class LogEntry:
    """Immutable log entry with all context."""

    timestamp: float
    level: str
    event: str
    context: dict[str, object]

    @property
    def ts_iso(self) -> str:
        """ISO formatted timestamp."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """Human-readable timestamp (HH:MM:SS.mmm)."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ...

    Verbose values print their detailed chain rendering on the following lines.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts = ([f"{c['dim']}{entry.ts_human}{c['reset']}"] if self.show_timestamp else [])
        parts += [f"{_LEVEL_COLORS.get(entry.level, c['dim']) if self.colors else ''}[{entry.level}]{c['reset']}",
                  f"{c['bold']}{entry.event}{c['reset']}"]
        traces = []
        for k, v in sorted(entry.context.items()):
            if isinstance(v, Verbose):
                traces.append(str(v))
                v = v.error
            parts.append(f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}")
        print(" ".join(parts), file=self.output)
        for trace in traces:
            print(f"{c['red']}{trace}{c['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation (Elasticsearch, Loki, Datadog, etc.)."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        print(orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event,
                            **entry.context}, default=_json_default, option=orjson.OPT_NON_STR_KEYS).decode(),
              file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: LogRenderer | None = None
_default_level: int = logging.INFO


def configure_logging(
    format: str = "console",  # noqa: A002 - shadows builtin but matches stdlib
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none"."""
    global _renderer, _default_level
    _default_level = getattr(logging, level.upper(), logging.INFO)
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer = renderer
    return renderer


def configure_logging_from_settings(settings: TerrorSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Configure logging from TERROR_LOG_* settings."""
    if settings is None:
        from ..config import get_settings
        settings = get_settings()
    cfg = settings.logging
    return configure_logging(cfg.format, cfg.level, output=output, colors=cfg.colors)


def reset_logging() -> None:
    """Drop the configured renderer and level (useful for testing)."""
    global _renderer, _default_level
    _renderer, _default_level = None, logging.INFO


def get_logger(name: str | None = None, **initial_context: object) -> BoundLogger:
    """Get a structured logger with optional initial context. Name is added to context as 'logger'."""
    ctx = {**initial_context, **({"logger": name} if name else {})}
    return BoundLogger(context=ctx, _level=_default_level)


def _get_renderer() -> LogRenderer:
    """Get configured renderer or create default."""
    global _renderer
    if _renderer is None:
        _renderer = ConsoleRenderer()
    return _renderer


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {"debug": _COLORS["dim"], "info": _COLORS["green"], "warning": _COLORS["yellow"], "error": _COLORS["red"]}


def _level_name(level: int) -> str:
    """Convert logging level int to lowercase name."""
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    """Format a value for console output."""
    match v:
        case str(): return f'{c["yellow"]}"{v}"{c["reset"]}'
        case bool(): return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
        case int() | float(): return f'{c["blue"]}{v}{c["reset"]}'
        case BaseException(): return f'{c["red"]}"{v}"{c["reset"]}'
        case dict(): return f'{c["dim"]}{{{len(v)} items}}{c["reset"]}'
        case list() | tuple(): return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
        case _: return f'{c["white"]}{v!r}{c["reset"]}'


def _json_default(v: object) -> object:
    """orjson fallback: errors compact, Verbose errors as structured frames."""
    match v:
        case Verbose():
            from ..frames import dump_frames
            return {"message": str(v.error), "detail": render_detailed(v.error), "frames": dump_frames(v.error)}
        case BaseException():
            return str(v)
        case _:
            return repr(v)
