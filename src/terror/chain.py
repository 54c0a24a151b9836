"""Error chain nodes and their two renderings.

Every node renders compactly by default (``str(err)``, ``f"{err}"``,
``"%s" % err``) and in detail only when asked (``f"{err:v}"`` or
``err.render_detailed()``). Compact keeps routine logs to one line; detailed
shows every wrap with the call site it happened at:

    >>> err = wrap(wrap(new("some error"), "loading config"), "initializing system")
    >>> str(err)
    'initializing system: loading config: some error'
    >>> print(f"{err:v}")
    initializing system
     --- at app/system.py:12 (initialize) ---
    caused by loading config
     --- at app/config.py:37 (load_config) ---
    caused by some error
     --- at app/config.py:62 (read_config) ---
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from io import StringIO
from typing import Protocol, runtime_checkable

from .location import NO_LOCATION, Location

# Format spec selecting the detailed rendering; any other spec is compact.
VERBOSE_SPEC = "v"


# ═══════════════════════════════════════════════════════════════════════════════
# Capabilities
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class Located(Protocol):
    """An error exposing the call site it was created or wrapped at."""

    def location(self) -> Location: ...


@runtime_checkable
class DetailedRenderable(Protocol):
    """An error with its own multi-line diagnostic rendering."""

    def render_detailed(self) -> str: ...


def render_compact(err: BaseException) -> str:
    """One-line, message-only rendering of any exception."""
    return str(err)


def render_detailed(err: BaseException) -> str:
    """Multi-line rendering; falls back to compact for foreign exceptions."""
    if isinstance(err, DetailedRenderable):
        return err.render_detailed()
    return str(err)


# ═══════════════════════════════════════════════════════════════════════════════
# Chain Nodes
# ═══════════════════════════════════════════════════════════════════════════════


class ChainError(Exception, metaclass=ABCMeta):
    """Base of every error built by this package."""

    @abstractmethod
    def unwrap(self) -> BaseException | None: ...

    @abstractmethod
    def render_detailed(self) -> str: ...

    def __format__(self, spec: str) -> str:
        if spec == VERBOSE_SPEC:
            return self.render_detailed()
        return format(str(self), spec)


class TError(ChainError):
    """A wrap layer: message, call-site location and the error it wraps.

    Three shapes exist:
        root         cause is None, message set (from new())
        pure marker  cause set, message empty (from annotate() / wrap(err, ""))
        wrap layer   cause and message set
    Nodes are immutable; wrapping again creates a new node around this one.
    """

    __slots__ = ("_message", "_location", "_cause")

    def __init__(self, message: str, location: Location = NO_LOCATION, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self._message = message
        self._location = location
        self._cause = cause
        self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def is_root(self) -> bool:
        return self._cause is None

    @property
    def is_marker(self) -> bool:
        """Cause set, no message: exists only to record a location."""
        return self._cause is not None and not self._message

    def location(self) -> Location:
        return self._location

    def unwrap(self) -> BaseException | None:
        return self._cause

    def __str__(self) -> str:
        if self._cause is None:
            return self._message
        if not self._message:
            return str(self._cause)
        return f"{self._message}: {self._cause}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, location={self._location!r}, cause={self._cause!r})"

    def __reduce__(self) -> tuple[type[TError], tuple[str, Location, BaseException | None]]:
        return type(self), (self._message, self._location, self._cause)

    def render_detailed(self) -> str:
        buf = StringIO()
        self._write_detailed(buf)
        return buf.getvalue()

    def _write_detailed(self, buf: StringIO) -> None:
        sep = ""
        if self._message:
            buf.write(self._message)
            sep = "\n"
        if self._location:
            buf.write(f"{sep} --- at {self._location} ---")
            sep = "\n"
        cause = self._cause
        if cause is None:
            return
        buf.write(sep)
        # Message-less frames stack under the current one without "caused by".
        if sep and not (isinstance(cause, TError) and not cause.message):
            buf.write("caused by ")
        if isinstance(cause, TError):
            cause._write_detailed(buf)
        else:
            buf.write(render_detailed(cause))


class CodedError(ChainError):
    """Attaches an integer code to a chain value. Rendering delegates to base."""

    __slots__ = ("_base", "_code")

    def __init__(self, base: BaseException, code: int) -> None:
        super().__init__(base, code)
        self._base = base
        self._code = code
        self.__cause__ = base

    @property
    def base(self) -> BaseException:
        return self._base

    @property
    def code(self) -> int:
        return self._code

    def unwrap(self) -> BaseException:
        return self._base

    def __str__(self) -> str:
        return str(self._base)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._base!r}, code={self._code})"

    def __reduce__(self) -> tuple[type[CodedError], tuple[BaseException, int]]:
        return type(self), (self._base, self._code)

    def __format__(self, spec: str) -> str:
        if isinstance(self._base, ChainError):
            return format(self._base, spec)
        return super().__format__(spec)

    def render_detailed(self) -> str:
        return render_detailed(self._base)


# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Detailed Rendering
# ═══════════════════════════════════════════════════════════════════════════════


class Verbose:
    """Defers the detailed rendering of an error until it is formatted.

    For ``%s``-style façades (stdlib logging, printf-style callbacks) that only
    call ``str()``: the trace is built only if the message is emitted.
    """

    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error

    def __str__(self) -> str:
        return render_detailed(self.error)

    def __repr__(self) -> str:
        return f"Verbose({self.error!r})"


def verbose(err: BaseException) -> Verbose:
    """Wrap err so that ``str()`` yields its detailed rendering."""
    return Verbose(err)
