"""Chain construction: new, wrap, annotate and friends.

Each public constructor captures the location of its own caller, so the line
reported in a detailed trace is always user code. Messages are printf style,
formatted only when arguments are given:

    >>> err = new("adjusting %d things", 12)
    >>> err = wrap(err, "loading %s", "config")
    >>> str(err)
    'loading config: adjusting 12 things'

Wrapping ``None`` returns ``None``, so ``wrap(err, ...)`` is safe to call
unconditionally in cleanup paths.
"""

from __future__ import annotations

import inspect
from contextlib import ContextDecorator
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, TypeVar, overload

from .chain import CodedError, TError
from .location import capture, capture_traceback

if TYPE_CHECKING:
    from types import TracebackType

    from .multi import ErrorSlot

F = TypeVar("F", bound=Callable[..., Any])


def _sprintf(message: str, args: tuple[object, ...]) -> str:
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError):
        # Mismatched args are appended verbatim.
        return f"{message} {args!r}"


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def new(message: str, *args: object) -> TError:
    """Create a root error at the caller's location."""
    return TError(_sprintf(message, args), capture(1))


@overload
def wrap(err: None, message: str, *args: object) -> None: ...
@overload
def wrap(err: BaseException, message: str, *args: object) -> TError: ...


def wrap(err: BaseException | None, message: str, *args: object) -> TError | None:
    """Annotate err with a message and the caller's location. None passes through."""
    if err is None:
        return None
    return TError(_sprintf(message, args), capture(1), err)


@overload
def annotate(err: None) -> None: ...
@overload
def annotate(err: BaseException) -> TError: ...


def annotate(err: BaseException | None) -> TError | None:
    """Record the caller's location without adding a message."""
    if err is None:
        return None
    return TError("", capture(1), err)


def new_with_code(code: int, message: str, *args: object) -> CodedError:
    """Root error carrying a code, retrievable with get_code()."""
    return CodedError(TError(_sprintf(message, args), capture(1)), code)


@overload
def wrap_with_code(err: None, code: int, message: str, *args: object) -> None: ...
@overload
def wrap_with_code(err: BaseException, code: int, message: str, *args: object) -> CodedError: ...


def wrap_with_code(err: BaseException | None, code: int, message: str, *args: object) -> CodedError | None:
    """Like wrap(), additionally tagging the chain with code. Outer codes win."""
    if err is None:
        return None
    return CodedError(TError(_sprintf(message, args), capture(1), err), code)


def wrap_into(slot: ErrorSlot, message: str, *args: object) -> None:
    """Replace slot.err with a wrap of itself; no-op when the slot is empty.

    Meant for ``finally:`` blocks at function exit, so one message covers every
    failure path of the function:

        >>> def load(path):
        ...     slot = ErrorSlot()
        ...     try:
        ...         slot.err = parse(path)
        ...     finally:
        ...         wrap_into(slot, "load(%r)", path)
        ...     return slot.err
    """
    if slot.err is None:
        return
    slot.err = TError(_sprintf(message, args), capture(1), slot.err)


# ═══════════════════════════════════════════════════════════════════════════════
# Context Manager
# ═══════════════════════════════════════════════════════════════════════════════


_WRAPPER_MODULES = frozenset({"contextlib", __name__})


class wrapping(ContextDecorator):
    """Wrap any Exception escaping the block (or decorated function).

    The recorded location is the statement inside the block that raised, not
    the ``with`` line, mirroring a wrap written at each raise site. Coroutine
    functions are wrapped when awaited.
    Example:
        >>> @wrapping("reading config")
        ... def read_config(path):
        ...     return open(path).read()
        >>> read_config("missing.toml")
        Traceback (most recent call last):
        terror.chain.TError: reading config: [Errno 2] No such file or directory: 'missing.toml'
    """

    __slots__ = ("_message",)

    def __init__(self, message: str, *args: object) -> None:
        self._message = _sprintf(message, args)

    def __call__(self, func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            return super().__call__(func)

        @wraps(func)
        async def inner(*args: Any, **kwargs: Any) -> Any:
            with self._recreate_cm():
                return await func(*args, **kwargs)

        return inner  # type: ignore[return-value]

    def __enter__(self) -> wrapping:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_val is None or not isinstance(exc_val, Exception):
            return
        # As a decorator, the first frame is the decorator's own wrapper.
        while exc_tb is not None and exc_tb.tb_next is not None and exc_tb.tb_frame.f_globals.get("__name__") in _WRAPPER_MODULES:
            exc_tb = exc_tb.tb_next
        raise TError(self._message, capture_traceback(exc_tb), exc_val) from exc_val
