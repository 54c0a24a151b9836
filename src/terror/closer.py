"""Helpers for closing resources without losing close failures.

Both helpers catch ``Exception`` raised by ``close()`` and keep going, so a
failing close never prevents the remaining ones.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from .chain import TError, verbose
from .location import capture
from .multi import ErrorSlot, append_into, combine
from .wrap import _sprintf

LogFn = Callable[..., object]


@runtime_checkable
class Closable(Protocol):
    def close(self) -> object: ...


def _close(closable: Closable) -> Exception | None:
    try:
        closable.close()
    except Exception as e:  # noqa: BLE001 - close failures are collected, not raised
        return e
    return None


def close_and_append_on_error(slot: ErrorSlot, closable: Closable, message: str, *args: object) -> None:
    """Close closable; on failure, wrap the error at the caller and append it to slot.

    Use when a failed close means something went wrong, e.g. a file whose
    buffered bytes may not have been written:

        >>> def save(path, data):
        ...     slot = ErrorSlot()
        ...     f = open(path, "w")
        ...     try:
        ...         f.write(data)
        ...     except OSError as e:
        ...         slot.err = wrap(e, "write")
        ...     finally:
        ...         close_and_append_on_error(slot, f, "close %s", path)
        ...     return slot.err
    """
    if (err := _close(closable)) is not None:
        append_into(slot, TError(_sprintf(message, args), capture(1), err))


def close_and_log_on_error(log_fn: LogFn, *closables: Closable) -> None:
    """Close every closable, logging all failures once as a single aggregate.

    log_fn follows the stdlib logging signature ``(msg, *args)``; the
    aggregate is passed as a lazy detailed rendering.
    """
    err = combine(*(_close(c) for c in closables))
    if err is not None:
        log_fn("Close operation failed with error: %s", verbose(err))
