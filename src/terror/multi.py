"""Error slots and multi-error aggregation on top of builtin exception groups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .chain import render_detailed

_GROUP_MESSAGE = "multiple errors"
_INDENT = "    "


@dataclass(slots=True)
class ErrorSlot:
    """A mutable holder for a fallible result's error, filled in as work proceeds."""

    err: Exception | None = None

    def raise_if_set(self) -> None:
        if self.err is not None:
            raise self.err


class MultiError(ExceptionGroup):
    """Aggregate of independent failures. Compact form joins members with "; "."""

    def derive(self, excs: Sequence[Exception]) -> MultiError:
        return MultiError(self.message, excs)

    def __str__(self) -> str:
        return "; ".join(str(e) for e in self.exceptions)

    def __format__(self, spec: str) -> str:
        if spec == "v":
            return self.render_detailed()
        return format(str(self), spec)

    def render_detailed(self) -> str:
        parts = ["the following errors occurred:"]
        for e in self.exceptions:
            parts.append("\n -  " + render_detailed(e).replace("\n", "\n" + _INDENT))
        return "".join(parts)


def _flatten(errs: Iterable[Exception | None]) -> list[Exception]:
    out: list[Exception] = []
    for e in errs:
        if e is None:
            continue
        if isinstance(e, MultiError):
            out.extend(e.exceptions)
        else:
            out.append(e)
    return out


def combine(*errs: Exception | None) -> Exception | None:
    """Merge errors into one. None entries are dropped; a lone error is returned as is."""
    flat = _flatten(errs)
    match len(flat):
        case 0: return None
        case 1: return flat[0]
        case _: return MultiError(_GROUP_MESSAGE, flat)


def append_into(slot: ErrorSlot, err: Exception | None) -> bool:
    """Append err to whatever slot already holds. Returns False if err is None."""
    if err is None:
        return False
    slot.err = combine(slot.err, err)
    return True


def errors(err: BaseException | None) -> tuple[BaseException, ...]:
    """Constituents of an aggregate; a single error is its own sole constituent."""
    if err is None:
        return ()
    if isinstance(err, BaseExceptionGroup):
        return tuple(err.exceptions)
    return (err,)
