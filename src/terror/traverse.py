"""Chain inspection: unwrap, walk, find, contains, root_error, get_code.

A chain is followed through ``unwrap()`` where an error defines it and through
``__cause__`` otherwise, so chains built with ``raise ... from ...`` or by
other wrapping libraries are traversed too. walk() also descends into
exception groups, member by member.
"""

from __future__ import annotations

from typing import Iterator, TypeVar

from .chain import CodedError, Located

E = TypeVar("E", bound=BaseException)


def unwrap(err: BaseException | None) -> BaseException | None:
    """One step down the chain."""
    if err is None:
        return None
    if callable(step := getattr(err, "unwrap", None)):
        return step()
    return err.__cause__


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Every link of the chain, outermost first; groups depth-first in member order."""
    seen: set[int] = set()

    def _walk(e: BaseException | None) -> Iterator[BaseException]:
        while e is not None and id(e) not in seen:
            seen.add(id(e))
            yield e
            if isinstance(e, BaseExceptionGroup):
                for member in e.exceptions:
                    yield from _walk(member)
                return
            e = unwrap(e)

    return _walk(err)


def find(err: BaseException | None, cls: type[E]) -> E | None:
    """Outermost link that is an instance of cls."""
    return next((e for e in walk(err) if isinstance(e, cls)), None)


def contains(err: BaseException | None, target: BaseException) -> bool:
    """Whether target (by identity or equality) appears anywhere in the chain."""
    return any(e is target or e == target for e in walk(err))


def root_error(err: BaseException | None) -> Located | None:
    """Innermost location-bearing link, or None.

    Unlike find(), which stops at the outermost match, this follows the
    chain to its end.
    """
    deepest = err if isinstance(err, Located) else None
    seen = {id(err)}
    e = unwrap(err)
    while e is not None and id(e) not in seen:
        seen.add(id(e))
        if isinstance(e, Located):
            deepest = e
        e = unwrap(e)
    return deepest


def get_code(err: BaseException | None) -> int:
    """Code of the outermost CodedError in the chain, else 0.

    An explicit code of 0 is indistinguishable from no code at all.
    """
    coded = find(err, CodedError)
    return coded.code if coded is not None else 0
