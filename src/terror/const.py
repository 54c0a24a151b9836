"""Pre-declared sentinel errors."""

from __future__ import annotations


class Const(Exception):
    """An error with a bare message and no captured location.

    Declare at module level and compare structurally; wrap at the point of use
    when the call site matters:

        >>> ERR_NOT_READY = Const("not ready")
        >>> str(wrap(ERR_NOT_READY, "in test %r", "x"))
        "in test 'x': not ready"
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        return self.args[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.args[0]!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.args[0] == other.args[0]  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args[0]))
