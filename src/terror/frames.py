"""Structured snapshots of an error chain for machine consumption.

Uses Pydantic models so a chain can be dumped to JSON (log aggregation, API
error payloads) without re-parsing the detailed text rendering.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .chain import CodedError, TError
from .location import Location
from .traverse import walk

FrameKind = Literal["chain", "coded", "group", "foreign"]


class FrameModel(BaseModel):
    """One link of a chain. Pydantic frozen=True for immutability."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={"title": "Error Frame", "examples": [{
            "kind": "chain", "type": "TError", "message": "loading config",
            "location": {"file": "app/config.py", "line": 37, "function": "load_config"}, "code": None,
        }]},
    )

    kind: FrameKind
    type: str = Field(description="Exception class name")
    message: str = ""
    location: Location | None = None
    code: int | None = None


def _frame(err: BaseException) -> FrameModel:
    name = type(err).__name__
    match err:
        case TError():
            return FrameModel.model_construct(
                kind="chain", type=name, message=err.message, location=err.location() or None, code=None,
            )
        case CodedError():
            return FrameModel.model_construct(kind="coded", type=name, message="", location=None, code=err.code)
        case BaseExceptionGroup():
            return FrameModel.model_construct(kind="group", type=name, message=err.message, location=None, code=None)
        case _:
            return FrameModel.model_construct(kind="foreign", type=name, message=str(err), location=None, code=None)


def frames(err: BaseException | None) -> tuple[FrameModel, ...]:
    """One frame per link, in walk() order (outermost first)."""
    return tuple(_frame(e) for e in walk(err))


_FramesAdapter: TypeAdapter[tuple[FrameModel, ...]] = TypeAdapter(tuple[FrameModel, ...])


def dump_frames(err: BaseException | None) -> list[dict[str, Any]]:
    """JSON-ready list of frame dicts."""
    return _FramesAdapter.dump_python(frames(err), mode="json")
