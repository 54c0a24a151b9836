"""Tests for structured frame snapshots."""

from __future__ import annotations

import orjson

from terror import combine, new, wrap, wrap_with_code
from terror.frames import FrameModel, dump_frames, frames


def test_frames_per_link() -> None:
    err = wrap_with_code(wrap(ValueError("boom"), "inner"), 7, "outer")
    snap = frames(err)
    assert [f.kind for f in snap] == ["coded", "chain", "chain", "foreign"]
    assert snap[0].code == 7
    assert snap[1].message == "outer"
    assert snap[1].location == err.base.location()
    assert snap[3].type == "ValueError"
    assert snap[3].message == "boom"
    assert snap[3].location is None


def test_frames_of_group() -> None:
    snap = frames(combine(new("a"), new("b")))
    assert [f.kind for f in snap] == ["group", "chain", "chain"]
    assert snap[0].type == "MultiError"


def test_frames_of_none() -> None:
    assert frames(None) == ()
    assert dump_frames(None) == []


def test_dump_frames_is_json_ready() -> None:
    root = new("root")
    dumped = dump_frames(wrap(root, ""))
    assert dumped[0]["message"] == ""
    assert dumped[1] == {
        "kind": "chain",
        "type": "TError",
        "message": "root",
        "location": {"file": root.location().file, "line": root.location().line, "function": "test_dump_frames_is_json_ready"},
        "code": None,
    }
    assert orjson.loads(orjson.dumps(dumped)) == dumped


def test_frame_model_validates() -> None:
    frame = FrameModel.model_validate({"kind": "foreign", "type": "KeyError", "message": "'k'"})
    assert frame.location is None
    assert frame.code is None
