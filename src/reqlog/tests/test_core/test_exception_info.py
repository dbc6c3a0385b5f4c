# src/reqlog/tests/test_core/test_exception_info.py
import json
import os

from reqlog.core.exception_info import get_all_info, get_trace


class Service:
    def explode(self):
        raise ValueError("bad value")


def raise_and_catch():
    try:
        Service().explode()
    except ValueError as exc:
        return exc


def test_all_info_has_expected_sections():
    info = get_all_info(raise_and_catch())

    assert set(info) == {"date", "process", "os", "trace", "stack"}
    assert info["process"]["pid"] == os.getpid()
    assert info["process"]["cwd"] == os.getcwd()
    assert "uptime" in info["os"]
    assert info["stack"][0] == "Traceback (most recent call last):"
    assert info["stack"][-1] == "ValueError: bad value"


def test_all_info_is_json_serializable():
    json.dumps(get_all_info(raise_and_catch()))


def test_trace_frames_innermost_last_with_method_owner():
    trace = get_trace(raise_and_catch())

    assert [frame["function"] for frame in trace] == ["raise_and_catch", "explode"]
    assert trace[-1]["method"] == "Service"
    assert trace[0]["method"] is None
    assert trace[-1]["file"] == __file__
    assert all(frame["native"] is False for frame in trace)


def test_exception_never_raised_has_empty_trace():
    info = get_all_info(RuntimeError("created, not raised"))
    assert info["trace"] == []
    assert info["stack"] == ["RuntimeError: created, not raised"]
