"""Tests for the error taxonomy."""
from tuyalink.core.errors import ApiError, TransportError


def test_with_context_keeps_message_and_type():
    error = ApiError(1106, "permission deny", path="/v1.0/devices/d1")
    wrapped = error.with_context("get_device_info failed")
    assert isinstance(wrapped, ApiError)
    assert wrapped.code == 1106
    assert wrapped.message == "permission deny"
    assert wrapped.path == "/v1.0/devices/d1"
    assert str(wrapped) == "get_device_info failed: permission deny (code 1106)"


def test_with_context_keeps_original_cause():
    cause = ConnectionError("boom")
    try:
        raise TransportError("boom", path="https://openapi.tuyaeu.com/x") from cause
    except TransportError as exc:
        error = exc
    wrapped = error.with_context("GET /x").with_context("outer")
    assert wrapped.__cause__ is cause
    assert str(wrapped) == "outer: GET /x: boom"


def test_with_context_without_cause_points_at_original():
    error = TransportError("reset")
    wrapped = error.with_context("GET /x")
    assert wrapped.__cause__ is error
