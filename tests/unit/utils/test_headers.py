r"""Unit tests for request header helpers."""

from __future__ import annotations

from aretry.context import RequestOptions
from aretry.utils import get_request_header, set_request_header, stamp_retry_attempt


def test_get_request_header() -> None:
    options = RequestOptions(headers={"Content-Type": "application/json"})
    assert get_request_header(options, "content-type") == "application/json"


def test_get_request_header_missing() -> None:
    assert get_request_header(RequestOptions(), "Content-Type") is None


def test_set_request_header_replaces_value() -> None:
    options = RequestOptions(headers={"X-Request-Id": "a"})
    set_request_header(options, "x-request-id", "b")
    assert options.headers.get_list("X-Request-Id") == ["b"]


def test_stamp_retry_attempt() -> None:
    options = RequestOptions()
    stamp_retry_attempt(options, 3)
    assert options.headers["Retry-Attempt"] == "3"


def test_stamp_retry_attempt_is_idempotent() -> None:
    options = RequestOptions()
    stamp_retry_attempt(options, 2)
    stamp_retry_attempt(options, 2)
    assert options.headers.get_list("Retry-Attempt") == ["2"]


def test_stamp_retry_attempt_overwrites_previous_attempt() -> None:
    options = RequestOptions()
    stamp_retry_attempt(options, 1)
    stamp_retry_attempt(options, 2)
    assert options.headers.get_list("Retry-Attempt") == ["2"]
