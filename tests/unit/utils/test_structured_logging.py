r"""Unit tests for structured logging utilities."""

from __future__ import annotations

import json
import logging
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from aretry.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def stream_logger() -> Generator[tuple[logging.Logger, StringIO], None, None]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("aretry.tests.structured")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger, stream
    logger.removeHandler(handler)
    logger.propagate = True
    clear_correlation_id()


def test_correlation_id_roundtrip() -> None:
    set_correlation_id("req-1")
    assert get_correlation_id() == "req-1"
    clear_correlation_id()
    assert get_correlation_id() is None


def test_structured_formatter_fields(stream_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = stream_logger
    logger.info("Retrying request")
    data = json.loads(stream.getvalue())
    assert data["message"] == "Retrying request"
    assert data["level"] == "INFO"
    assert data["logger"] == "aretry.tests.structured"
    assert data["timestamp"].endswith("Z")
    assert "correlation_id" not in data


def test_structured_formatter_correlation_id(
    stream_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = stream_logger
    set_correlation_id("req-42")
    logger.warning("Rate limited")
    assert json.loads(stream.getvalue())["correlation_id"] == "req-42"


def test_structured_formatter_exception(stream_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = stream_logger
    try:
        msg = "boom"
        raise RuntimeError(msg)
    except RuntimeError:
        logger.exception("Request failed")
    assert "RuntimeError: boom" in json.loads(stream.getvalue())["exception"]


def test_log_structured_extra_fields(stream_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = stream_logger
    log_structured(logger, logging.DEBUG, "Retry scheduled", attempt=2, delay=1.5, url="https://x")
    data = json.loads(stream.getvalue())
    assert data["attempt"] == 2
    assert data["delay"] == 1.5
    assert data["url"] == "https://x"
    assert "args" not in data
