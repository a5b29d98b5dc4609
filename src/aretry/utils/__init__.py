r"""Utility functions for the retry layer.

This package provides header helpers, Retry-After parsing and
structured logging.
"""

from __future__ import annotations

__all__ = [
    "get_request_header",
    "log_structured",
    "parse_retry_after",
    "round_half_up",
    "set_request_header",
    "stamp_retry_attempt",
]

from aretry.utils.headers import get_request_header, set_request_header, stamp_retry_attempt
from aretry.utils.retry_after import parse_retry_after, round_half_up
from aretry.utils.structured_logging import log_structured
