r"""Core configuration and validation for the retry layer."""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "MAX_DELAY",
    "MAX_MAX_RETRIES",
    "RETRY_AFTER_HEADER",
    "RETRY_ATTEMPT_HEADER",
    "RETRY_STATUS_CODES",
    "RetryPolicy",
    "validate_policy_params",
    "validate_timeout",
]

from aretry.core.config import (
    DEFAULT_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    MAX_DELAY,
    MAX_MAX_RETRIES,
    RETRY_AFTER_HEADER,
    RETRY_ATTEMPT_HEADER,
    RETRY_STATUS_CODES,
    RetryPolicy,
)
from aretry.core.validation import validate_policy_params, validate_timeout
