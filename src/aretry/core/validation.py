r"""Parameter validation for retry policies and clients."""

from __future__ import annotations

__all__ = ["MAX_DELAY", "MAX_MAX_RETRIES", "validate_policy_params", "validate_timeout"]

import math
from numbers import Real
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

# Upper bounds accepted by RetryPolicy
MAX_MAX_RETRIES = 10
MAX_DELAY = 180.0


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate the timeout given to a client.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_policy_params(
    max_retries: int,
    delay: float,
    max_delay: float,
    should_retry: Any = None,
) -> None:
    """Validate retry policy parameters.

    Args:
        max_retries: Maximum number of retries. Must be an integer
            between 0 and 10.
        delay: Base delay in seconds. Must be between 0 and 180.
        max_delay: Cap in seconds on a single wait. Must be between
            0 and 180.
        should_retry: Optional retry predicate. Must be callable if
            provided.

    Raises:
        ValueError: If a parameter is out of range or has the wrong type.

    Example:
        ```pycon
        >>> from aretry.core import validate_policy_params
        >>> validate_policy_params(max_retries=3, delay=3.0, max_delay=180.0)
        >>> validate_policy_params(max_retries=-1, delay=3.0, max_delay=180.0)  # doctest: +SKIP

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an integer, got {max_retries!r}"
        raise ValueError(msg)
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if max_retries > MAX_MAX_RETRIES:
        msg = f"max_retries must be <= {MAX_MAX_RETRIES}, got {max_retries}"
        raise ValueError(msg)
    _validate_seconds("delay", delay)
    _validate_seconds("max_delay", max_delay)
    if should_retry is not None and not callable(should_retry):
        msg = f"should_retry must be callable, got {should_retry!r}"
        raise ValueError(msg)


def _validate_seconds(name: str, value: Any) -> None:
    """Validate a duration in seconds bounded by ``MAX_DELAY``.

    Raises:
        ValueError: If the value is not a finite real number in
            ``[0, MAX_DELAY]``.
    """
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        msg = f"{name} must be a finite number, got {value!r}"
        raise ValueError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)
    if value > MAX_DELAY:
        msg = f"{name} must be <= {MAX_DELAY}, got {value}"
        raise ValueError(msg)
