r"""Retry-After header parsing utilities.

This module parses the ``Retry-After`` response header according to
RFC 9110. The header holds either a number of seconds or an HTTP-date.
"""

from __future__ import annotations

__all__ = ["parse_retry_after", "round_half_up"]

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from aretry.exceptions import DelayCalculationError

logger: logging.Logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round a number to the nearest integer, with halves rounded up.

    Python's ``round`` rounds halves to the nearest even integer. The
    delay computations need halves to always go towards positive
    infinity.

    Example:
        ```pycon
        >>> from aretry.utils.retry_after import round_half_up
        >>> round_half_up(2.5), round_half_up(3.5), round_half_up(-2.5)
        (3, 4, -2)

        ```
    """
    return math.floor(value + 0.5)


def _parse_seconds(value: str) -> float | None:
    try:
        seconds = float(value)
    except ValueError:
        return None
    if not math.isfinite(seconds):
        return None
    return seconds


def parse_retry_after(retry_after_header: str | None, now: datetime | None = None) -> float | None:
    """Parse the Retry-After header value from an HTTP response.

    The header can be specified in two formats:
    1. A number of seconds to wait (e.g., "120")
    2. An HTTP-date (e.g., "Wed, 21 Oct 2015 07:28:00 GMT")

    For an HTTP-date, the delay is the difference with ``now`` rounded
    to whole seconds (halves rounded up). A date in the past gives a
    negative delay; callers are expected to floor it.

    Args:
        retry_after_header: The value of the Retry-After header, or
            ``None`` if the header is not present.
        now: The current time. Defaults to ``datetime.now(timezone.utc)``.

    Returns:
        The number of seconds to wait, or ``None`` if the header is
        absent or blank.

    Raises:
        DelayCalculationError: If the header is neither a finite number
            nor a valid HTTP-date.

    Example:
        ```pycon
        >>> from datetime import datetime, timezone
        >>> from aretry.utils.retry_after import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after(
        ...     "Wed, 21 Oct 2015 07:28:30 GMT",
        ...     now=datetime(2015, 10, 21, 7, 28, 0, tzinfo=timezone.utc),
        ... )
        30.0

        ```
    """
    if retry_after_header is None or not retry_after_header.strip():
        return None

    seconds = _parse_seconds(retry_after_header)
    if seconds is not None:
        return seconds

    try:
        retry_date = parsedate_to_datetime(retry_after_header)
    except (ValueError, TypeError, IndexError) as exc:
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        raise DelayCalculationError(retry_after_header) from exc
    if retry_date.tzinfo is None:
        # "-0000" dates are returned naive but are still UTC
        retry_date = retry_date.replace(tzinfo=timezone.utc)

    if now is None:
        now = datetime.now(timezone.utc)
    try:
        delta_seconds = (retry_date - now).total_seconds()
    except OverflowError as exc:
        raise DelayCalculationError(retry_after_header) from exc
    return float(round_half_up(delta_seconds))
