r"""Delay calculation between retry attempts.

This module provides the ``DelayCalculator`` class that computes how long
to wait before the next attempt, using the server's ``Retry-After`` hint
when present and an exponential backoff with jitter otherwise.
"""

from __future__ import annotations

__all__ = ["DelayCalculator", "exponential_backoff_time"]

import logging
import random
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from aretry.core.config import RETRY_AFTER_HEADER
from aretry.utils.retry_after import parse_retry_after, round_half_up

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def exponential_backoff_time(attempt: int) -> int:
    """Return the exponential part of the backoff for an attempt.

    The value is ``0.5 * (2 ** attempt - 1)`` rounded to the nearest
    integer, halves rounded up.

    Example:
        ```pycon
        >>> from aretry.retry.delay import exponential_backoff_time
        >>> [exponential_backoff_time(attempt) for attempt in range(1, 6)]
        [1, 2, 4, 8, 16]

        ```
    """
    return round_half_up(0.5 * (2**attempt - 1))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DelayCalculator:
    """Computes the wait before the next attempt of an exchange.

    The calculator holds no per-exchange state and can be shared between
    concurrent exchanges.

    Args:
        rng: Random generator used for jitter. Defaults to a new
            ``random.Random`` instance. Pass a seeded generator for
            reproducible delays.
        clock: Callable returning the current aware ``datetime``. It is
            used to turn an HTTP-date ``Retry-After`` into seconds.

    Example:
        ```pycon
        >>> import random
        >>> import httpx
        >>> from aretry.retry.delay import DelayCalculator
        >>> calculator = DelayCalculator(rng=random.Random(0))
        >>> response = httpx.Response(503, headers={"Retry-After": "2"})
        >>> calculator.compute_delay(response, attempt=1, base_delay=3.0, max_delay=180.0)
        2.0

        ```
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()  # noqa: S311
        self._clock = clock if clock is not None else _utc_now

    def jitter(self) -> float:
        """Draw a jitter value rounded to three decimals.

        The draw is in ``[0, 1)`` before rounding, so a draw of 0.9995 or
        more rounds up to exactly ``1.0``. The result is in ``[0, 1]``.
        """
        return round(self._rng.random(), 3)

    def compute_delay(
        self,
        response: httpx.Response,
        attempt: int,
        base_delay: float,
        max_delay: float,
    ) -> float:
        """Compute the delay in seconds before the next attempt.

        The delay is computed as follows:
        1. Draw one jitter value in ``[0, 1)``.
        2. If the response has a ``Retry-After`` header, use its value
           as-is, without jitter.
        3. Otherwise, use ``exponential_backoff_time(attempt) + base_delay
           + jitter`` when ``attempt >= 2``, or ``base_delay + jitter``.
        4. Cap the result at ``max_delay + jitter`` and floor it at 0.

        Args:
            response: The response that triggered the retry.
            attempt: The 1-based number of the upcoming retry.
            base_delay: The policy's base delay in seconds.
            max_delay: The policy's cap on a single wait, in seconds.

        Returns:
            The delay in seconds.

        Raises:
            DelayCalculationError: If the ``Retry-After`` header cannot
                be parsed.
        """
        jitter = self.jitter()
        retry_after = parse_retry_after(
            response.headers.get(RETRY_AFTER_HEADER), now=self._clock()
        )
        if retry_after is not None:
            delay = retry_after
            logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        elif attempt >= 2:
            delay = exponential_backoff_time(attempt) + base_delay + jitter
        else:
            delay = base_delay + jitter

        cap = max_delay + jitter
        if delay > cap:
            logger.debug(f"Capping delay from {delay:.2f}s to {cap:.2f}s (max_delay={max_delay:.2f}s)")
            delay = cap
        return max(0.0, delay)
