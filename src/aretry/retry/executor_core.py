r"""Shared core logic for the sync and async retry executors.

This module provides the helpers used by both executors: resolving the
effective policy of an exchange, and preparing the request and delay of
an approved retry.
"""

from __future__ import annotations

__all__ = ["prepare_retry", "resolve_policy"]

import logging
from typing import TYPE_CHECKING

from aretry.core.config import RetryPolicy
from aretry.utils.headers import stamp_retry_attempt
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.context import RequestContext
    from aretry.retry.delay import DelayCalculator

logger: logging.Logger = logging.getLogger(__name__)


def resolve_policy(context: RequestContext, default: RetryPolicy) -> RetryPolicy:
    """Return the retry policy that applies to an exchange.

    The context's ``policy_override`` wins when it is a ``RetryPolicy``.
    Otherwise a copy of ``default`` is returned, so changes to the
    resolved policy never reach the executor's default.

    Args:
        context: The exchange.
        default: The executor's default policy.

    Returns:
        The effective policy.

    Example:
        ```pycon
        >>> from aretry.context import RequestContext
        >>> from aretry.core.config import RetryPolicy
        >>> from aretry.retry.executor_core import resolve_policy
        >>> default = RetryPolicy()
        >>> override = RetryPolicy(max_retries=1)
        >>> resolve_policy(RequestContext("https://example.com", policy_override=override), default) is override
        True
        >>> resolved = resolve_policy(RequestContext("https://example.com"), default)
        >>> resolved == default, resolved is default
        (True, False)

        ```
    """
    if isinstance(context.policy_override, RetryPolicy):
        return context.policy_override
    return default.copy()


def prepare_retry(
    context: RequestContext,
    policy: RetryPolicy,
    attempt: int,
    delay_calculator: DelayCalculator,
    reason: str,
) -> float:
    """Prepare the next attempt of an approved retry.

    Stamps the ``Retry-Attempt`` header with ``attempt`` and computes the
    delay to wait before sending the request again.

    Args:
        context: The exchange.
        policy: The resolved retry policy.
        attempt: The 1-based number of the upcoming retry.
        delay_calculator: Calculator for the wait.
        reason: Why the retry was approved, for logging.

    Returns:
        The delay in seconds.

    Raises:
        DelayCalculationError: If the ``Retry-After`` header cannot be
            parsed.
    """
    response = context.response
    stamp_retry_attempt(context.request_options, attempt)
    delay = delay_calculator.compute_delay(
        response, attempt=attempt, base_delay=policy.delay, max_delay=policy.max_delay
    )
    log_structured(
        logger,
        logging.DEBUG,
        f"{context.method} request to {context.url}: retry {attempt}/{policy.max_retries} "
        f"in {delay:.2f}s ({reason})",
        url=str(context.url),
        method=context.method,
        attempt=attempt,
        max_retries=policy.max_retries,
        status_code=response.status_code,
        delay=delay,
    )
    return delay
