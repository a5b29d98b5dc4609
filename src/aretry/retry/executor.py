r"""Synchronous retry executor.

This module provides the ``RetryExecutor`` pipeline step that re-invokes
the rest of a synchronous pipeline while the server answers with a
retryable status code.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING

from aretry.core.config import RetryPolicy
from aretry.middleware import Middleware
from aretry.retry.decider import RetryDecider
from aretry.retry.delay import DelayCalculator
from aretry.retry.executor_core import prepare_retry, resolve_policy

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.context import RequestContext

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor(Middleware):
    """Retries the rest of a synchronous pipeline with backoff.

    The executor runs the next step, then decides whether the response
    warrants another attempt. Exceptions raised by the next step are
    never retried and propagate unchanged.

    Args:
        policy: Default retry policy. Defaults to ``RetryPolicy()``.
        delay_calculator: Calculator for the waits between attempts.
        sleep: Function used to wait. Defaults to ``time.sleep``.

    Attributes:
        policy: Default retry policy.
        decider: Logic for deciding whether to retry.
        delay_calculator: Calculator for the waits between attempts.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        delay_calculator: DelayCalculator | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.policy = policy if policy is not None else RetryPolicy()
        self.decider = RetryDecider()
        self.delay_calculator = (
            delay_calculator if delay_calculator is not None else DelayCalculator()
        )
        self._sleep = sleep

    def execute(self, context: RequestContext) -> None:
        """Execute the rest of the pipeline with automatic retries.

        Args:
            context: The exchange. On return, ``context.response`` holds
                the response of the last attempt.

        Raises:
            DelayCalculationError: If a ``Retry-After`` header cannot be
                parsed.
            PipelineError: If the pipeline is wired incorrectly.
        """
        policy = resolve_policy(context, self.policy)
        attempt = 0
        while True:
            self.execute_next(context)
            should_retry, reason = self.decider.should_retry(context, policy, attempt)
            if not should_retry:
                logger.debug(
                    f"{context.method} request to {context.url} done after "
                    f"{attempt + 1} attempt(s) ({reason})"
                )
                return
            attempt += 1
            delay = prepare_retry(context, policy, attempt, self.delay_calculator, reason)
            (self._sleep or time.sleep)(delay)
