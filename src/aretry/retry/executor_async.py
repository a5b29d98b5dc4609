r"""Asynchronous retry executor.

This module provides the ``AsyncRetryExecutor`` pipeline step that
re-invokes the rest of an asynchronous pipeline while the server
answers with a retryable status code.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING

from aretry.core.config import RetryPolicy
from aretry.middleware import AsyncMiddleware
from aretry.retry.decider import RetryDecider
from aretry.retry.delay import DelayCalculator
from aretry.retry.executor_core import prepare_retry, resolve_policy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.context import RequestContext

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor(AsyncMiddleware):
    """Retries the rest of an asynchronous pipeline with backoff.

    The attempt loop is an explicit state machine:

    - Executing: await the next step.
    - Evaluating: ask the ``RetryDecider`` whether to retry.
    - Retrying: increment the attempt, stamp the ``Retry-Attempt``
      header and compute the delay.
    - Waiting: sleep without blocking the event loop, then execute
      again.

    Only the current task is suspended while waiting, and cancelling it
    during the wait stops the exchange before another attempt is sent.
    Exceptions raised by the next step are never retried and propagate
    unchanged.

    Args:
        policy: Default retry policy. Defaults to ``RetryPolicy()``.
        delay_calculator: Calculator for the waits between attempts.
        sleep: Coroutine function used to wait. Defaults to
            ``asyncio.sleep``.

    Attributes:
        policy: Default retry policy.
        decider: Logic for deciding whether to retry.
        delay_calculator: Calculator for the waits between attempts.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from aretry.context import RequestContext
        >>> from aretry.core.config import RetryPolicy
        >>> from aretry.middleware import AsyncSendStep, chain
        >>> from aretry.retry import AsyncRetryExecutor
        >>> async def main():
        ...     responses = iter([httpx.Response(503, headers={"Retry-After": "0"}), httpx.Response(200)])
        ...     transport = httpx.MockTransport(lambda request: next(responses))
        ...     async with httpx.AsyncClient(transport=transport) as client:
        ...         pipeline = chain(AsyncRetryExecutor(RetryPolicy(delay=0)), AsyncSendStep(client))
        ...         context = RequestContext("https://example.com")
        ...         await pipeline.execute(context)
        ...     return context.response.status_code
        ...
        >>> asyncio.run(main())
        200

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        delay_calculator: DelayCalculator | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self.policy = policy if policy is not None else RetryPolicy()
        self.decider = RetryDecider()
        self.delay_calculator = (
            delay_calculator if delay_calculator is not None else DelayCalculator()
        )
        self._sleep = sleep

    async def execute(self, context: RequestContext) -> None:
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
            await self.execute_next(context)
            should_retry, reason = self.decider.should_retry(context, policy, attempt)
            if not should_retry:
                logger.debug(
                    f"{context.method} request to {context.url} done after "
                    f"{attempt + 1} attempt(s) ({reason})"
                )
                return
            attempt += 1
            delay = prepare_retry(context, policy, attempt, self.delay_calculator, reason)
            await (self._sleep or asyncio.sleep)(delay)
