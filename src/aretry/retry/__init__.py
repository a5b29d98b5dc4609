r"""Retry package: decision, delay calculation and execution.

Public API:
    - RetryDecider: Logic for deciding whether to retry
    - DelayCalculator: Wait computation with Retry-After and backoff
    - RetryExecutor: Synchronous retry pipeline step
    - AsyncRetryExecutor: Asynchronous retry pipeline step
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "DelayCalculator",
    "RetryDecider",
    "RetryExecutor",
    "is_payload_replayable",
    "is_retryable_status",
    "resolve_policy",
]

from aretry.retry.decider import RetryDecider, is_payload_replayable, is_retryable_status
from aretry.retry.delay import DelayCalculator
from aretry.retry.executor import RetryExecutor
from aretry.retry.executor_async import AsyncRetryExecutor
from aretry.retry.executor_core import resolve_policy
