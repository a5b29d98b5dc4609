r"""aretry - Retry layer for HTTP client request pipelines.

This package provides a retry-with-backoff pipeline step for HTTP
clients built on httpx. After each response it decides whether the
exchange should be attempted again, computes how long to wait, and
re-invokes the rest of the pipeline a bounded number of times.

Key Features:
    - Retries on 429, 503 and 504 responses
    - Never resends a streamed ``application/octet-stream`` body
    - Exponential backoff with jitter, capped by ``max_delay``
    - Retry-After header support (seconds and HTTP-date formats)
    - ``Retry-Attempt`` header stamped on every retried request
    - Per-request policy overrides
    - Sync and async pipelines and context manager clients

Example:
    ```pycon
    >>> from aretry import RetryClient, RetryPolicy
    >>> with RetryClient(policy=RetryPolicy(max_retries=5)) as client:  # doctest: +SKIP
    ...     response = client.get("https://api.example.com/data")
    ...     response = client.post(
    ...         "https://api.example.com/data",
    ...         json={"key": "value"},
    ...         retry_policy=RetryPolicy(max_retries=1),
    ...     )
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncMiddleware",
    "AsyncRetryClient",
    "AsyncRetryExecutor",
    "AsyncSendStep",
    "DelayCalculationError",
    "DelayCalculator",
    "Middleware",
    "PipelineError",
    "RequestContext",
    "RequestOptions",
    "RetryClient",
    "RetryDecider",
    "RetryError",
    "RetryExecutor",
    "RetryPolicy",
    "SendStep",
    "__version__",
    "chain",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.client import RetryClient
from aretry.client_async import AsyncRetryClient
from aretry.context import RequestContext, RequestOptions
from aretry.core.config import RetryPolicy
from aretry.exceptions import DelayCalculationError, PipelineError, RetryError
from aretry.middleware import AsyncMiddleware, AsyncSendStep, Middleware, SendStep, chain
from aretry.retry import (
    AsyncRetryExecutor,
    DelayCalculator,
    RetryDecider,
    RetryExecutor,
)

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
