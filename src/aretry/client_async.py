r"""Asynchronous context manager client with automatic retries.

This module provides the ``AsyncRetryClient`` class. It owns an
``httpx.AsyncClient`` and sends every request through a pipeline made of
an ``AsyncRetryExecutor``, optional extra middlewares, and an
``AsyncSendStep``.
"""

from __future__ import annotations

__all__ = ["AsyncRetryClient"]

from typing import TYPE_CHECKING, Any

import httpx

from aretry.context import RequestContext, RequestOptions
from aretry.core.config import DEFAULT_TIMEOUT, RetryPolicy
from aretry.core.validation import validate_timeout
from aretry.middleware import AsyncMiddleware, AsyncSendStep, chain
from aretry.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import TracebackType
    from typing import Self

    from aretry.retry.delay import DelayCalculator


class AsyncRetryClient:
    r"""Asynchronous context manager for HTTP requests with retries.

    Args:
        policy: Default retry policy. Defaults to ``RetryPolicy()``.
        timeout: Maximum seconds to wait for server responses. Must be > 0.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        middlewares: Extra pipeline steps inserted between the retry
            executor and the send step. They run on every attempt.
        delay_calculator: Optional calculator for the waits.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import AsyncRetryClient, RetryPolicy
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncRetryClient(policy=RetryPolicy(max_retries=5)) as client:
        ...         response = await client.get("https://api.example.com/data")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        middlewares: Sequence[AsyncMiddleware] = (),
        delay_calculator: DelayCalculator | None = None,
    ) -> None:
        validate_timeout(timeout)
        self._timeout = timeout
        self._transport = transport
        self.executor = AsyncRetryExecutor(policy, delay_calculator=delay_calculator)
        self._middlewares = tuple(middlewares)

        # Client and pipeline are created when entering the context
        self._client: httpx.AsyncClient | None = None
        self._pipeline: AsyncMiddleware | None = None

    async def __aenter__(self) -> Self:
        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        self._pipeline = chain(self.executor, *self._middlewares, AsyncSendStep(self._client))
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None
        self._pipeline = None

    def _ensure_pipeline(self) -> AsyncMiddleware:
        """Return the pipeline.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if self._pipeline is None:
            msg = "AsyncRetryClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._pipeline

    async def request(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        headers: Mapping[str, str] | None = None,
        content: Any = None,
        json: Any = None,
        retry_policy: RetryPolicy | None = None,
    ) -> httpx.Response:
        r"""Send an HTTP request with automatic retries.

        Args:
            method: HTTP method.
            url: The URL to send the request to.
            headers: Optional request headers.
            content: Optional request body.
            json: Optional JSON payload.
            retry_policy: Optional policy for this request only.

        Returns:
            The response of the last attempt.

        Raises:
            RuntimeError: If called outside of a context manager.
        """
        pipeline = self._ensure_pipeline()
        context = RequestContext(
            url=url,
            request_options=RequestOptions(
                method=method, headers=httpx.Headers(headers), content=content, json=json
            ),
            policy_override=retry_policy,
        )
        await pipeline.execute(context)
        return context.response

    async def get(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send a GET request (see ``request``)."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send a POST request (see ``request``)."""
        return await self.request("POST", url, **kwargs)

    async def put(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send a PUT request (see ``request``)."""
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send a PATCH request (see ``request``)."""
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send a DELETE request (see ``request``)."""
        return await self.request("DELETE", url, **kwargs)

    async def head(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send a HEAD request (see ``request``)."""
        return await self.request("HEAD", url, **kwargs)

    async def options(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        """Send an OPTIONS request (see ``request``)."""
        return await self.request("OPTIONS", url, **kwargs)
