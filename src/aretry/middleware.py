r"""Pipeline step contract and terminal send steps.

Every step of a request pipeline implements ``execute(context)``: it
does its own work and hands the context to its ``next`` step. The last
step of a pipeline sends the request and stores the response on the
context. ``Middleware`` is the synchronous contract and
``AsyncMiddleware`` the asynchronous one.

Example:
    ```pycon
    >>> import httpx
    >>> from aretry.context import RequestContext
    >>> from aretry.middleware import SendStep, chain
    >>> from aretry.retry import RetryExecutor
    >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
    >>> with httpx.Client(transport=transport) as client:
    ...     pipeline = chain(RetryExecutor(), SendStep(client))
    ...     context = RequestContext("https://example.com")
    ...     pipeline.execute(context)
    ...
    >>> context.response.status_code
    200

    ```
"""

from __future__ import annotations

__all__ = ["AsyncMiddleware", "AsyncSendStep", "Middleware", "SendStep", "chain"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar

from aretry.exceptions import PipelineError

if TYPE_CHECKING:
    import httpx

    from aretry.context import RequestContext

logger: logging.Logger = logging.getLogger(__name__)


class Middleware(ABC):
    """Synchronous pipeline step.

    Attributes:
        next: The next step of the pipeline, or ``None`` for the last
            step.
    """

    next: Middleware | None = None

    @abstractmethod
    def execute(self, context: RequestContext) -> None:
        """Process the exchange described by ``context``.

        Args:
            context: The request context. On return,
                ``context.response`` holds the response.
        """

    def execute_next(self, context: RequestContext) -> None:
        """Hand the context to the next step.

        Raises:
            PipelineError: If this step has no next step.
        """
        if self.next is None:
            msg = f"{type(self).__name__} has no next step"
            raise PipelineError(msg)
        self.next.execute(context)


class AsyncMiddleware(ABC):
    """Asynchronous pipeline step.

    Attributes:
        next: The next step of the pipeline, or ``None`` for the last
            step.
    """

    next: AsyncMiddleware | None = None

    @abstractmethod
    async def execute(self, context: RequestContext) -> None:
        """Process the exchange described by ``context``.

        Args:
            context: The request context. On return,
                ``context.response`` holds the response.
        """

    async def execute_next(self, context: RequestContext) -> None:
        """Hand the context to the next step.

        Raises:
            PipelineError: If this step has no next step.
        """
        if self.next is None:
            msg = f"{type(self).__name__} has no next step"
            raise PipelineError(msg)
        await self.next.execute(context)


StepT = TypeVar("StepT", Middleware, AsyncMiddleware)


def chain(*steps: StepT) -> StepT:
    """Link steps into a pipeline and return its first step.

    Args:
        *steps: The steps in execution order. The last one is expected
            to send the request.

    Returns:
        The first step.

    Raises:
        ValueError: If no step is given.
    """
    if not steps:
        msg = "chain() requires at least one step"
        raise ValueError(msg)
    for current, following in zip(steps, steps[1:]):
        current.next = following
    return steps[0]


class SendStep(Middleware):
    """Last step of a synchronous pipeline: sends the request with httpx.

    A new ``httpx.Request`` is built on every call so headers written by
    earlier steps, such as ``Retry-Attempt``, are sent.

    Args:
        client: The httpx client used to send requests.
    """

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    def execute(self, context: RequestContext) -> None:
        options = context.request_options
        request = self.client.build_request(
            options.method,
            context.url,
            headers=options.headers,
            content=options.content,
            json=options.json,
            extensions=options.extensions or None,
        )
        logger.debug(f"Sending {options.method} request to {context.url}")
        context.response = self.client.send(request)


class AsyncSendStep(AsyncMiddleware):
    """Last step of an asynchronous pipeline: sends the request with httpx.

    Args:
        client: The httpx async client used to send requests.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def execute(self, context: RequestContext) -> None:
        options = context.request_options
        request = self.client.build_request(
            options.method,
            context.url,
            headers=options.headers,
            content=options.content,
            json=options.json,
            extensions=options.extensions or None,
        )
        logger.debug(f"Sending {options.method} request to {context.url}")
        context.response = await self.client.send(request)
