r"""Pipeline steps used to drive the retry executors in unit tests."""

from __future__ import annotations

__all__ = ["AsyncScriptedStep", "ScriptedStep", "make_context"]

from typing import TYPE_CHECKING, Any

from aretry.context import RequestContext, RequestOptions
from aretry.middleware import AsyncMiddleware, Middleware

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from aretry.core.config import RetryPolicy


def make_context(
    method: str = "GET",
    url: str = "https://example.com/resource",
    headers: dict[str, str] | None = None,
    policy_override: RetryPolicy | None = None,
    **kwargs: Any,
) -> RequestContext:
    return RequestContext(
        url=url,
        request_options=RequestOptions(method=method, headers=headers or {}, **kwargs),
        policy_override=policy_override,
    )


class ScriptedStep(Middleware):
    """Last pipeline step returning scripted responses.

    The last response is repeated once the script is exhausted. Each
    call records the ``Retry-Attempt`` header seen by the step.
    """

    def __init__(self, responses: Sequence[httpx.Response | Exception]) -> None:
        self.responses = list(responses)
        self.retry_attempt_headers: list[str | None] = []

    @property
    def call_count(self) -> int:
        return len(self.retry_attempt_headers)

    def _next_response(self) -> httpx.Response:
        index = min(self.call_count - 1, len(self.responses) - 1)
        item = self.responses[index]
        if isinstance(item, Exception):
            raise item
        return item

    def execute(self, context: RequestContext) -> None:
        self.retry_attempt_headers.append(context.request_options.headers.get("Retry-Attempt"))
        context.response = self._next_response()


class AsyncScriptedStep(AsyncMiddleware):
    """Asynchronous version of ``ScriptedStep``."""

    def __init__(self, responses: Sequence[httpx.Response | Exception]) -> None:
        self._step = ScriptedStep(responses)

    @property
    def call_count(self) -> int:
        return self._step.call_count

    @property
    def retry_attempt_headers(self) -> list[str | None]:
        return self._step.retry_attempt_headers

    async def execute(self, context: RequestContext) -> None:
        self._step.execute(context)
