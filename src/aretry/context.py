r"""Request context carried through the middleware pipeline.

A ``RequestContext`` describes one logical exchange. It is owned by a
single in-flight exchange and is mutated by the pipeline steps: the
retry executor stamps headers on its ``request_options`` and the send
step stores the latest ``response``.
"""

from __future__ import annotations

__all__ = ["RequestContext", "RequestOptions"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, Iterable

    from aretry.core.config import RetryPolicy


@dataclass
class RequestOptions:
    """Mutable description of the request sent on each attempt.

    Args:
        method: The HTTP method. It is stored upper-cased.
        headers: Request headers. Any mapping is converted to
            ``httpx.Headers`` so lookups are case-insensitive.
        content: Optional request body. ``bytes`` and ``str`` bodies can
            be sent again; an iterable of bytes is a stream that is
            consumed by the first attempt.
        json: Optional JSON payload, encoded by httpx.
        extensions: Optional httpx request extensions.

    Example:
        ```pycon
        >>> from aretry.context import RequestOptions
        >>> options = RequestOptions("post", headers={"content-type": "text/plain"})
        >>> options.method
        'POST'
        >>> options.headers["Content-Type"]
        'text/plain'

        ```
    """

    method: str = "GET"
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes | str | Iterable[bytes] | AsyncIterable[bytes] | None = None
    json: Any = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)


@dataclass
class RequestContext:
    """State of one logical HTTP exchange.

    Args:
        url: The request target.
        request_options: The request description used on every attempt.
        response: The most recent response, overwritten on every attempt.
        policy_override: Optional per-call retry policy. When set, it
            takes precedence over the executor's default policy.

    Example:
        ```pycon
        >>> from aretry.context import RequestContext, RequestOptions
        >>> context = RequestContext("https://example.com", RequestOptions("GET"))
        >>> context.url
        URL('https://example.com')
        >>> context.method
        'GET'
        >>> context.response is None
        True

        ```
    """

    url: httpx.URL
    request_options: RequestOptions = field(default_factory=RequestOptions)
    response: httpx.Response | None = None
    policy_override: RetryPolicy | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.url, httpx.URL):
            self.url = httpx.URL(self.url)

    @property
    def method(self) -> str:
        """The HTTP method of the exchange."""
        return self.request_options.method
