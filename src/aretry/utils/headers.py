r"""Helpers to read and write request headers on a request context."""

from __future__ import annotations

__all__ = ["get_request_header", "set_request_header", "stamp_retry_attempt"]

from typing import TYPE_CHECKING

from aretry.core.config import RETRY_ATTEMPT_HEADER

if TYPE_CHECKING:
    from aretry.context import RequestOptions


def get_request_header(request_options: RequestOptions, name: str) -> str | None:
    """Return a request header value, or ``None`` if it is not set.

    The lookup is case-insensitive.

    Example:
        ```pycon
        >>> from aretry.context import RequestOptions
        >>> from aretry.utils.headers import get_request_header
        >>> options = RequestOptions("PUT", headers={"Content-Type": "application/json"})
        >>> get_request_header(options, "content-type")
        'application/json'
        >>> get_request_header(options, "Accept") is None
        True

        ```
    """
    return request_options.headers.get(name)


def set_request_header(request_options: RequestOptions, name: str, value: str) -> None:
    """Set a request header, replacing any previous value.

    Example:
        ```pycon
        >>> from aretry.context import RequestOptions
        >>> from aretry.utils.headers import set_request_header
        >>> options = RequestOptions()
        >>> set_request_header(options, "X-Trace", "1")
        >>> set_request_header(options, "x-trace", "2")
        >>> options.headers.get_list("X-Trace")
        ['2']

        ```
    """
    request_options.headers[name] = value


def stamp_retry_attempt(request_options: RequestOptions, attempt: int) -> None:
    """Write the ``Retry-Attempt`` header for a retried request.

    Args:
        request_options: The request options to update.
        attempt: The 1-based retry attempt number.

    Example:
        ```pycon
        >>> from aretry.context import RequestOptions
        >>> from aretry.utils.headers import stamp_retry_attempt
        >>> options = RequestOptions()
        >>> stamp_retry_attempt(options, 2)
        >>> options.headers["Retry-Attempt"]
        '2'

        ```
    """
    set_request_header(request_options, RETRY_ATTEMPT_HEADER, str(attempt))
