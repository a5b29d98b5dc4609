r"""Retry decision logic.

This module provides the predicates answering "is this response
retryable?" and "can this request body be sent again?", and the
``RetryDecider`` class that combines them with the attempt budget and
the policy's ``should_retry`` predicate.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "is_payload_replayable", "is_retryable_status"]

import logging
from typing import TYPE_CHECKING

from aretry.core.config import RETRY_STATUS_CODES
from aretry.exceptions import PipelineError
from aretry.utils.headers import get_request_header

if TYPE_CHECKING:
    from aretry.context import RequestContext, RequestOptions
    from aretry.core.config import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

# Methods whose body may be a one-shot stream
_BODY_METHODS = frozenset({"PUT", "PATCH", "POST"})

_STREAM_CONTENT_TYPE = "application/octet-stream"


def is_retryable_status(status_code: int) -> bool:
    """Return whether a response status code triggers a retry.

    Example:
        ```pycon
        >>> from aretry.retry.decider import is_retryable_status
        >>> is_retryable_status(503)
        True
        >>> is_retryable_status(500)
        False

        ```
    """
    return status_code in RETRY_STATUS_CODES


def is_payload_replayable(method: str, request_options: RequestOptions) -> bool:
    """Return whether the request body can be sent again.

    A ``PUT``, ``PATCH`` or ``POST`` request is not replayable when it
    has an ``application/octet-stream`` content type or when its
    content is an iterable stream rather than ``bytes`` or ``str``.
    Both are treated as an unbuffered stream already consumed by the
    first attempt.

    Example:
        ```pycon
        >>> from aretry.context import RequestOptions
        >>> from aretry.retry.decider import is_payload_replayable
        >>> options = RequestOptions(
        ...     "POST", headers={"Content-Type": "application/octet-stream"}
        ... )
        >>> is_payload_replayable("POST", options)
        False
        >>> is_payload_replayable("GET", options)
        True

        ```
    """
    if method.upper() not in _BODY_METHODS:
        return True
    if get_request_header(request_options, "Content-Type") == _STREAM_CONTENT_TYPE:
        return False
    return not _is_streamed(request_options.content)


def _is_streamed(content: object) -> bool:
    return content is not None and not isinstance(content, (bytes, bytearray, str))


class RetryDecider:
    """Decides whether an exchange should be attempted again."""

    def should_retry(
        self, context: RequestContext, policy: RetryPolicy, attempt: int
    ) -> tuple[bool, str]:
        """Determine if the latest response should trigger a retry.

        A retry is approved only when the attempt budget is not
        exhausted, the status code is retryable, the payload can be sent
        again and the policy's ``should_retry`` predicate agrees. The
        predicate is not called when a previous check already refuses.

        Args:
            context: The exchange, holding the latest response.
            policy: The resolved retry policy.
            attempt: Number of retries already performed.

        Returns:
            Tuple of (should_retry, reason).

        Raises:
            PipelineError: If the context holds no response.
        """
        response = context.response
        if response is None:
            msg = f"{context.method} request to {context.url} completed without a response"
            raise PipelineError(msg)

        if attempt >= policy.max_retries:
            return (False, "max retries exhausted")
        if not is_retryable_status(response.status_code):
            return (False, f"status {response.status_code} is not retryable")
        if not is_payload_replayable(context.method, context.request_options):
            logger.debug(
                f"{context.method} request to {context.url} has a streamed body and cannot be retried"
            )
            return (False, "payload is not replayable")
        if not policy.should_retry(
            policy.delay, attempt, context.url, context.request_options, response
        ):
            return (False, "should_retry returned False")
        return (True, f"status {response.status_code}")
