r"""Exceptions raised by the retry layer.

Non-retryable HTTP responses are never turned into exceptions: they are
returned to the caller as-is. The errors below only report problems that
prevent the retry layer itself from doing its job.
"""

from __future__ import annotations

__all__ = ["DelayCalculationError", "PipelineError", "RetryError"]


class RetryError(Exception):
    """Base class for all errors raised by ``aretry``."""


class DelayCalculationError(RetryError):
    """Raised when the delay before the next attempt cannot be computed.

    This happens when the server sends a ``Retry-After`` header that is
    neither a number of seconds nor a valid HTTP-date.

    Args:
        header_value: The raw ``Retry-After`` header value.
        message: Optional error message. A default message mentioning
            the header value is used if not provided.

    Example:
        ```pycon
        >>> from aretry.exceptions import DelayCalculationError
        >>> error = DelayCalculationError("soon")
        >>> error.header_value
        'soon'
        >>> str(error)
        "Cannot compute retry delay from Retry-After header 'soon'"

        ```
    """

    def __init__(self, header_value: str, message: str | None = None) -> None:
        if message is None:
            message = f"Cannot compute retry delay from Retry-After header {header_value!r}"
        super().__init__(message)
        self.header_value = header_value


class PipelineError(RetryError):
    """Raised when the request pipeline is wired incorrectly.

    For example, a middleware without a next step, or a step that
    returned without storing a response on the context.
    """
