r"""Retry policy dataclass and module-level defaults.

This module provides the configuration constants of the retry layer and
the ``RetryPolicy`` dataclass used by the retry executors. The constants
are plain immutable values; there is no API to change them at runtime.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "MAX_DELAY",
    "MAX_MAX_RETRIES",
    "RETRY_AFTER_HEADER",
    "RETRY_ATTEMPT_HEADER",
    "RETRY_STATUS_CODES",
    "RetryPolicy",
    "always_retry",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aretry.core.validation import MAX_DELAY, MAX_MAX_RETRIES, validate_policy_params

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from aretry.context import RequestOptions


# Default timeout in seconds for the underlying httpx client
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retries
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default base delay in seconds between attempts
DEFAULT_DELAY = 3.0

# Default cap in seconds on a single wait
DEFAULT_MAX_DELAY = 180.0

# HTTP status codes that trigger a retry
# 429: Too Many Requests
# 503: Service Unavailable
# 504: Gateway Timeout
RETRY_STATUS_CODES: frozenset[int] = frozenset({429, 503, 504})

# Header stamped on every retried request with the 1-based attempt count
RETRY_ATTEMPT_HEADER = "Retry-Attempt"

# Header read from responses for a server-supplied delay
RETRY_AFTER_HEADER = "Retry-After"


def always_retry(
    delay: float,  # noqa: ARG001
    attempt: int,  # noqa: ARG001
    url: httpx.URL,  # noqa: ARG001
    request_options: RequestOptions,  # noqa: ARG001
    response: httpx.Response,  # noqa: ARG001
) -> bool:
    """Default ``should_retry`` predicate: approve every retry.

    Example:
        ```pycon
        >>> from aretry.core.config import always_retry
        >>> always_retry(3.0, 0, None, None, None)
        True

        ```
    """
    return True


@dataclass
class RetryPolicy:
    """Tunables controlling the retry loop of one exchange.

    A policy is shared read-only between exchanges. The executors work
    on a copy of their default policy, so changing a resolved policy
    never leaks back into the executor.

    Args:
        max_retries: Maximum number of retries after the first attempt.
            Must be between 0 and ``MAX_MAX_RETRIES``.
        delay: Base delay in seconds used by the backoff computation.
            Must be between 0 and ``MAX_DELAY``.
        max_delay: Cap in seconds on a single wait. Must be between 0
            and ``MAX_DELAY``.
        should_retry: Final approval predicate called with
            ``(delay, attempt, url, request_options, response)``. It is
            only consulted once the status code, attempt budget and
            payload checks already allow a retry.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_retries, policy.delay, policy.max_delay
        (3, 3.0, 180.0)
        >>> policy.merge(max_retries=5).max_retries
        5
        >>> policy.max_retries
        3

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    delay: float = DEFAULT_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    should_retry: Callable[
        [float, int, httpx.URL, RequestOptions, httpx.Response], bool
    ] = always_retry

    def __post_init__(self) -> None:
        """Validate the policy.

        Raises:
            ValueError: If any parameter is out of range.
        """
        validate_policy_params(
            max_retries=self.max_retries,
            delay=self.delay,
            max_delay=self.max_delay,
            should_retry=self.should_retry,
        )

    def copy(self) -> RetryPolicy:
        """Return an independent copy of this policy.

        Returns:
            A new ``RetryPolicy`` with the same values.

        Example:
            ```pycon
            >>> from aretry.core.config import RetryPolicy
            >>> policy = RetryPolicy(max_retries=2)
            >>> clone = policy.copy()
            >>> clone.max_retries = 7
            >>> policy.max_retries
            2

            ```
        """
        return replace(self)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with the given parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for the fields to override.

        Returns:
            A new ``RetryPolicy`` instance.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to a dictionary.

        Returns:
            Dictionary with the policy parameters.
        """
        return {
            "max_retries": self.max_retries,
            "delay": self.delay,
            "max_delay": self.max_delay,
            "should_retry": self.should_retry,
        }
