r"""Unit tests for the RetryPolicy dataclass and module defaults."""

from __future__ import annotations

import httpx
import pytest
from coola.equality import objects_are_equal

from aretry.context import RequestOptions
from aretry.core import (
    DEFAULT_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    RETRY_AFTER_HEADER,
    RETRY_ATTEMPT_HEADER,
    RETRY_STATUS_CODES,
    RetryPolicy,
)
from aretry.core.config import always_retry


def never_retry(*args: object) -> bool:  # noqa: ARG001
    return False


###############################
#     Tests for constants     #
###############################


def test_retry_status_codes() -> None:
    assert RETRY_STATUS_CODES == frozenset({429, 503, 504})


def test_retry_status_codes_is_immutable() -> None:
    with pytest.raises(AttributeError):
        RETRY_STATUS_CODES.add(500)  # type: ignore[attr-defined]


def test_header_names() -> None:
    assert RETRY_ATTEMPT_HEADER == "Retry-Attempt"
    assert RETRY_AFTER_HEADER == "Retry-After"


def test_always_retry() -> None:
    assert always_retry(3.0, 0, httpx.URL("https://example.com"), RequestOptions(), httpx.Response(503))


#################################
#     Tests for RetryPolicy     #
#################################


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()
    assert policy.max_retries == DEFAULT_MAX_RETRIES == 3
    assert policy.delay == DEFAULT_DELAY == 3.0
    assert policy.max_delay == DEFAULT_MAX_DELAY == 180.0
    assert policy.should_retry is always_retry


def test_retry_policy_custom_values() -> None:
    policy = RetryPolicy(max_retries=5, delay=1.0, max_delay=30.0, should_retry=never_retry)
    assert objects_are_equal(
        policy.to_dict(),
        {"max_retries": 5, "delay": 1.0, "max_delay": 30.0, "should_retry": never_retry},
    )


@pytest.mark.parametrize("max_retries", [0, 1, 10])
def test_retry_policy_max_retries_valid(max_retries: int) -> None:
    assert RetryPolicy(max_retries=max_retries).max_retries == max_retries


@pytest.mark.parametrize("max_retries", [-1, 11])
def test_retry_policy_max_retries_out_of_range(max_retries: int) -> None:
    with pytest.raises(ValueError, match="max_retries must be"):
        RetryPolicy(max_retries=max_retries)


@pytest.mark.parametrize("max_retries", [1.5, "3", True])
def test_retry_policy_max_retries_not_integer(max_retries: object) -> None:
    with pytest.raises(ValueError, match="max_retries must be an integer"):
        RetryPolicy(max_retries=max_retries)  # type: ignore[arg-type]


@pytest.mark.parametrize("delay", [-0.1, 180.5])
def test_retry_policy_delay_out_of_range(delay: float) -> None:
    with pytest.raises(ValueError, match="delay must be"):
        RetryPolicy(delay=delay)


@pytest.mark.parametrize("max_delay", [-1.0, 181.0])
def test_retry_policy_max_delay_out_of_range(max_delay: float) -> None:
    with pytest.raises(ValueError, match="max_delay must be"):
        RetryPolicy(max_delay=max_delay)


def test_retry_policy_zero_values_accepted() -> None:
    policy = RetryPolicy(max_retries=0, delay=0.0, max_delay=0.0)
    assert (policy.max_retries, policy.delay, policy.max_delay) == (0, 0.0, 0.0)


def test_retry_policy_should_retry_not_callable() -> None:
    with pytest.raises(ValueError, match="should_retry must be callable"):
        RetryPolicy(should_retry="yes")  # type: ignore[arg-type]


def test_retry_policy_copy_is_independent() -> None:
    policy = RetryPolicy(max_retries=2, delay=1.0)
    clone = policy.copy()
    assert clone == policy
    assert clone is not policy
    clone.max_retries = 9
    assert policy.max_retries == 2


def test_retry_policy_merge() -> None:
    policy = RetryPolicy(max_retries=2, delay=1.0)
    merged = policy.merge(max_retries=4, delay=None)
    assert merged.max_retries == 4
    assert merged.delay == 1.0
    assert policy.max_retries == 2


def test_retry_policy_merge_validates() -> None:
    with pytest.raises(ValueError, match="max_retries must be"):
        RetryPolicy().merge(max_retries=-1)
