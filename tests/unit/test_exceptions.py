r"""Unit tests for exceptions."""

from __future__ import annotations

import pytest

from aretry.exceptions import DelayCalculationError, PipelineError, RetryError


@pytest.mark.parametrize("error_cls", [DelayCalculationError, PipelineError])
def test_errors_inherit_retry_error(error_cls: type[Exception]) -> None:
    assert issubclass(error_cls, RetryError)


def test_delay_calculation_error_default_message() -> None:
    error = DelayCalculationError("tomorrow")
    assert error.header_value == "tomorrow"
    assert str(error) == "Cannot compute retry delay from Retry-After header 'tomorrow'"


def test_delay_calculation_error_custom_message() -> None:
    error = DelayCalculationError("tomorrow", "bad header")
    assert error.header_value == "tomorrow"
    assert str(error) == "bad header"
