"""Tests for the rate limit governor."""

from unittest.mock import MagicMock

import pytest

from freshservice_tools.core.models import RateState
from freshservice_tools.freshservice.throttle import (
    RateLimitGovernor,
    read_rate_state,
    throttle_delay,
)


def rate_headers(total: object, remaining: object) -> dict[str, str]:
    return {"X-Ratelimit-Total": str(total), "X-Ratelimit-Remaining": str(remaining)}


class TestReadRateState:
    """Tests for read_rate_state."""

    def test_reads_headers(self) -> None:
        """Test parsing of both headers."""
        assert read_rate_state(rate_headers(100, 25)) == RateState(total=100, remaining=25)

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"X-Ratelimit-Total": "100"},
            {"X-Ratelimit-Remaining": "10"},
            rate_headers(0, 10),
            rate_headers(100, 0),
            rate_headers(-1, 10),
            rate_headers("abc", 10),
        ],
    )
    def test_unusable_headers(self, headers: dict[str, str]) -> None:
        """Test absent, non-numeric or non-positive values yield no state."""
        assert read_rate_state(headers) is None


class TestThrottleDelay:
    """Tests for the step function."""

    @pytest.mark.parametrize(
        ("remaining", "expected"),
        [
            (40, 0),  # 60%
            (31, 0),  # 69%
            (30, 5),  # 70%
            (25, 5),  # 75%
            (20, 15),  # 80%
            (15, 15),  # 85%
            (10, 30),  # 90%
            (5, 30),  # 95%
        ],
    )
    def test_steps(self, remaining: int, expected: int) -> None:
        """Test the highest threshold crossed decides the delay."""
        assert throttle_delay(RateState(total=100, remaining=remaining)) == expected


class TestRateLimitGovernor:
    """Tests for RateLimitGovernor."""

    @pytest.mark.parametrize(
        ("remaining", "expected"),
        [(25, 5), (15, 15), (5, 30)],
    )
    def test_sleeps_when_enabled(self, no_sleep: MagicMock, remaining: int, expected: int) -> None:
        """Test blocking sleep proportional to usage."""
        governor = RateLimitGovernor(enabled=True)

        assert governor(rate_headers(100, remaining)) == expected
        no_sleep.assert_called_once_with(expected)

    def test_no_sleep_below_threshold(self, no_sleep: MagicMock) -> None:
        """Test that 60% usage does not sleep."""
        governor = RateLimitGovernor(enabled=True)

        assert governor(rate_headers(100, 40)) == 0
        no_sleep.assert_not_called()

    def test_disabled(self, no_sleep: MagicMock) -> None:
        """Test that a disabled governor never sleeps."""
        governor = RateLimitGovernor(enabled=False)

        assert governor(rate_headers(100, 5)) == 0
        no_sleep.assert_not_called()

    def test_missing_headers(self, no_sleep: MagicMock) -> None:
        """Test that missing headers mean no action."""
        governor = RateLimitGovernor(enabled=True)

        assert governor({}) == 0
        no_sleep.assert_not_called()
