"""Self-throttling based on the account-wide rate limit headers.

Freshservice enforces its per-minute limit across every caller of an
account. When throttling is enabled the governor looks at how much of the
current window is used after each successful call and blocks for a while
once usage crosses 70%, so that other callers do not start seeing 429s.
"""

import logging
import time
from collections.abc import Mapping

from freshservice_tools.core.models import RateState

logger = logging.getLogger(__name__)

HEADER_TOTAL = "X-Ratelimit-Total"
HEADER_REMAINING = "X-Ratelimit-Remaining"

# (percent used, seconds to sleep), lowest threshold first
THROTTLE_STEPS = (
    (70, 5),
    (80, 15),
    (90, 30),
)


def read_rate_state(headers: Mapping[str, str]) -> RateState | None:
    """Read the rate allowance from response headers.

    Returns:
        RateState, or None if either header is absent, non-numeric or non-positive
    """
    try:
        total = int(headers[HEADER_TOTAL])
        remaining = int(headers[HEADER_REMAINING])
    except (KeyError, TypeError, ValueError):
        return None
    if total <= 0 or remaining <= 0:
        return None
    return RateState(total=total, remaining=remaining)


def throttle_delay(state: RateState) -> int:
    """Seconds to wait for a given rate state.

    Steps are evaluated from the lowest threshold up, so the highest one
    crossed decides.
    """
    delay = 0
    percent = state.percent_used
    for threshold, seconds in THROTTLE_STEPS:
        if percent >= threshold:
            delay = seconds
    return delay


class RateLimitGovernor:
    """Blocks after a response when the account is close to its rate ceiling."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def __call__(self, headers: Mapping[str, str]) -> int:
        """Inspect headers and sleep if needed.

        Returns:
            Seconds slept
        """
        if not self.enabled:
            return 0
        state = read_rate_state(headers)
        if state is None:
            return 0
        delay = throttle_delay(state)
        if delay:
            logger.info(
                "Rate limit %.2f%% used (%d of %d remaining). Throttling for %d seconds.",
                state.percent_used,
                state.remaining,
                state.total,
                delay,
            )
            time.sleep(delay)
        return delay
