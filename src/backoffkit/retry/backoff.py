"""
Backoff delay calculation.
"""

import random

from .config import RetryConfig


def calculate_backoff(
    attempt: int,
    config: RetryConfig,
    rng: random.Random | None = None,
) -> float:
    """
    Calculate the delay before the next attempt.

    The exponential delay ``2 ** attempt * delay_factor`` is scaled by a
    multiplier drawn uniformly from
    ``[1 - randomization_factor, 1 + randomization_factor)``, then capped at
    ``max_delay``. A non-positive result is clamped to zero.

    Args:
        attempt: Number of attempts that have already failed
        config: Retry configuration
        rng: Random source; the module-level ``random`` source when omitted

    Returns:
        Delay in seconds, within ``[0, config.max_delay]``
    """
    if attempt < 0:
        raise ValueError(f"attempt must not be negative, got {attempt}")

    draw = (rng or random).random()
    multiplier = 1 + config.randomization_factor * (2 * draw - 1)
    if multiplier <= 0 or config.delay_factor == 0:
        return 0.0

    try:
        delay = (2**attempt) * config.delay_factor * multiplier
    except OverflowError:
        # 2 ** attempt no longer fits in a float
        return config.max_delay

    return min(delay, config.max_delay)


class BackoffPolicy:
    """Exponential backoff with symmetric jitter for one configuration."""

    def __init__(self, config: RetryConfig, rng: random.Random | None = None):
        self.config = config
        self.rng = rng

    def delay(self, attempt: int) -> float:
        """Delay in seconds before the retry that follows ``attempt`` failures."""
        return calculate_backoff(attempt, self.config, self.rng)

    def __repr__(self) -> str:
        return f"BackoffPolicy({self.config!r})"
