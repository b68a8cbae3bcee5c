"""
Retry configuration and presets.
"""

import dataclasses
import math
from dataclasses import dataclass

from ..exceptions import InvalidConfigError


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for one retry sequence.

    All durations are in seconds.

    Attributes:
        delay_factor: Base delay scaled by 2 ** attempt (default: 0.2)
        randomization_factor: Jitter as a fraction of the delay (default: 0.25 = ±25%)
        max_delay: Cap on any single delay (default: 30.0)
        max_attempts: Total number of operation invocations allowed (default: 8)
        timeout: Overall deadline for the sequence, None or 0 for no deadline
    """

    delay_factor: float = 0.2
    randomization_factor: float = 0.25
    max_delay: float = 30.0
    max_attempts: int = 8
    timeout: float | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise InvalidConfigError("must be an integer", field="max_attempts")
        if self.max_attempts < 1:
            raise InvalidConfigError("must be at least 1", field="max_attempts")
        for name in ("delay_factor", "max_delay", "randomization_factor"):
            self._check_duration(name, getattr(self, name))
        if self.timeout is not None:
            self._check_duration("timeout", self.timeout)

    @staticmethod
    def _check_duration(name: str, value: float) -> None:
        if not math.isfinite(value):
            raise InvalidConfigError("must be a finite number", field=name)
        if value < 0:
            raise InvalidConfigError("must not be negative", field=name)

    @property
    def has_deadline(self) -> bool:
        """Whether an overall deadline is enforced."""
        return bool(self.timeout) and self.timeout > 0

    def with_overrides(self, **changes) -> "RetryConfig":
        """Return a validated copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            delay_factor=1.0,
            max_delay=120.0,
            max_attempts=12,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            delay_factor=0.1,
            max_delay=5.0,
            max_attempts=3,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_attempts=1)
