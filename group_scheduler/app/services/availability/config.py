# group_scheduler/app/services/availability/config.py
"""
Aggregation configuration for the availability engine.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...config import settings

ALLOWED_RESOLUTIONS = (15, 30, 60)
MAX_DAYS_AHEAD = 365

# Round-robin slot length is part of the output contract, not a setting
ROUND_ROBIN_SLOT_MINUTES = 30

COLLECTIVE = "collective"
ROUND_ROBIN = "round-robin"
MODES = (COLLECTIVE, ROUND_ROBIN)


@dataclass(frozen=True)
class AggregationConfig:
    """
    Configuration for group availability aggregation.

    Attributes:
        collective_resolution_minutes: Grid step for collective mode (15/30/60)
        default_days_ahead: Horizon used when the caller does not pass days_ahead
    """
    collective_resolution_minutes: int = 15
    default_days_ahead: int = 14

    def __post_init__(self):
        """Validate configuration."""
        if self.collective_resolution_minutes not in ALLOWED_RESOLUTIONS:
            raise ValueError(
                f"collective_resolution_minutes must be 15, 30, or 60, "
                f"got {self.collective_resolution_minutes}"
            )
        if not 1 <= self.default_days_ahead <= MAX_DAYS_AHEAD:
            raise ValueError(
                f"default_days_ahead must be between 1 and {MAX_DAYS_AHEAD}, "
                f"got {self.default_days_ahead}"
            )

    def resolution_for(self, mode: str) -> int:
        """Grid step in minutes used by the given mode."""
        if mode == ROUND_ROBIN:
            return ROUND_ROBIN_SLOT_MINUTES
        return self.collective_resolution_minutes


@lru_cache
def get_aggregation_config() -> AggregationConfig:
    """
    Get aggregation configuration (singleton, read-only).

    Values come from the GROUP_SCHEDULER_* environment settings.
    """
    return AggregationConfig(
        collective_resolution_minutes=settings.collective_resolution_minutes,
        default_days_ahead=settings.default_days_ahead,
    )
