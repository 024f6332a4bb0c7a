"""Configuration for memmon."""

from dataclasses import dataclass

DEFAULT_HISTORY_SIZE = 100
CRITICAL_THRESHOLD = 90.0
WARNING_THRESHOLD = 70.0
REFRESH_INTERVAL = 0.5
GLITCH_CHANCE = 0.05
GLITCH_CHAR_CHANCE = 0.3


@dataclass(slots=True, frozen=True)
class MonitorConfig:
    """
    Fixed tuning constants for the memory dashboard.

    Attributes:
        history_size: Number of samples kept for the charts.
        critical_threshold: Memory percentage above which the alarm is raised.
        warning_threshold: Memory percentage above which the readout turns yellow.
        refresh_interval: Seconds between ticks.
        glitch_chance: Probability that a tick renders with the glitch effect.
        glitch_char_chance: Probability that a single character is scrambled
            while the glitch effect is active.
    """

    history_size: int = DEFAULT_HISTORY_SIZE
    critical_threshold: float = CRITICAL_THRESHOLD
    warning_threshold: float = WARNING_THRESHOLD
    refresh_interval: float = REFRESH_INTERVAL
    glitch_chance: float = GLITCH_CHANCE
    glitch_char_chance: float = GLITCH_CHAR_CHANCE

    def __post_init__(self) -> None:
        if self.history_size < 1:
            raise ValueError(f"history_size must be at least 1, got {self.history_size}")
        if self.refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {self.refresh_interval}")
        for name in ("glitch_chance", "glitch_char_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
