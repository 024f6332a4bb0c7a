"""Data models for memmon."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Sample:
    """Immutable reading of memory and swap usage for one tick."""

    memory_percent: float  # 0.0 - 100.0
    swap_percent: float  # 0.0 - 100.0


ZERO_SAMPLE = Sample(memory_percent=0.0, swap_percent=0.0)


@dataclass(slots=True, frozen=True)
class RenderModel:
    """Everything the dashboard needs to draw a single tick."""

    memory_percent: float
    swap_percent: float
    alarm: bool
    memory_history: tuple[float, ...]
    swap_history: tuple[float, ...]
    total_memory: int  # Bytes
    used_memory: int  # Bytes
    total_swap: int  # Bytes
    used_swap: int  # Bytes


@dataclass(slots=True, frozen=True)
class MemoryCounters:
    """Raw byte counters read from a metrics source."""

    total_memory: int = 0
    used_memory: int = 0
    total_swap: int = 0
    used_swap: int = 0
