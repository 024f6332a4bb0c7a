"""Memory sampling engine for memmon."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Protocol

import psutil

from memmon.config import CRITICAL_THRESHOLD, DEFAULT_HISTORY_SIZE
from memmon.models import ZERO_SAMPLE, MemoryCounters, RenderModel, Sample

logger = logging.getLogger(__name__)


class MetricsSource(Protocol):
    """Anything that can report memory and swap counters in bytes."""

    def refresh(self) -> None: ...

    def total_memory_bytes(self) -> int: ...

    def used_memory_bytes(self) -> int: ...

    def total_swap_bytes(self) -> int: ...

    def used_swap_bytes(self) -> int: ...


class PsutilMetricsSource:
    """
    Metrics source backed by psutil.

    Readings are taken in refresh() and cached, so all four accessors
    describe the same moment.
    """

    def __init__(self) -> None:
        self._total_memory = 0
        self._used_memory = 0
        self._total_swap = 0
        self._used_swap = 0

    def refresh(self) -> None:
        mem = psutil.virtual_memory()
        swap = psutil.swap_memory()

        self._total_memory = mem.total
        # total - available matches psutil's own percent, unlike mem.used
        self._used_memory = mem.total - mem.available
        self._total_swap = swap.total
        self._used_swap = swap.used

    def total_memory_bytes(self) -> int:
        return self._total_memory

    def used_memory_bytes(self) -> int:
        return self._used_memory

    def total_swap_bytes(self) -> int:
        return self._total_swap

    def used_swap_bytes(self) -> int:
        return self._used_swap


def _percent(used: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return used / total * 100.0


class Sampler:
    """
    Turns raw byte counters into a Sample.

    A source that fails is never fatal: the previous reading is reused,
    or a zero sample before anything has been read.
    """

    def __init__(self, source: MetricsSource) -> None:
        self._source = source
        self._last_sample: Sample = ZERO_SAMPLE
        self._counters = MemoryCounters()
        self._failing = False

    @property
    def last_sample(self) -> Sample:
        """Get the most recent sample."""
        return self._last_sample

    @property
    def counters(self) -> MemoryCounters:
        """Get the byte counters behind the most recent sample."""
        return self._counters

    def sample(self) -> Sample:
        """Refresh the source and compute memory and swap percentages."""
        try:
            self._source.refresh()
            counters = MemoryCounters(
                total_memory=self._source.total_memory_bytes(),
                used_memory=self._source.used_memory_bytes(),
                total_swap=self._source.total_swap_bytes(),
                used_swap=self._source.used_swap_bytes(),
            )
        except Exception:
            if self._failing:
                logger.debug("Metrics source still unavailable", exc_info=True)
            else:
                logger.warning("Metrics source unavailable, reusing last sample", exc_info=True)
            self._failing = True
            return self._last_sample

        if self._failing:
            logger.info("Metrics source available again")
            self._failing = False
        self._counters = counters
        self._last_sample = Sample(
            memory_percent=_percent(counters.used_memory, counters.total_memory),
            swap_percent=_percent(counters.used_swap, counters.total_swap),
        )
        return self._last_sample


class HistoryBuffer:
    """Two parallel FIFO sequences of memory and swap percentages."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._memory: deque[float] = deque(maxlen=capacity)
        self._swap: deque[float] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Get the maximum number of samples kept."""
        return self._memory.maxlen or 0

    def __len__(self) -> int:
        return len(self._memory)

    def append(self, sample: Sample) -> None:
        """Append a sample, evicting the oldest one from both sequences when full."""
        self._memory.append(sample.memory_percent)
        self._swap.append(sample.swap_percent)

    def snapshot(self) -> tuple[tuple[float, ...], tuple[float, ...]]:
        """Get the memory and swap histories, oldest first."""
        return tuple(self._memory), tuple(self._swap)


class AlarmEvaluator:
    """Flags memory usage strictly above a fixed threshold."""

    def __init__(self, threshold: float = CRITICAL_THRESHOLD) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        """Get the critical threshold."""
        return self._threshold

    def evaluate(self, latest_memory_percent: float) -> bool:
        """Check whether the latest memory percentage is critical."""
        return is_critical(latest_memory_percent, self._threshold)


def is_critical(memory_percent: float, threshold: float = CRITICAL_THRESHOLD) -> bool:
    """Check a memory percentage against the critical threshold."""
    return memory_percent > threshold


@dataclass(slots=True)
class MonitorState:
    """Mutable state carried from one tick to the next."""

    sampler: Sampler
    history: HistoryBuffer
    alarm: AlarmEvaluator


def create_state(
    source: MetricsSource | None = None,
    history_size: int = DEFAULT_HISTORY_SIZE,
    threshold: float = CRITICAL_THRESHOLD,
) -> MonitorState:
    """Build a fresh MonitorState, reading from psutil unless a source is given."""
    return MonitorState(
        sampler=Sampler(source if source is not None else PsutilMetricsSource()),
        history=HistoryBuffer(history_size),
        alarm=AlarmEvaluator(threshold),
    )


def tick(state: MonitorState) -> RenderModel:
    """Take one sample, record it and describe the result for rendering."""
    sample = state.sampler.sample()
    state.history.append(sample)
    memory_history, swap_history = state.history.snapshot()

    counters = state.sampler.counters
    return RenderModel(
        memory_percent=sample.memory_percent,
        swap_percent=sample.swap_percent,
        alarm=state.alarm.evaluate(sample.memory_percent),
        memory_history=memory_history,
        swap_history=swap_history,
        total_memory=counters.total_memory,
        used_memory=counters.used_memory,
        total_swap=counters.total_swap,
        used_swap=counters.used_swap,
    )
