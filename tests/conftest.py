"""Shared fixtures for memmon tests."""

import pytest

GB = 1024**3


class FakeMetricsSource:
    """Metrics source with counters set directly by the test."""

    def __init__(
        self,
        total_memory: int = 16 * GB,
        used_memory: int = 8 * GB,
        total_swap: int = 4 * GB,
        used_swap: int = 1 * GB,
    ) -> None:
        self.total_memory = total_memory
        self.used_memory = used_memory
        self.total_swap = total_swap
        self.used_swap = used_swap
        self.fail = False
        self.refresh_count = 0

    def refresh(self) -> None:
        self.refresh_count += 1
        if self.fail:
            raise OSError("metrics unavailable")

    def total_memory_bytes(self) -> int:
        return self.total_memory

    def used_memory_bytes(self) -> int:
        return self.used_memory

    def total_swap_bytes(self) -> int:
        return self.total_swap

    def used_swap_bytes(self) -> int:
        return self.used_swap


@pytest.fixture
def fake_source() -> FakeMetricsSource:
    """A metrics source reporting 50% memory and 25% swap usage."""
    return FakeMetricsSource()
