"""Bounded per-facility reading history."""

from collections import deque

from h2telemetry.domain.models import Reading


class HistoryStore:
    """Per-facility FIFO buffers of readings.

    Each buffer keeps at most ``capacity`` readings; appending beyond that
    evicts the oldest.
    """

    def __init__(self, capacity: int = 168) -> None:
        if capacity <= 0:
            raise ValueError(f"History capacity must be > 0, got {capacity}")
        self.capacity = capacity
        self._buffers: dict[int, deque[Reading]] = {}

    def append(self, reading: Reading) -> None:
        buffer = self._buffers.get(reading.facility_id)
        if buffer is None:
            buffer = deque(maxlen=self.capacity)
            self._buffers[reading.facility_id] = buffer
        buffer.append(reading)

    def get(self, facility_id: int) -> list[Reading]:
        """Return a copy of the facility's history, oldest first."""
        return list(self._buffers.get(facility_id, ()))

    def trailing(self, facility_id: int, count: int) -> list[Reading]:
        """Return up to ``count`` most recent readings, oldest first."""
        if count <= 0:
            return []
        return self.get(facility_id)[-count:]

    def length(self, facility_id: int) -> int:
        return len(self._buffers.get(facility_id, ()))

    def total_points(self) -> int:
        return sum(len(buffer) for buffer in self._buffers.values())
