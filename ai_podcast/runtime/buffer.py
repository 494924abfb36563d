"""
Ordered segment buffer.

Holds segments that finished synthesis ahead of their turn. The
coordinator only ever takes the segment whose index equals the release
cursor, so playback order is the dialogue order however the workers
finish.
"""

from __future__ import annotations

import threading
import time

from ai_podcast.runtime.segments import Segment


class OrderedSegmentBuffer:
    """Thread-safe store of out-of-order segments keyed by index.

    Invariants:
    - at most one segment per index
    - each segment is taken at most once
    - indices below the release cursor are never accepted

    Example:
        buffer = OrderedSegmentBuffer()
        buffer.insert(segment_1)
        buffer.take_if_next(0)      # None, index 0 not here yet
        buffer.insert(segment_0)
        buffer.take_if_next(0)      # segment_0
    """

    def __init__(self) -> None:
        self._segments: dict[int, Segment] = {}
        self._released_through = -1
        self._lock = threading.Lock()
        self._arrived = threading.Condition(self._lock)

    def __len__(self) -> int:
        with self._lock:
            return len(self._segments)

    def __contains__(self, index: int) -> bool:
        with self._lock:
            return index in self._segments

    def insert(self, segment: Segment) -> None:
        """Add a segment.

        Raises:
            ValueError: If the index is already buffered or was released.
        """
        with self._lock:
            if segment.index <= self._released_through:
                raise ValueError(
                    f"segment {segment.index} arrived after its release"
                )
            if segment.index in self._segments:
                raise ValueError(f"duplicate segment for index {segment.index}")
            self._segments[segment.index] = segment
            self._arrived.notify_all()

    def take_if_next(self, expected_index: int) -> Segment | None:
        """Remove and return the segment at ``expected_index`` if present."""
        with self._lock:
            return self._take(expected_index)

    def wait_for(self, index: int, timeout: float | None = None) -> Segment | None:
        """Block until ``index`` is buffered, then take it.

        Returns None if the timeout expires first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._arrived:
            while index not in self._segments:
                if deadline is None:
                    self._arrived.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                self._arrived.wait(remaining)
            return self._take(index)

    def pending_indices(self) -> list[int]:
        """Buffered indices in ascending order."""
        with self._lock:
            return sorted(self._segments)

    def clear(self) -> None:
        with self._lock:
            self._segments.clear()

    def _take(self, index: int) -> Segment | None:
        segment = self._segments.pop(index, None)
        if segment is not None:
            self._released_through = max(self._released_through, index)
        return segment
