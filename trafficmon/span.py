"""Trailing sum over the last K closed segments.

TrailingSum keeps K running cumulative sums in a fixed list indexed by a
monotonically increasing cursor modulo K.  The slot the cursor moves into
holds the cumulative value from K pushes ago, so the trailing sum is the new
cumulative minus what was there: O(1) per push, no rescans, no history.

Before K pushes the untouched slots are zero, which makes the sum
zero-padded at stream start.

State per Span: one TrailingSum + one Alert.
"""

from trafficmon.alert import Alert, AlertTransition
from trafficmon.errors import ConfigurationError


class TrailingSum:
    __slots__ = ("_sums", "_cursor", "_total")

    def __init__(self, size: int):
        if size < 1:
            raise ConfigurationError(f"trailing window needs at least 1 segment, got {size}")
        self._sums = [0] * size
        self._cursor = 0
        self._total = 0

    def push(self, total: int) -> int:
        """Record one closed segment's total, return the new trailing sum."""
        size = len(self._sums)
        previous = self._sums[self._cursor % size]
        self._cursor += 1
        slot = self._cursor % size
        # Slot K pushes behind; evicted in the same step the new total lands.
        evicted = self._sums[slot]
        self._sums[slot] = previous + total
        self._total = self._sums[slot] - evicted
        return self._total

    @property
    def total(self) -> int:
        return self._total

    @property
    def pushes(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._sums)


class Span:
    """Segment/span geometry plus the alert evaluated over it."""

    def __init__(self, segment_seconds: int, span_seconds: int, threshold: float):
        if segment_seconds <= 0:
            raise ConfigurationError(
                f"segment_seconds must be positive, got {segment_seconds}"
            )
        segments = span_seconds // segment_seconds
        if segments < 1:
            raise ConfigurationError(
                f"span_seconds ({span_seconds}) must cover at least "
                f"one segment ({segment_seconds}s)"
            )
        self.segment_seconds = segment_seconds
        self.span_seconds = span_seconds
        self.segments = segments
        self.alert = Alert(threshold)
        self._ring = TrailingSum(segments)

    def update(self, total: int, timestamp: int) -> AlertTransition | None:
        """Push a closed segment's total and re-check the alert.

        The average divides by the configured segment count, not the number
        of segments seen so far, so it reads low until the span fills up.
        """
        self._ring.push(total)
        return self.alert.evaluate(self.average, timestamp)

    @property
    def total(self) -> int:
        return self._ring.total

    @property
    def average(self) -> float:
        return self._ring.total / self.segments
