"""Level-triggered threshold alert.

Fires once when the trailing average goes above the threshold and once more
when it drops back to (or below) it.  Repeated evaluations on the same side
of the threshold are silent.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class AlertTransition:
    triggered: bool
    value: float
    timestamp: int

    @property
    def state(self) -> str:
        return "triggered" if self.triggered else "reset"

    @property
    def at(self) -> str:
        """RFC-3339 rendering of the timestamp, always UTC."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).isoformat()


class Alert:

    def __init__(self, threshold: float, triggered: bool = False):
        self.threshold = threshold
        self.triggered = triggered

    def evaluate(self, average: float, timestamp: int) -> AlertTransition | None:
        state = average > self.threshold
        if state == self.triggered:
            return None
        self.triggered = state
        return AlertTransition(triggered=state, value=average, timestamp=timestamp)
