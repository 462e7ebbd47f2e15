"""Error taxonomy for the monitor.

Every error is terminal for a run unless the driver is configured to skip
malformed records.  I/O errors from the input stream are not wrapped; they
propagate as whatever the stream raised.
"""


class MonitorError(Exception):
    """Base class for errors raised by the monitor itself."""


class ConfigurationError(MonitorError, ValueError):
    """Invalid segment/span/threshold settings, raised once at start-up."""


class RecordParseError(MonitorError, ValueError):
    """A log line that cannot be turned into an Entry."""

    def __init__(self, message: str, lineno: int | None = None):
        super().__init__(message)
        self.lineno = lineno

    def __str__(self):
        msg = super().__str__()
        if self.lineno is not None:
            return f"line {self.lineno}: {msg}"
        return msg
