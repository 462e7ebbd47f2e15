"""Report sinks: where the driver sends per-segment stats and alert changes.

The driver never prints.  It hands Report / AlertTransition values to a sink;
ConsoleSink renders them as single text lines.  Tests pass their own sink
that just collects the values.
"""

import sys
from typing import Protocol, TextIO

from trafficmon.alert import AlertTransition
from trafficmon.errors import RecordParseError


class ReportSink(Protocol):

    def report(self, report) -> None:
        ...

    def alert(self, transition: AlertTransition) -> None:
        ...

    def skipped(self, lineno: int, error: RecordParseError) -> None:
        ...


def format_report(report) -> str:
    top = ", ".join(f"{section}:{count}" for section, count in report.top_sections)
    return (f"STATS  window={report.window_seconds}s  top=[{top}]  "
            f"total={report.total}  trailing={report.trailing_total}")


def format_alert(transition: AlertTransition) -> str:
    return f"ALERT  hits={transition.value:.2f}  {transition.state} at {transition.at}"


class ConsoleSink:

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None):
        self._out = out or sys.stdout
        self._err = err or sys.stderr

    def report(self, report) -> None:
        print(format_report(report), file=self._out)

    def alert(self, transition: AlertTransition) -> None:
        print(format_alert(transition), file=self._out)

    def skipped(self, lineno: int, error: RecordParseError) -> None:
        print(f"WARN   skipping record at line {lineno}: {error.args[0]}", file=self._err)
