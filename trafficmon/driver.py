"""Stream driver: turns an ordered event stream into segment reports and alerts.

Pure windowing logic, no I/O of its own.  Lines (or parsed entries) are fed
in arrival order; closed segments and alert changes go to the sink.

State: one current Segment (or None before the first event) + one Span.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from trafficmon.errors import RecordParseError
from trafficmon.record import Entry, parse_line
from trafficmon.segment import Segment
from trafficmon.sinks import ReportSink
from trafficmon.span import Span

DEFAULT_TOP_N = 3


class ErrorPolicy(Enum):
    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class Report:
    start: int
    window_seconds: int
    top_sections: tuple[tuple[str, int], ...]
    total: int
    trailing_total: int


class StreamDriver:

    def __init__(self, span: Span, sink: ReportSink, top_n: int = DEFAULT_TOP_N,
                 on_error: ErrorPolicy = ErrorPolicy.ABORT):
        self.span = span
        self.sink = sink
        self.top_n = top_n
        self.on_error = on_error

        self._segment: Segment | None = None
        self._last_ts: int | None = None

        self.events_consumed = 0
        self.segments_closed = 0
        self.alerts_emitted = 0
        self.records_skipped = 0

    def feed(self, entry: Entry) -> None:
        """Consume one event.

        If the event lands more than one segment duration after the current
        segment's start, that segment is closed first.  A long silence still
        closes only one segment; nothing is synthesized for the gap.
        """
        seg = self._segment
        if seg is not None and not seg.contains(entry.timestamp, self.span.segment_seconds):
            self._close(seg, entry.timestamp)
            seg = None
        if seg is None:
            seg = self._segment = Segment(entry.timestamp)

        seg.add(entry.section)
        self._last_ts = entry.timestamp
        self.events_consumed += 1

    def finish(self) -> None:
        """End of stream: close and report the in-flight segment, if any."""
        if self._segment is not None:
            self._close(self._segment, self._last_ts)
            self._segment = None

    def run(self, lines: Iterable[str]) -> None:
        """Drive a whole stream of raw CSV lines.

        The first line is a header and is skipped without looking at it.
        Every other line is a record, blank ones included.  Under
        ErrorPolicy.ABORT a malformed record raises and the in-flight segment
        is dropped unreported.
        """
        for lineno, line in enumerate(lines, start=1):
            if lineno == 1:
                continue
            line = line.rstrip("\r\n")
            try:
                entry = parse_line(line)
            except RecordParseError as e:
                e.lineno = lineno
                if self.on_error is ErrorPolicy.ABORT:
                    raise
                self.records_skipped += 1
                self.sink.skipped(lineno, e)
                continue
            self.feed(entry)
        self.finish()

    def _close(self, seg: Segment, timestamp: int) -> None:
        transition = self.span.update(seg.total, timestamp)
        self.segments_closed += 1
        if transition is not None:
            self.alerts_emitted += 1
            self.sink.alert(transition)
        self.sink.report(Report(
            start=seg.start,
            window_seconds=self.span.segment_seconds,
            top_sections=tuple(seg.top_sections(self.top_n)),
            total=seg.total,
            trailing_total=self.span.total,
        ))
