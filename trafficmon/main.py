"""Traffic monitor: reads an access-log CSV stream, prints stats and alerts.

Every closed segment prints the busiest sections and the trailing total;
an alert line is printed whenever the trailing average crosses the
threshold in either direction.

Usage:
    tail -f access.csv | python -m trafficmon.main
    python -m trafficmon.main sample_csv.txt --threshold 10
    python -m trafficmon.main --config monitor.yml --skip-malformed
"""

import argparse
import signal
import sys

from trafficmon.config import MonitorConfig, load_config
from trafficmon.driver import ErrorPolicy, StreamDriver
from trafficmon.errors import MonitorError
from trafficmon.sinks import ConsoleSink
from trafficmon.span import Span


def _shutdown(sig, frame):
    """SIGINT and SIGTERM both interrupt the pending read."""
    raise KeyboardInterrupt


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="Access-log traffic monitor")
    parser.add_argument("logfile", nargs="?", help="CSV log file (default: stdin)")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--segment-seconds", type=int, help="stats window length")
    parser.add_argument("--span-seconds", type=int, help="alert averaging span")
    parser.add_argument("--threshold", type=float,
                        help="alert when average hits per segment exceed this")
    parser.add_argument("--top", type=int, dest="top_n", help="sections per stats line")
    parser.add_argument("--skip-malformed", action="store_true",
                        help="skip bad records instead of aborting")
    return parser.parse_args(argv)


def run(args, out=None, err=None) -> StreamDriver:
    config = load_config(args.config) if args.config else MonitorConfig()
    config = config.override(
        segment_seconds=args.segment_seconds,
        span_seconds=args.span_seconds,
        threshold=args.threshold,
        top_n=args.top_n,
        on_error=ErrorPolicy.SKIP.value if args.skip_malformed else None,
    )

    span = Span(config.segment_seconds, config.span_seconds, config.threshold)
    driver = StreamDriver(span, ConsoleSink(out, err), top_n=config.top_n,
                          on_error=config.error_policy)

    try:
        if args.logfile:
            with open(args.logfile) as f:
                driver.run(f)
        else:
            driver.run(sys.stdin)
    except KeyboardInterrupt:
        print("\nShutting down monitor...", file=err or sys.stderr)
        driver.finish()
    return driver


def main(argv=None) -> int:
    args = _parse_args(argv)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    try:
        driver = run(args)
    except (MonitorError, OSError) as e:
        print(f"Monitor error: {e}", file=sys.stderr)
        return 1

    summary = (f"Done. {driver.events_consumed} events consumed, "
               f"{driver.segments_closed} segments, {driver.alerts_emitted} alerts")
    if driver.records_skipped:
        summary += f", {driver.records_skipped} records skipped"
    print(summary + ".", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
