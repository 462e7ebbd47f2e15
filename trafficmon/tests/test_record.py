"""Tests for record parsing: field count, timestamps, request lines, paths."""

import pytest

from trafficmon.errors import RecordParseError
from trafficmon.record import Entry, parse_fields, parse_line

_LINE = '"10.0.0.2","-","apache",1549573860,"GET /api/user HTTP/1.0",200,1234'


def _fields(ts="1549573860", request="GET /api/user HTTP/1.0"):
    return ["10.0.0.2", "-", "apache", ts, request, "200", "1234"]


class TestParseLine:
    def test_quoted_csv_line(self):
        assert parse_line(_LINE) == Entry(
            timestamp=1549573860, method="GET", path="/api/user", section="api",
        )

    def test_section_is_first_path_component(self):
        line = '"10.0.0.2","-","apache",1549573860,"POST /report/daily/x HTTP/1.1",201,12'
        entry = parse_line(line)
        assert entry.section == "report"
        assert entry.method == "POST"

    def test_single_component_path(self):
        line = '"10.0.0.2","-","apache",1549573860,"GET /report HTTP/1.0",200,1194'
        assert parse_line(line).section == "report"

    def test_missing_http_version_is_rejected(self):
        line = '"10.0.0.2","-","apache",1549573860,"GET /api/user",200,1234'
        with pytest.raises(RecordParseError, match="malformed request data"):
            parse_line(line)

    def test_header_line_is_not_a_record(self):
        header = '"remotehost","rfc931","authuser","date","request","status","bytes"'
        with pytest.raises(RecordParseError, match="invalid timestamp"):
            parse_line(header)


class TestParseFields:
    def test_default(self):
        entry = parse_fields(_fields())
        assert entry.timestamp == 1549573860
        assert entry.path == "/api/user"

    def test_empty_fields(self):
        with pytest.raises(RecordParseError, match="expected 7 fields"):
            parse_fields([])

    def test_too_many_fields(self):
        with pytest.raises(RecordParseError, match="expected 7 fields"):
            parse_fields(_fields() + ["extra"])

    def test_malformed_timestamp(self):
        with pytest.raises(RecordParseError, match="154957x860"):
            parse_fields(_fields(ts="154957x860"))

    def test_fractional_timestamp_is_rejected(self):
        with pytest.raises(RecordParseError, match="invalid timestamp"):
            parse_fields(_fields(ts="1549573860.5"))

    def test_malformed_request_path(self):
        with pytest.raises(RecordParseError, match="malformed request path: x"):
            parse_fields(_fields(request="GET x HTTP/1.0"))

    @pytest.mark.parametrize("ts", ["1_549_573_860", " 1549573860", "1549573860 ",
                                    "+1549573860", "١٥٤٩", ""])
    def test_timestamp_must_be_plain_decimal(self, ts):
        with pytest.raises(RecordParseError, match="invalid timestamp"):
            parse_fields(_fields(ts=ts))

    def test_negative_timestamp_is_accepted(self):
        assert parse_fields(_fields(ts="-60")).timestamp == -60

    @pytest.mark.parametrize("ts", ["1000000000000", str(10 ** 20), str(-(10 ** 20))])
    def test_timestamp_out_of_calendar_range(self, ts):
        with pytest.raises(RecordParseError, match="timestamp out of range"):
            parse_fields(_fields(ts=ts))

    def test_error_message_carries_line_number(self):
        err = RecordParseError("malformed request data: GET /", lineno=7)
        assert str(err) == "line 7: malformed request data: GET /"
