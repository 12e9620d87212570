"""Unit tests for datetime fragment parsing, merging and formatting."""

from __future__ import annotations

from mfparser.extractors.datetimes import (
    DateTimeMerger,
    DateTimeParts,
    combine_parts,
    format_datetime,
    parse_datetime,
)
from mfparser.options import DateFormat

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParseDatetime:
    def test_full_iso(self):
        parts = parse_datetime("2009-06-26T19:00-08:00")
        assert (parts.date, parts.time, parts.tz) == ("2009-06-26", "19:00", "-08:00")

    def test_space_separated(self):
        parts = parse_datetime("2009-06-26 19:00:30")
        assert (parts.date, parts.time, parts.tz) == ("2009-06-26", "19:00:30", None)

    def test_date_only(self):
        parts = parse_datetime(" 2009-06-26 ")
        assert (parts.raw, parts.date, parts.time) == ("2009-06-26", "2009-06-26", None)

    def test_ordinal_date(self):
        assert parse_datetime("2012-160").date == "2012-160"

    def test_time_only_am_pm(self):
        parts = parse_datetime("7 pm")
        assert (parts.date, parts.time) == (None, "7pm")

    def test_timezone_only(self):
        parts = parse_datetime("-0800")
        assert (parts.date, parts.time, parts.tz) == (None, None, "-0800")

    def test_unrecognized_keeps_raw(self):
        parts = parse_datetime("sometime   soon")
        assert parts == DateTimeParts(raw="sometime soon")


def test_combine_parts_takes_first_of_each():
    parts = combine_parts([
        parse_datetime("2009-06-26"),
        parse_datetime("19:00"),
        parse_datetime("2010-01-01"),
        parse_datetime("Z"),
    ])
    assert (parts.date, parts.time, parts.tz) == ("2009-06-26", "19:00", "Z")
    assert parts.raw == "2009-06-26 19:00Z"


def test_combine_parts_without_date_or_time():
    parts = combine_parts([parse_datetime("a"), parse_datetime("b")])
    assert parts.raw == "ab"


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------

class TestDateTimeMerger:
    def test_time_completes_open_date(self):
        merger = DateTimeMerger()
        slot = merger.add("start", parse_datetime("2009-06-26"))
        assert merger.add("start", parse_datetime("19:00")) is None
        assert slot.parts.raw == "2009-06-26 19:00"

    def test_second_time_does_not_reuse_completed_slot(self):
        merger = DateTimeMerger()
        merger.add("start", parse_datetime("2009-06-26"))
        merger.add("start", parse_datetime("19:00"))
        extra = merger.add("start", parse_datetime("20:00"))
        assert extra is not None
        assert extra.parts.raw == "2009-06-26 20:00"

    def test_other_property_borrows_first_date(self):
        merger = DateTimeMerger()
        merger.add("start", parse_datetime("2009-06-26"))
        slot = merger.add("end", parse_datetime("21:30"))
        assert slot is not None
        assert slot.parts.raw == "2009-06-26 21:30"

    def test_time_without_any_date_stands_alone(self):
        merger = DateTimeMerger()
        slot = merger.add("start", parse_datetime("19:00"))
        assert slot is not None
        assert slot.parts.raw == "19:00"

    def test_full_value_not_merged(self):
        merger = DateTimeMerger()
        first = merger.add("start", parse_datetime("2009-06-26T10:00"))
        second = merger.add("start", parse_datetime("2009-06-27"))
        assert first is not None and second is not None
        assert first.parts.raw == "2009-06-26T10:00"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatDatetime:
    def test_raw_passthrough(self):
        parts = parse_datetime("2009-06-26 7pm")
        assert format_datetime(parts) == "2009-06-26 7pm"

    def test_normalized_twelve_hour(self):
        parts = parse_datetime("2009-06-26 7pm -0800")
        assert format_datetime(parts, DateFormat.NORMALIZED) == "2009-06-26T19:00-08:00"

    def test_normalized_midnight(self):
        parts = parse_datetime("2009-06-26 12am")
        assert format_datetime(parts, DateFormat.NORMALIZED) == "2009-06-26T00:00"

    def test_normalized_ordinal_date(self):
        assert format_datetime(parse_datetime("2012-160"), DateFormat.NORMALIZED) == "2012-06-08"

    def test_normalized_seconds_and_zulu(self):
        parts = parse_datetime("2024-01-15T10:00:00z")
        assert format_datetime(parts, DateFormat.NORMALIZED) == "2024-01-15T10:00:00Z"

    def test_normalized_time_only(self):
        assert format_datetime(parse_datetime("9:05am"), DateFormat.NORMALIZED) == "09:05"

    def test_normalized_free_text_date(self):
        parts = parse_datetime("June 26, 2009")
        assert format_datetime(parts, DateFormat.NORMALIZED) == "2009-06-26"
