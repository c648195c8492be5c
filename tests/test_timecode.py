"""Unit tests for the lax time-code grammar.

WHY: Every component reads times through this module. A wrong group
order or a rounding slip shifts every highlight in a song.

HOW: Parse one-, two- and three-group values, confirm the lax
acceptance of out-of-range components, the rejection of non-times,
marker parsing and HH:MM:SS.mmm formatting.

RULES:
- parse_time raises FormatError; parse_marker returns None instead
"""

import pytest

from vtt_karaoke.core.timecode import FormatError, format_time, parse_marker, parse_time


class TestParseTime:
    """parse_time() reads one to three colon-delimited groups."""

    def test_full_form(self):
        assert parse_time("01:02:03.500") == pytest.approx(3723.5)

    def test_minutes_and_seconds(self):
        assert parse_time("02:03.250") == pytest.approx(123.25)

    def test_seconds_only(self):
        assert parse_time("7.5") == pytest.approx(7.5)

    def test_fraction_optional(self):
        assert parse_time("00:00:04") == pytest.approx(4.0)

    def test_leading_dot_fraction(self):
        assert parse_time(".5") == pytest.approx(0.5)

    def test_wide_hours(self):
        assert parse_time("100:00:00.000") == pytest.approx(360000.0)

    def test_no_range_checks(self):
        """'75.000' seconds is accepted literally."""
        assert parse_time("00:75.000") == pytest.approx(75.0)
        assert parse_time("00:61:00.000") == pytest.approx(3660.0)

    @pytest.mark.parametrize("text", ["", "abc", "1:2:3:4", "1.2.3", ":30", "1:", "."])
    def test_rejects_non_times(self, text):
        with pytest.raises(FormatError):
            parse_time(text)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_time("nope")


class TestParseMarker:
    """parse_marker() reads ``<time>`` tags and ignores everything else."""

    def test_full_marker(self):
        assert parse_marker("<00:00:01.000>") == pytest.approx(1.0)

    def test_short_marker(self):
        assert parse_marker("<1:30>") == pytest.approx(90.0)

    def test_seconds_marker(self):
        assert parse_marker("<2.5>") == pytest.approx(2.5)

    @pytest.mark.parametrize("tag", ["<i>", "</i>", "<c.red>", "<>", "<.>", "<00:01.000", "<v Singer>"])
    def test_other_markup(self, tag):
        assert parse_marker(tag) is None


class TestFormatTime:
    """format_time() always emits HH:MM:SS.mmm."""

    def test_zero(self):
        assert format_time(0) == "00:00:00.000"

    def test_components(self):
        assert format_time(3723.5) == "01:02:03.500"

    def test_rounds_to_millisecond(self):
        assert format_time(6 / 7) == "00:00:00.857"

    @pytest.mark.parametrize("seconds, expected", [
        (0.0625, "00:00:00.063"),
        (0.0005, "00:00:00.001"),
        (2.5e-4, "00:00:00.000"),
    ])
    def test_half_millisecond_rounds_up(self, seconds, expected):
        assert format_time(seconds) == expected

    def test_rounding_carries(self):
        """59.9996 rounds up into the next minute, never to '60.000'."""
        assert format_time(59.9996) == "00:01:00.000"

    def test_wide_hours(self):
        assert format_time(360000) == "100:00:00.000"

    def test_negative_rejected(self):
        with pytest.raises(FormatError):
            format_time(-0.5)

    def test_parse_format_agree(self):
        assert format_time(parse_time("12:34:56.789")) == "12:34:56.789"
