"""Tests for commit timestamp normalization."""

from datetime import timedelta

import pytest

from src.revision_checker.errors import TimestampParseError
from src.revision_checker.timestamps import normalize_to_utc, parse_git_timestamp


class TestNormalizeToUtc:
    """Test UTC conversion of git %ci timestamps."""

    def test_negative_offset_is_converted(self):
        result = normalize_to_utc("2025-09-24 02:55:10 -0700")

        assert result == "2025-09-24 09:55:10 +0000"

    def test_positive_offset_crosses_midnight(self):
        """Test conversion moves the date back when needed."""
        result = normalize_to_utc("2025-01-01 01:30:00 +0200")

        assert result == "2024-12-31 23:30:00 +0000"

    def test_half_hour_offset(self):
        result = normalize_to_utc("2025-03-10 12:00:00 +0530")

        assert result == "2025-03-10 06:30:00 +0000"

    @pytest.mark.parametrize(
        "value",
        [
            "2025-09-24 09:55:10 +0000",
            "1999-12-31 23:59:59 +0000",
            "2024-02-29 00:00:00 +0000",
        ],
    )
    def test_idempotent_on_utc(self, value):
        """Test normalizing an already-UTC timestamp is a no-op."""
        assert normalize_to_utc(value) == value
        assert normalize_to_utc(normalize_to_utc(value)) == value

    def test_idempotent_after_conversion(self):
        once = normalize_to_utc("2025-09-24 02:55:10 -0700")

        assert normalize_to_utc(once) == once

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "2025-09-24",
            "2025-09-24 02:55:10",
            "2025-09-24T02:55:10 -0700",
            "2025-09-24 02:55:10 -07:00",
            "2025-09-24 02:55:10 Z",
            "2025-9-24 02:55:10 -0700",
            " 2025-09-24 02:55:10 -0700",
            "2025-09-24 02:55:10 -0700\n",
            "2025-13-24 02:55:10 -0700",
            "2025-09-24 25:00:00 -0700",
            "2025-09-24 02:55:10 +2400",
        ],
    )
    def test_malformed_timestamps(self, value):
        """Test anything outside the exact layout is rejected."""
        with pytest.raises(TimestampParseError) as exc_info:
            normalize_to_utc(value)

        assert exc_info.value.value == value


class TestParseGitTimestamp:
    """Test parsing into aware datetimes."""

    def test_offset_is_preserved(self):
        parsed = parse_git_timestamp("2025-09-24 02:55:10 -0700")

        assert parsed.utcoffset() == timedelta(hours=-7)
        assert (parsed.hour, parsed.minute, parsed.second) == (2, 55, 10)
