"""Tests for the revision file key/value parser."""

import pytest

from src.revision_checker.revision_parser import (
    find_value,
    iter_assignments,
    parse_assignment,
    unquote,
)

KEY = "ARO_HCP_REPO_REVISION"


class TestParseAssignment:
    """Test single-line tokenization."""

    def test_double_quoted_value(self):
        """Test the canonical Revision.mk line."""
        assignment = parse_assignment('ARO_HCP_REPO_REVISION="526f70d3d81f"')

        assert assignment is not None
        assert assignment.key == KEY
        assert assignment.value == "526f70d3d81f"

    @pytest.mark.parametrize(
        "line",
        [
            "ARO_HCP_REPO_REVISION=526f70d3d81f",
            "ARO_HCP_REPO_REVISION = 526f70d3d81f",
            "ARO_HCP_REPO_REVISION\t=\t526f70d3d81f   ",
            "  ARO_HCP_REPO_REVISION   =    '526f70d3d81f'",
            'ARO_HCP_REPO_REVISION = "526f70d3d81f"  ',
        ],
    )
    def test_whitespace_and_quotes_are_stripped(self, line):
        """Test whitespace around '=' and one quote layer are removed."""
        assignment = parse_assignment(line)

        assert assignment is not None
        assert assignment.value == "526f70d3d81f"

    def test_only_one_quote_layer_is_stripped(self):
        """Test nested quotes keep the inner layer."""
        assignment = parse_assignment("KEY = \"'abc'\"")

        assert assignment.value == "'abc'"

    def test_mismatched_quotes_are_kept(self):
        """Test quotes are only stripped when they match."""
        assignment = parse_assignment("KEY = \"abc'")

        assert assignment.value == "\"abc'"

    def test_whitespace_inside_quotes_is_kept(self):
        assignment = parse_assignment('KEY = "  abc  "')

        assert assignment.value == "  abc  "

    def test_value_runs_to_end_of_line(self):
        """Test the value is everything after '=' on the line."""
        assignment = parse_assignment("KEY = abc def # note")

        assert assignment.value == "abc def # note"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "# ARO_HCP_REPO_REVISION=abc",
            "ARO_HCP_REPO_REVISION",
            "ARO_HCP_REPO_REVISION := abc",
            "ARO_HCP_REPO_REVISION ?= abc",
            "= abc",
        ],
    )
    def test_non_assignments(self, line):
        """Test lines that do not form an assignment."""
        assert parse_assignment(line) is None

    @pytest.mark.parametrize(
        "line", ["ARO_HCP_REPO_REVISION =", "ARO_HCP_REPO_REVISION =    "]
    )
    def test_assignment_without_value(self, line):
        """Test a bare "=" still assigns, with an empty value."""
        assignment = parse_assignment(line)

        assert assignment is not None
        assert assignment.value == ""

    def test_line_number_is_recorded(self):
        assignment = parse_assignment("KEY=1", line_number=7)

        assert assignment.line_number == 7


class TestUnquote:
    """Test unquote helper."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ('"abc"', "abc"),
            ("'abc'", "abc"),
            ("  abc  ", "abc"),
            ('""', ""),
            ('"', '"'),
            ("abc", "abc"),
        ],
    )
    def test_unquote(self, raw, expected):
        assert unquote(raw) == expected


class TestFindValue:
    """Test key lookup across a file."""

    def test_finds_key_among_other_lines(self):
        """Test the key is found in a realistic Makefile fragment."""
        content = (
            "# Generated by bump-revision\n"
            "OTHER_REVISION = deadbeef\n"
            'ARO_HCP_REPO_REVISION="526f70d3d81f"\n'
            "export ARO_HCP_REPO_REVISION\n"
        )

        assert find_value(content, KEY) == "526f70d3d81f"

    def test_first_match_wins(self):
        """Test the first assignment in document order is used."""
        content = "KEY = first\nKEY = second\n"

        assert find_value(content, "KEY") == "first"

    def test_key_must_match_exactly(self):
        """Test longer identifiers containing the key are ignored."""
        content = "MY_ARO_HCP_REPO_REVISION = wrong\nARO_HCP_REPO_REVISION_OLD = old\n"

        assert find_value(content, KEY) is None

    def test_missing_key(self):
        assert find_value("OTHER = value\n", KEY) is None

    def test_empty_quoted_value_counts_as_missing(self):
        assert find_value('ARO_HCP_REPO_REVISION=""\n', KEY) is None

    def test_empty_first_assignment_is_not_overridden(self):
        """Test a later assignment does not replace an empty first one."""
        content = 'ARO_HCP_REPO_REVISION=""\nARO_HCP_REPO_REVISION=later\n'

        assert find_value(content, KEY) is None

    def test_bare_first_assignment_is_not_overridden(self):
        content = "ARO_HCP_REPO_REVISION =\nARO_HCP_REPO_REVISION = later\n"

        assert find_value(content, KEY) is None

    def test_leading_byte_order_mark(self):
        """Test a BOM does not hide a key on the first line."""
        content = "\ufeffARO_HCP_REPO_REVISION=abc\n"

        assert find_value(content, KEY) == "abc"

    def test_crlf_line_endings(self):
        content = "A = 1\r\nARO_HCP_REPO_REVISION = abc123\r\n"

        assert find_value(content, KEY) == "abc123"

    def test_iter_assignments_preserves_order(self):
        content = "A = 1\n\n# comment\nB = 2\n"

        assignments = list(iter_assignments(content))

        assert [a.key for a in assignments] == ["A", "B"]
        assert [a.line_number for a in assignments] == [1, 4]
