"""Tests for the runner module."""

import logging

import pytest
from kvsplit.core.errors import RunError
from kvsplit.core.models import PatternSpec
from kvsplit.core.runner import multi_split, run, split_pair


class TestMultiSplit:
    """Tests for splitting on several separators."""

    def test_multiple_separators(self):
        """Test splitting on every separator in the list."""
        parts = multi_split("this=is;a=test for:seperators", [" ", ";"])
        assert parts == ["this=is", "a=test", "for:seperators"]

    def test_keeps_empty_parts(self):
        """Test adjacent separators produce empty parts."""
        assert multi_split("a  b", [" "]) == ["a", "", "b"]

    def test_no_separator_present(self):
        """Test text without separators comes back whole."""
        assert multi_split("abc", [","]) == ["abc"]


class TestSplitPair:
    """Tests for splitting a field into key and value."""

    def test_first_occurrence(self):
        """Test only the first separator splits the field."""
        assert split_pair("k=a=b", ["="]) == ("k", "a=b")

    def test_no_separator(self):
        """Test a field without a separator yields None."""
        assert split_pair("bogus", ["="]) is None

    def test_leftmost_separator_wins(self):
        """Test the earliest of several separators is used."""
        assert split_pair("a:b=c", ["=", ":"]) == ("a", "b=c")

    def test_empty_key_and_value(self):
        """Test a bare separator yields an empty key and value."""
        assert split_pair("=", ["="]) == ("", "")


class TestRun:
    """Tests for run()."""

    def test_simple_split(self, eq_pattern):
        """Test splitting a line of space separated pairs."""
        assert run(eq_pattern, "this=is a=test") == {"this": "is", "a": "test"}

    def test_only_separators(self, eq_pattern):
        """Test a line of only field separators yields no pairs."""
        assert run(eq_pattern, "    ") == {}

    def test_adjacent_and_edge_separators(self, eq_pattern):
        """Test leading, trailing and repeated separators are ignored."""
        assert run(eq_pattern, "  a=1   b=2  ") == {"a": "1", "b": "2"}

    def test_no_pairs_is_empty_mapping(self, eq_pattern):
        """Test a line without value separators yields an empty mapping."""
        assert run(eq_pattern, "this is a test") == {}

    def test_duplicate_key_keeps_first_position(self, eq_pattern):
        """Test a repeated key keeps its position but takes the last value."""
        result = run(eq_pattern, "a=1 b=2 a=3")
        assert result == {"a": "3", "b": "2"}
        assert list(result) == ["a", "b"]

    def test_empty_key_kept(self, eq_pattern):
        """Test a pair with an empty key is kept."""
        assert run(eq_pattern, "=x") == {"": "x"}

    def test_empty_value_kept(self, eq_pattern):
        """Test a pair with an empty value is kept."""
        assert run(eq_pattern, "x=") == {"x": ""}

    def test_multiple_field_separators(self):
        """Test a pattern with several field and value separators."""
        pattern = PatternSpec(field_separators=[" ", ";"], value_separators=["=", ":"])
        result = run(pattern, "this=is;a=test for:seperators")
        assert result == {"this": "is", "a": "test", "for": "seperators"}

    def test_input_is_not_mutated(self, eq_pattern):
        """Test the input line is left untouched."""
        line = "a=1 b=2"
        run(eq_pattern, line)
        assert line == "a=1 b=2"

    def test_result_is_fresh_per_call(self, eq_pattern):
        """Test each call returns a new mapping."""
        first = run(eq_pattern, "a=1")
        first["b"] = "2"
        assert run(eq_pattern, "a=1") == {"a": "1"}

    def test_skipped_field_logged(self, eq_pattern, caplog):
        """Test skipped fields are logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="kvsplit.core.runner"):
            run(eq_pattern, "a=1 bogus")
        assert "bogus" in caplog.text


class TestTrimPolicy:
    """Tests for whitespace trimming of keys and values."""

    def test_no_trim_by_default(self):
        """Test keys and values are exact slices by default."""
        pattern = PatternSpec(field_separators=";", value_separators="=")
        assert run(pattern, " a = 1 ; b=2") == {" a ": " 1 ", " b": "2"}

    def test_trim_enabled(self):
        """Test trim strips spaces around keys and values."""
        pattern = PatternSpec(field_separators=";", value_separators="=", trim=True)
        assert run(pattern, " a = 1 ; b=2") == {"a": "1", "b": "2"}

    def test_trim_strips_tabs_and_newlines(self):
        """Test trim strips all whitespace, not only spaces."""
        pattern = PatternSpec(field_separators=";", value_separators="=", trim=True)
        assert run(pattern, "\ta=\t1\n") == {"a": "1"}


class TestRunErrors:
    """Tests for corrupted patterns reaching run()."""

    def test_no_field_separators(self):
        """Test a pattern without field separators raises RunError."""
        pattern = PatternSpec.model_construct(
            field_separators=(), value_separators=("=",), trim=False
        )
        with pytest.raises(RunError, match="no field separators"):
            run(pattern, "a=1")

    def test_empty_value_separator(self):
        """Test a pattern with an empty value separator raises RunError."""
        pattern = PatternSpec.model_construct(
            field_separators=(" ",), value_separators=("",), trim=False
        )
        with pytest.raises(RunError, match="empty value separator"):
            run(pattern, "a=1")

    def test_empty_input_still_checks_pattern(self):
        """Test the pattern is checked even when the line is empty."""
        pattern = PatternSpec.model_construct(
            field_separators=("",), value_separators=("=",), trim=False
        )
        with pytest.raises(RunError):
            run(pattern, "")
