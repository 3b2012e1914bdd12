"""Tests for field path access and comparison."""

from datetime import datetime, timezone
from functools import cmp_to_key

import pytest

from taglog.domain import CommitGroup
from taglog.exit_codes import ComparisonError
from taglog.fields import SortKind, compare, dot_get, less_by_path, sort_kind


class TestDotGet:
    """Tests for dot_get()."""

    def test_attribute(self, make_commit):
        """Test resolving a top-level attribute."""
        commit = make_commit("feat: x", scope="core")
        assert dot_get(commit, "scope") == ("core", True)

    def test_capitalized_path(self, make_commit):
        """Test that Go-style capitalized names resolve."""
        commit = make_commit("feat: x", scope="core")
        assert dot_get(commit, "Scope") == ("core", True)

    def test_nested_path(self, make_commit):
        """Test descending into nested records."""
        commit = make_commit("feat: x")
        value, ok = dot_get(commit, "Author.Name")
        assert ok
        assert value == "Jane Doe"

    def test_camel_case_segment(self):
        """Test that RawTitle maps to raw_title."""
        group = CommitGroup(raw_title="feat", title="Feature")
        assert dot_get(group, "RawTitle") == ("feat", True)

    def test_dict_keys(self):
        """Test resolving through dictionaries."""
        assert dot_get({"a": {"b": 3}}, "a.b") == (3, True)

    def test_missing(self, make_commit):
        """Test that unknown paths are not found."""
        commit = make_commit("feat: x")
        assert dot_get(commit, "Nope") == (None, False)
        assert dot_get(commit, "Merge.Ref") == (None, False)

    def test_empty_path(self, make_commit):
        """Test that an empty path is not found."""
        assert dot_get(make_commit("x"), "") == (None, False)


class TestCompare:
    """Tests for compare() and sort_kind()."""

    def test_sort_kinds(self):
        """Test value classification."""
        assert sort_kind("a") == SortKind.STRING
        assert sort_kind(1) == SortKind.NUMBER
        assert sort_kind(1.5) == SortKind.NUMBER
        assert sort_kind(datetime.now(timezone.utc)) == SortKind.TIME
        assert sort_kind(True) is None
        assert sort_kind(None) is None

    def test_strings(self):
        """Test string ordering."""
        assert compare("a", "<", "b")
        assert not compare("b", "<", "a")

    def test_numbers(self):
        """Test numeric ordering across int and float."""
        assert compare(1, "<", 2.5)
        assert compare(3, ">=", 3)

    def test_times(self):
        """Test datetime ordering."""
        early = datetime(2020, 1, 1, tzinfo=timezone.utc)
        late = datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert compare(early, "<", late)

    def test_naive_and_aware_times(self):
        """Test that naive and aware datetimes fail as a ComparisonError."""
        with pytest.raises(ComparisonError):
            compare(datetime(2020, 1, 1), "<", datetime(2021, 1, 1, tzinfo=timezone.utc))

    def test_mismatched_kinds(self):
        """Test that comparing string with number fails."""
        with pytest.raises(ComparisonError):
            compare("1", "<", 2)

    def test_unsupported_kind(self):
        """Test that unorderable values fail."""
        with pytest.raises(ComparisonError):
            compare(None, "<", None)

    def test_unknown_operator(self):
        """Test that unknown operators fail."""
        with pytest.raises(ComparisonError):
            compare(1, "<>", 2)


class TestLessByPath:
    """Tests for less_by_path()."""

    def test_sorts_by_path(self, make_commit):
        """Test sorting records by a configured path."""
        commits = [make_commit("x", scope="b"), make_commit("y", scope="a")]
        ordered = sorted(commits, key=cmp_to_key(less_by_path("Scope")))
        assert [c.scope for c in ordered] == ["a", "b"]

    def test_unresolvable_keeps_order(self, make_commit):
        """Test that unresolvable paths leave input order untouched."""
        commits = [make_commit("x", scope="b"), make_commit("y", scope="a")]
        ordered = sorted(commits, key=cmp_to_key(less_by_path("Missing")))
        assert ordered == commits

    def test_naive_and_aware_times_keep_order(self):
        """Test that incomparable datetimes count as "not less"."""
        records = [
            {"date": datetime(2021, 1, 1, tzinfo=timezone.utc)},
            {"date": datetime(2020, 1, 1)},
        ]
        ordered = sorted(records, key=cmp_to_key(less_by_path("Date")))
        assert ordered == records
