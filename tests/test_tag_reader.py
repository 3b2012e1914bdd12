"""Tests for the tag reader service."""

from datetime import datetime, timedelta, timezone

import pytest

from taglog.exit_codes import DateParseError, GitCommandError
from taglog.services.tag_reader import SEPARATOR, TagReader, parse_git_date


class TestParseGitDate:
    """Tests for parse_git_date()."""

    def test_default_format(self):
        """Test parsing git's default date format."""
        date = parse_git_date("Mon Jan 2 15:04:05 2006 -0700")
        assert date == datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=-7)))

    def test_invalid(self):
        """Test that other formats are rejected."""
        with pytest.raises(ValueError):
            parse_git_date("2006-01-02")


class TestTagReader:
    """Tests for TagReader.read_all()."""

    def test_runs_for_each_ref(self, git_client):
        """Test the git invocation."""
        git_client.exec.return_value = ""
        TagReader(git_client).read_all()

        args = git_client.exec.call_args[0]
        assert args[0] == "for-each-ref"
        assert args[-1] == "refs/tags"
        assert SEPARATOR in args[2]

    def test_natural_descending_order(self, git_client, make_tag_line):
        """Test that tags are sorted newest first by name."""
        git_client.exec.return_value = "\n".join([
            make_tag_line("v1.0.0"),
            make_tag_line("v1.10.0"),
            make_tag_line("v1.2.0"),
        ])
        tags = TagReader(git_client).read_all()
        assert [t.name for t in tags] == ["v1.10.0", "v1.2.0", "v1.0.0"]

    def test_name_order_not_date_order(self, git_client, make_tag_line):
        """Test that ordering follows names even when dates disagree."""
        git_client.exec.return_value = "\n".join([
            make_tag_line("v2.0.0", author_date="Mon Jan 1 12:00:00 2020 +0000"),
            make_tag_line("v1.0.0", author_date="Mon Jan 1 12:00:00 2024 +0000"),
        ])
        tags = TagReader(git_client).read_all()
        assert [t.name for t in tags] == ["v2.0.0", "v1.0.0"]

    def test_neighbours(self, git_client, make_tag_line):
        """Test previous/next snapshots follow list order."""
        git_client.exec.return_value = "\n".join([
            make_tag_line("v1"), make_tag_line("v3"), make_tag_line("v2"),
        ])
        tags = TagReader(git_client).read_all()

        assert tags[0].next is None
        assert tags[0].previous.name == "v2"
        assert tags[1].next.name == "v3"
        assert tags[1].previous.name == "v1"
        assert tags[2].next.name == "v2"
        assert tags[2].previous is None

    def test_neighbours_are_snapshots(self, git_client, make_tag_line):
        """Test that neighbour links do not alias other tags."""
        git_client.exec.return_value = "\n".join([make_tag_line("v1"), make_tag_line("v2")])
        tags = TagReader(git_client).read_all()

        tags[0].subject = "changed"
        assert tags[1].next.subject == ""

    def test_fields(self, git_client, make_tag_line):
        """Test name prefix stripping, subject trimming and tagger date."""
        git_client.exec.return_value = make_tag_line(
            "v1.0.0",
            subject="  Release 1.0  ",
            tagger_date="Tue Feb 6 10:00:00 2024 +0100",
            author_date="Mon Jan 1 12:00:00 2024 +0000",
        )
        tag = TagReader(git_client).read_all()[0]

        assert tag.name == "v1.0.0"
        assert tag.subject == "Release 1.0"
        assert tag.date == datetime(2024, 2, 6, 10, 0, tzinfo=timezone(timedelta(hours=1)))

    def test_author_date_fallback(self, git_client, make_tag_line):
        """Test that lightweight tags use the author date."""
        git_client.exec.return_value = make_tag_line(
            "v1", tagger_date="", author_date="Mon Jan 1 12:00:00 2024 +0000"
        )
        tag = TagReader(git_client).read_all()[0]
        assert tag.date == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_both_dates_invalid(self, git_client, make_tag_line):
        """Test that a tag with no parseable date fails the read."""
        git_client.exec.return_value = make_tag_line("v1", tagger_date="", author_date="bogus")
        with pytest.raises(DateParseError):
            TagReader(git_client).read_all()

    def test_malformed_lines_skipped(self, git_client, make_tag_line):
        """Test that lines without four fields are ignored."""
        git_client.exec.return_value = "\n".join([
            make_tag_line("v1"),
            "garbage",
            "refs/tags/v2" + SEPARATOR + "only two",
            "",
        ])
        tags = TagReader(git_client).read_all()
        assert [t.name for t in tags] == ["v1"]

    def test_filter_pattern(self, git_client, make_tag_line):
        """Test that non-matching tag names are dropped."""
        git_client.exec.return_value = "\n".join([
            make_tag_line("v1.0.0"), make_tag_line("nightly-5"), make_tag_line("v2.0.0"),
        ])
        tags = TagReader(git_client, filter_pattern=r"^v").read_all()

        assert [t.name for t in tags] == ["v2.0.0", "v1.0.0"]
        assert tags[1].next.name == "v2.0.0"

    def test_no_tags(self, git_client):
        """Test that an empty repository yields an empty list."""
        git_client.exec.return_value = ""
        assert TagReader(git_client).read_all() == []

    def test_command_failure(self, git_client):
        """Test that git failures propagate."""
        git_client.exec.side_effect = GitCommandError("boom", ("for-each-ref",))
        with pytest.raises(GitCommandError):
            TagReader(git_client).read_all()
