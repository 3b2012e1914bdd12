"""End-to-end tests for the ChangeLogger API with a fake git."""

import pytest

from taglog import ChangeLogger
from taglog.exit_codes import NoTagsError, TagNotFoundError, VersionNotFoundError
from taglog.services.commit_parser import FIELD_SEPARATOR, RECORD_SEPARATOR
from taglog.services.tag_reader import SEPARATOR


def tag_line(name):
    return SEPARATOR.join([f"refs/tags/{name}", f"Release {name}", "",
                           "Mon Jan 1 12:00:00 2024 +0000"])


def log_record(n, header, body=""):
    fields = [f"{n:040x}", f"{n:07x}", "Jane", "jane@example.com", str(1700000000 + n),
              "Jane", "jane@example.com", str(1700000000 + n), header, body]
    return RECORD_SEPARATOR + FIELD_SEPARATOR.join(fields)


class FakeGit:
    """Answers for-each-ref and log calls from canned output."""

    def __init__(self, tags, logs):
        self.tags = tags
        self.logs = logs
        self.calls = []

    def exec(self, *args):
        self.calls.append(args)
        if args[0] == "for-each-ref":
            return "\n".join(tag_line(t) for t in self.tags)
        if args[0] == "log":
            return "\n".join(self.logs.get(args[1], []))
        raise AssertionError(f"unexpected git call: {args}")


@pytest.fixture
def fake_git():
    return FakeGit(
        tags=["v1.0.0", "v1.10.0", "v1.2.0"],
        logs={
            "v1.2.0..v1.10.0": [
                log_record(1, "feat(api): new endpoint (feat)",
                           "BREAKING CHANGE: removed v0 routes"),
            ],
            "v1.0.0..v1.2.0": [
                log_record(2, "fix(core): x (fix)"),
                log_record(3, "Merge branch 'feature/y' (feat)"),
                log_record(4, 'Revert "feat: z"'),
                log_record(5, "docs: readme"),
            ],
            "v1.0.0": [log_record(6, "feat: initial (feat)")],
        },
    )


def changelogger(fake_git, **options):
    return ChangeLogger(config={"options": options}, git_client=fake_git)


class TestChangeLogger:
    """End-to-end scenarios."""

    def test_tag_order(self, fake_git):
        """Test natural descending order of tags."""
        names = [t.name for t in changelogger(fake_git).tags()]
        assert names == ["v1.10.0", "v1.2.0", "v1.0.0"]

    def test_full_changelog(self, fake_git):
        """Test grouping, merges, reverts and notes across versions."""
        versions = changelogger(fake_git, commit_group_by="feat.fix").get_changelog()

        assert [v.tag.name for v in versions] == ["v1.10.0", "v1.2.0", "v1.0.0"]

        newest = versions[0]
        assert [g.title for g in newest.commit_groups] == ["Feature"]
        assert [g.title for g in newest.note_groups] == ["BREAKING CHANGE"]
        assert newest.note_groups[0].notes[0].body == "removed v0 routes"

        middle = versions[1]
        assert [(g.raw_title, g.title) for g in middle.commit_groups] == [("fix", "Bugfix")]
        assert [c.header for c in middle.merge_commits] == ["Merge branch 'feature/y' (feat)"]
        assert [c.header for c in middle.revert_commits] == ['Revert "feat: z"']
        assert len(middle.commits) == 4

        assert versions[2].tag.previous is None
        assert versions[2].tag.next.name == "v1.2.0"

    def test_version_changelog(self, fake_git):
        """Test the newest selected version."""
        version = changelogger(fake_git).get_version_changelog("v1.2.0")
        assert version.tag.name == "v1.2.0"
        assert ("log", "v1.0.0..v1.2.0") == fake_git.calls[-1][:2]

    def test_tag_filter(self, fake_git):
        """Test the configured tag name filter."""
        fake_git.tags.append("nightly")
        names = [t.name for t in changelogger(fake_git, tag_filter_pattern=r"^v").tags()]
        assert "nightly" not in names

    def test_no_tags(self):
        """Test the no-tags error."""
        with pytest.raises(NoTagsError):
            changelogger(FakeGit(tags=[], logs={})).get_changelog()

    def test_selector_miss(self, fake_git):
        """Test that an unknown query fails without partial results."""
        with pytest.raises(TagNotFoundError):
            changelogger(fake_git).get_changelog("v3.0.0")
        assert all(call[0] == "for-each-ref" for call in fake_git.calls)

    def test_version_not_found_is_a_taglog_error(self):
        """Test the version-not-found message."""
        assert "v9" in str(VersionNotFoundError("v9"))
