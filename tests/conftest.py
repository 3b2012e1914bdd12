"""Shared fixtures for taglog tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from taglog.domain import Commit, Contact, Hash, Merge, Note, Revert, Tag
from taglog.infra import GitClient
from taglog.services.tag_reader import SEPARATOR

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def tag_line(name, subject="", tagger_date="", author_date="Mon Jan 1 12:00:00 2024 +0000"):
    """Build one line of `git for-each-ref` output."""
    return SEPARATOR.join([f"refs/tags/{name}", subject, tagger_date, author_date])


@pytest.fixture
def make_tag_line():
    return tag_line


@pytest.fixture
def make_commit():
    """Factory for Commit objects with sensible defaults."""
    counter = {'n': 0}

    def _make(header, body="", merge=False, revert=False, notes=(), scope="",
              type="", subject="", date=None):
        counter['n'] += 1
        n = counter['n']
        when = date or BASE_DATE.replace(minute=n % 60)
        contact = Contact("Jane Doe", "jane@example.com", when)
        return Commit(
            hash=Hash(long=f"{n:040x}", short=f"{n:07x}"),
            author=contact,
            committer=contact,
            header=header,
            body=body,
            type=type,
            scope=scope,
            subject=subject,
            merge=Merge(ref="feature", source="") if merge else None,
            revert=Revert(header=header) if revert else None,
            notes=tuple(Note(title=t, body=b) for t, b in notes),
        )

    return _make


@pytest.fixture
def make_tag():
    def _make(name, date=None, subject=""):
        return Tag(name=name, subject=subject, date=date or BASE_DATE)
    return _make


@pytest.fixture
def git_client():
    """GitClient mock; set exec.return_value / side_effect per test."""
    return MagicMock(spec=GitClient)
