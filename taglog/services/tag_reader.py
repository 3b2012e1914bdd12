"""
Tag reader service for taglog.

Reads every tag of a repository in one `git for-each-ref` call, sorts the
tags by the natural order of their names (newest first) and links each tag
to its neighbours.
"""

import logging
import re
from datetime import datetime
from typing import List, Optional

from ..domain import Tag
from ..exit_codes import DateParseError
from ..infra import GitClient
from ..ordinal import version_ordinal

logger = logging.getLogger(__name__)

SEPARATOR = "@@__CHGLOG__@@"
REF_PREFIX = "refs/tags/"
# git's default date format, e.g. "Mon Jan 2 15:04:05 2006 -0700"
GIT_DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"


def parse_git_date(value: str) -> datetime:
    """Parse a date in git's default format into an aware datetime."""
    return datetime.strptime(value.strip(), GIT_DATE_FORMAT)


class TagReader:
    """
    Reads and orders the tags of a repository.

    Example:
        reader = TagReader(GitClient("/path/to/repo"), filter_pattern=r"^v")
        for tag in reader.read_all():
            print(tag.name, tag.previous.name if tag.previous else "-")
    """

    def __init__(self, git_client: GitClient, filter_pattern: str = ""):
        """
        Initialize TagReader.

        Args:
            git_client: Client used to run git
            filter_pattern: Regex; tags whose name does not match are dropped
        """
        self.git = git_client
        self.filter = re.compile(filter_pattern) if filter_pattern else None

    def read_all(self) -> List[Tag]:
        """
        Read all tags, newest first by natural name order.

        Returns:
            Tags with previous/next snapshots assigned (possibly empty)

        Raises:
            GitCommandError: If git fails
            DateParseError: If a tag has neither a valid tagger nor author date
        """
        out = self.git.exec(
            "for-each-ref",
            "--format",
            SEPARATOR.join(["%(refname)", "%(subject)", "%(taggerdate)", "%(authordate)"]),
            "refs/tags",
        )

        tags = []
        for line in out.split("\n"):
            tag = self._parse_line(line)
            if tag is None:
                continue
            if self.filter is not None and not self.filter.search(tag.name):
                logger.debug(f"Skipping tag {tag.name}: does not match filter")
                continue
            tags.append(tag)

        tags = self.sort_tags(tags)
        self.assign_previous_and_next(tags)

        logger.debug(f"Read {len(tags)} tags")
        return tags

    def _parse_line(self, line: str) -> Optional[Tag]:
        tokens = line.split(SEPARATOR)
        if len(tokens) != 4:
            return None

        refname, subject, tagger_date, author_date = tokens
        name = refname.replace(REF_PREFIX, "", 1)

        try:
            date = parse_git_date(tagger_date)
        except ValueError:
            try:
                date = parse_git_date(author_date)
            except ValueError as e:
                raise DateParseError(
                    f"failed to parse date of tag {name}: {author_date!r}"
                ) from e

        return Tag(name=name, subject=subject.strip(), date=date)

    @staticmethod
    def sort_tags(tags: List[Tag]) -> List[Tag]:
        """Sort tags by descending natural order of their names."""
        return sorted(tags, key=lambda t: version_ordinal(t.name), reverse=True)

    @staticmethod
    def assign_previous_and_next(tags: List[Tag]) -> None:
        """
        Link each tag to its neighbours in list order.

        next is the tag before it (newer), previous the tag after it (older).
        """
        total = len(tags)
        for i, tag in enumerate(tags):
            tag.next = tags[i - 1].snapshot() if i > 0 else None
            tag.previous = tags[i + 1].snapshot() if i + 1 < total else None
