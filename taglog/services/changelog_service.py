"""
Changelog service for taglog.

Orchestrates tag reading, tag selection, commit parsing and extraction
into a list of Version records, one per selected tag, newest first.

Each tag's revision range runs from the next-older selected tag:

    tags:   v1.2.0   v1.1.0   v1.0.0
    ranges: v1.1.0..v1.2.0   v1.0.0..v1.1.0   v1.0.0

The oldest selected tag uses the selector's boundary when there is one.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

from ..domain import Tag, Version
from ..exit_codes import NoTagsError, VersionNotFoundError
from .commit_extractor import CommitExtractor
from .commit_parser import CommitParser
from .tag_reader import TagReader
from .tag_selector import TagSelector

logger = logging.getLogger(__name__)


def revision_range(tags: List[Tag], index: int, first: str = "") -> str:
    """
    Revision range for the tag at `index` in a newest-first list.

    Args:
        tags: Selected tags, newest first
        index: Position of the tag
        first: Boundary below the oldest selected tag ("" for history start)
    """
    tag = tags[index]
    if index + 1 < len(tags):
        return f"{tags[index + 1].name}..{tag.name}"
    if first:
        return f"{first}..{tag.name}"
    return tag.name


class ChangelogService:
    """
    Builds structured changelogs from tag and commit history.

    Example:
        service = ChangelogService(reader, selector, parser, extractor)
        for version in service.get_changelog("v1.0.0.."):
            print(version.tag.name, len(version.commits))
    """

    def __init__(
        self,
        tag_reader: TagReader,
        tag_selector: TagSelector,
        commit_parser: CommitParser,
        commit_extractor: CommitExtractor,
        workers: int = 1
    ):
        """
        Initialize ChangelogService.

        Args:
            tag_reader: Source of tags
            tag_selector: Narrows tags by query
            commit_parser: Parses commits of a revision range
            commit_extractor: Groups parsed commits
            workers: Concurrent range parsers (1 = sequential)
        """
        self.tag_reader = tag_reader
        self.tag_selector = tag_selector
        self.commit_parser = commit_parser
        self.commit_extractor = commit_extractor
        self.workers = max(1, workers)

    def get_changelog(self, query: str = "") -> List[Version]:
        """
        Build versions for the tags selected by `query`.

        Args:
            query: Tag query; empty selects all tags

        Returns:
            Versions, newest first

        Raises:
            NoTagsError: If the repository has no tags
            TagNotFoundError: If the query selects nothing
            GitCommandError: If git fails
        """
        tags, first = self.get_tags(query)
        return self.read_versions(tags, first)

    def get_version_changelog(self, query: str = "") -> Version:
        """
        Build only the newest version selected by `query`.

        Raises:
            VersionNotFoundError: If no version is produced
        """
        versions = self.get_changelog(query)
        if not versions:
            raise VersionNotFoundError(query)
        return versions[0]

    def get_tags(self, query: str = "") -> Tuple[List[Tag], str]:
        """Read all tags and narrow them by query; returns (tags, first)."""
        tags = self.tag_reader.read_all()
        if not tags:
            raise NoTagsError()

        if not query:
            return tags, ""
        return self.tag_selector.select(tags, query)

    def read_versions(self, tags: List[Tag], first: str = "") -> List[Version]:
        """Parse and extract every tag's revision range, keeping tag order."""
        ranges = [revision_range(tags, i, first) for i in range(len(tags))]

        if self.workers > 1 and len(tags) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                return list(executor.map(self._read_version, tags, ranges))

        return [self._read_version(tag, rev) for tag, rev in zip(tags, ranges)]

    def _read_version(self, tag: Tag, rev: str) -> Version:
        logger.debug(f"Reading {tag.name} from {rev}")
        commits = self.commit_parser.parse(rev)
        groups, merges, reverts, notes = self.commit_extractor.extract(commits)
        return Version(
            tag=tag,
            commit_groups=groups,
            commits=commits,
            merge_commits=merges,
            revert_commits=reverts,
            note_groups=notes,
        )
