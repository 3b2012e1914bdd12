"""
Service layer for taglog.

Contains the logic that turns git history into versions:
- TagReader: Tag discovery, ordering and neighbour links
- TagSelector: Tag subsets from query strings
- CommitParser: git log output to Commit objects
- CommitExtractor: Classification, grouping and notes
- ChangelogService: Orchestration into Version records

Services receive their collaborators and options explicitly.
"""

from .tag_reader import TagReader
from .tag_selector import TagSelector
from .commit_parser import CommitParser
from .commit_extractor import CommitExtractor, Extraction, filter_commits
from .changelog_service import ChangelogService, revision_range

__all__ = [
    'TagReader',
    'TagSelector',
    'CommitParser',
    'CommitExtractor',
    'Extraction',
    'filter_commits',
    'ChangelogService',
    'revision_range',
]
