"""
Version domain object for taglog.

A Version is one tag plus everything extracted from its revision range.
It is the output artifact of a changelog run.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List

from .tag import Tag
from .commit import Commit, CommitGroup, NoteGroup


@dataclass(frozen=True)
class Version:
    """
    A release and its classified commits.

    Attributes:
        tag: The release tag
        commit_groups: Classified commits, sorted by the configured key
        commits: Every commit in the revision range, unfiltered
        merge_commits: Commits carrying merge information
        revert_commits: Commits carrying revert information
        note_groups: Notes grouped by title
    """

    tag: Tag
    commit_groups: List[CommitGroup] = field(default_factory=list)
    commits: List[Commit] = field(default_factory=list)
    merge_commits: List[Commit] = field(default_factory=list)
    revert_commits: List[Commit] = field(default_factory=list)
    note_groups: List[NoteGroup] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'tag': self.tag.to_dict(),
            'commit_groups': [g.to_dict() for g in self.commit_groups],
            'commits': [c.to_dict() for c in self.commits],
            'merge_commits': [c.to_dict() for c in self.merge_commits],
            'revert_commits': [c.to_dict() for c in self.revert_commits],
            'note_groups': [g.to_dict() for g in self.note_groups],
        }
