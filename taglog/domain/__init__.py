"""
Domain layer for taglog.

Contains pure domain objects with no I/O or side effects:
- Tag / RelateTag: Release markers and their neighbour snapshots
- Commit (with Hash, Contact, Merge, Revert, Ref, Note): Parsed commits
- CommitGroup / NoteGroup: Classification results
- Version: One release and its extracted commits

All objects provide to_dict() for JSON output.
"""

from .tag import Tag, RelateTag
from .commit import (
    Commit,
    Hash,
    Contact,
    Merge,
    Revert,
    Ref,
    Note,
    CommitGroup,
    NoteGroup,
)
from .version import Version

__all__ = [
    'Tag',
    'RelateTag',
    'Commit',
    'Hash',
    'Contact',
    'Merge',
    'Revert',
    'Ref',
    'Note',
    'CommitGroup',
    'NoteGroup',
    'Version',
]
