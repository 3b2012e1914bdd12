"""
taglog - Structured changelogs from git tags and commits.

taglog reads a repository's tags, orders them naturally by name, slices
history into one revision range per tag and classifies each range's
commits into groups (features, fixes, ...), merge/revert lists and notes.

Quick Start:
    import taglog

    cl = taglog.ChangeLogger(repo="~/src/project")

    # All versions, newest first
    for version in cl.get_changelog():
        print(version.tag.name, [g.title for g in version.commit_groups])

    # A range of versions
    versions = cl.get_changelog("v1.0.0..v2.0.0")

    # Only the newest selected version
    version = cl.get_version_changelog("v2.0.0")

Domain Objects:
    Tag, RelateTag - Release markers and neighbour snapshots
    Commit, Note - Parsed commits and their notes
    CommitGroup, NoteGroup - Classification results
    Version - One release with everything extracted from its range
"""

__version__ = "0.1.0"

# High-level API
from .api import ChangeLogger

# Domain objects
from .domain import (
    Tag,
    RelateTag,
    Commit,
    Note,
    CommitGroup,
    NoteGroup,
    Version,
)

# Services (for advanced use)
from .services import (
    ChangelogService,
    CommitExtractor,
    CommitParser,
    TagReader,
    TagSelector,
)

# Configuration
from .config import ChangelogOptions, load_config

# Errors
from .exit_codes import (
    TaglogError,
    GitCommandError,
    NoTagsError,
    DateParseError,
    TagNotFoundError,
    InvalidQueryError,
    ComparisonError,
    VersionNotFoundError,
    ConfigError,
)

from .ordinal import version_ordinal

__all__ = [
    # Version
    "__version__",
    # High-level API
    "ChangeLogger",
    # Domain objects
    "Tag",
    "RelateTag",
    "Commit",
    "Note",
    "CommitGroup",
    "NoteGroup",
    "Version",
    # Services
    "ChangelogService",
    "CommitExtractor",
    "CommitParser",
    "TagReader",
    "TagSelector",
    # Configuration
    "ChangelogOptions",
    "load_config",
    # Errors
    "TaglogError",
    "GitCommandError",
    "NoTagsError",
    "DateParseError",
    "TagNotFoundError",
    "InvalidQueryError",
    "ComparisonError",
    "VersionNotFoundError",
    "ConfigError",
    # Ordering
    "version_ordinal",
]
