"""
Commit domain objects for taglog.

Commits are produced by the commit parser and treated as read-only input
by the extractor. Groups are built by the extractor:

- CommitGroup: commits sharing a classification key ("feat", "fix", ...)
- NoteGroup: notes sharing a title ("BREAKING CHANGE", ...)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List


@dataclass(frozen=True)
class Hash:
    """Full and abbreviated commit hash."""
    long: str
    short: str

    def to_dict(self) -> Dict[str, Any]:
        return {'long': self.long, 'short': self.short}


@dataclass(frozen=True)
class Contact:
    """Author or committer of a commit."""
    name: str
    email: str
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'email': self.email,
            'date': self.date.isoformat(),
        }


@dataclass(frozen=True)
class Merge:
    """Merge information parsed from a merge commit header."""
    ref: str = ""
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'ref': self.ref, 'source': self.source}


@dataclass(frozen=True)
class Revert:
    """Revert information parsed from a revert commit header."""
    header: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'header': self.header}


@dataclass(frozen=True)
class Ref:
    """Issue reference such as "Closes #12"."""
    action: str
    ref: str
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'action': self.action, 'ref': self.ref, 'source': self.source}


@dataclass(frozen=True)
class Note:
    """Titled annotation embedded in a commit body."""
    title: str
    body: str

    def to_dict(self) -> Dict[str, Any]:
        return {'title': self.title, 'body': self.body}


@dataclass(frozen=True)
class Commit:
    """
    A parsed commit.

    type, scope and subject are filled from the configured header pattern
    and stay empty when the header does not match it.
    """

    hash: Hash
    author: Contact
    committer: Contact
    header: str
    body: str = ""
    type: str = ""
    scope: str = ""
    subject: str = ""
    merge: Optional[Merge] = None
    revert: Optional[Revert] = None
    refs: tuple = ()
    notes: tuple = ()
    mentions: tuple = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'hash': self.hash.to_dict(),
            'author': self.author.to_dict(),
            'committer': self.committer.to_dict(),
            'header': self.header,
            'body': self.body,
            'type': self.type,
            'scope': self.scope,
            'subject': self.subject,
            'merge': self.merge.to_dict() if self.merge else None,
            'revert': self.revert.to_dict() if self.revert else None,
            'refs': [r.to_dict() for r in self.refs],
            'notes': [n.to_dict() for n in self.notes],
            'mentions': list(self.mentions),
        }


@dataclass
class CommitGroup:
    """Commits sharing one classification key within a release."""
    raw_title: str
    title: str
    commits: List[Commit] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'raw_title': self.raw_title,
            'title': self.title,
            'commits': [c.to_dict() for c in self.commits],
        }


@dataclass
class NoteGroup:
    """Notes sharing one title within a release."""
    title: str
    notes: List[Note] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'notes': [n.to_dict() for n in self.notes],
        }
