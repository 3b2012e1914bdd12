"""
Tag domain object for taglog.

A Tag is a release marker read from `refs/tags`. Tags are ordered by the
natural order of their names (see taglog.ordinal), newest first, and each
carries snapshots of its neighbours in that order:

- previous: the next-older tag
- next: the next-newer tag

Neighbour snapshots are independent RelateTag values, not references to
other Tag objects.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class RelateTag:
    """Snapshot of a neighbouring tag."""
    name: str
    subject: str
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'subject': self.subject,
            'date': self.date.isoformat(),
        }


@dataclass
class Tag:
    """
    A git tag with its neighbours in version order.

    Attributes:
        name: Tag name without the refs/tags/ prefix
        subject: Subject line of the tag (or the tagged commit)
        date: Tagger date, or author date for lightweight tags
        previous: Snapshot of the next-older tag, if any
        next: Snapshot of the next-newer tag, if any
    """

    name: str
    subject: str
    date: datetime
    previous: Optional[RelateTag] = None
    next: Optional[RelateTag] = None

    def snapshot(self) -> RelateTag:
        """Take an independent snapshot of this tag for neighbour links."""
        return RelateTag(name=self.name, subject=self.subject, date=self.date)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'subject': self.subject,
            'date': self.date.isoformat(),
            'previous': self.previous.to_dict() if self.previous else None,
            'next': self.next.to_dict() if self.next else None,
        }

    def __str__(self) -> str:
        return self.name
