"""
Commit parser service for taglog.

Runs `git log` over a revision range and turns each commit into a Commit
domain object: header fields from the configured header pattern, merge and
revert information, notes such as "BREAKING CHANGE: ...", issue refs and
@mentions.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from ..config import ChangelogOptions
from ..domain import Commit, Contact, Hash, Merge, Note, Ref, Revert
from ..infra import GitClient

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "@@__CHGLOG__@@"
FIELD_SEPARATOR = "@@__CHGLOG_FIELD__@@"
LOG_FIELDS = ["%H", "%h", "%an", "%ae", "%at", "%cn", "%ce", "%ct", "%s", "%b"]

MENTION_PATTERN = re.compile(r"(?<![\w.])@([\w-]+)")


def _map_groups(match: re.Match, maps: Sequence[str]) -> Dict[str, str]:
    """Assign capture groups to names, in order."""
    values = {}
    for i, name in enumerate(maps, start=1):
        if i > len(match.groups()):
            break
        values[name.lower()] = match.group(i) or ""
    return values


class CommitParser:
    """
    Parses the commits of a revision range.

    Example:
        parser = CommitParser(GitClient("/path/to/repo"), ChangelogOptions())
        for commit in parser.parse("v1.0.0..v1.1.0"):
            print(commit.type, commit.subject)
    """

    def __init__(self, git_client: GitClient, options: ChangelogOptions):
        self.git = git_client
        self.options = options
        self.header_re = re.compile(options.header_pattern)
        self.merge_re = re.compile(options.merge_pattern) if options.merge_pattern else None
        self.revert_re = re.compile(options.revert_pattern) if options.revert_pattern else None
        self.ref_re = self._build_ref_pattern(options)

    @staticmethod
    def _build_ref_pattern(options: ChangelogOptions) -> Optional[re.Pattern]:
        if not options.issue_prefix:
            return None
        prefixes = "|".join(re.escape(p) for p in options.issue_prefix)
        if options.ref_actions:
            actions = "|".join(re.escape(a) for a in options.ref_actions)
            return re.compile(rf"(?:({actions})\s+)?(?:([\w\-\./]+))?(?:{prefixes})(\d+)", re.IGNORECASE)
        return re.compile(rf"()(?:([\w\-\./]+))?(?:{prefixes})(\d+)")

    def parse(self, rev: str) -> List[Commit]:
        """
        Parse the commits of a revision range.

        Args:
            rev: Revision range, e.g. "v1.0.0..v1.1.0" or "v1.0.0"

        Returns:
            Commits in git log order (newest first)

        Raises:
            GitCommandError: If git fails
        """
        out = self.git.exec(
            "log",
            rev,
            "--no-decorate",
            "--pretty=" + RECORD_SEPARATOR + FIELD_SEPARATOR.join(LOG_FIELDS),
        )

        commits = []
        for record in out.split(RECORD_SEPARATOR):
            if not record.strip():
                continue
            commit = self.parse_record(record)
            if commit is not None:
                commits.append(commit)

        logger.debug(f"Parsed {len(commits)} commits in {rev}")
        return commits

    def parse_record(self, record: str) -> Optional[Commit]:
        """Parse one `git log` record; returns None for malformed records."""
        fields = record.split(FIELD_SEPARATOR, len(LOG_FIELDS) - 1)
        if len(fields) != len(LOG_FIELDS):
            logger.debug(f"Skipping malformed log record: {record[:40]!r}")
            return None

        (long_hash, short_hash, author_name, author_email, author_date,
         committer_name, committer_email, committer_date, header, body) = fields
        header = header.strip()
        body = body.strip()

        values = {}
        match = self.header_re.match(header)
        if match:
            values = _map_groups(match, self.options.header_pattern_maps)

        return Commit(
            hash=Hash(long=long_hash.strip(), short=short_hash.strip()),
            author=Contact(author_name, author_email, self._parse_timestamp(author_date)),
            committer=Contact(committer_name, committer_email, self._parse_timestamp(committer_date)),
            header=header,
            body=body,
            type=values.get("type", ""),
            scope=values.get("scope", ""),
            subject=values.get("subject", ""),
            merge=self.parse_merge(header),
            revert=self.parse_revert(header),
            refs=tuple(self.parse_refs(header + "\n" + body)),
            notes=tuple(self.parse_notes(body)),
            mentions=tuple(self.parse_mentions(body)),
        )

    @staticmethod
    def _parse_timestamp(value: str) -> datetime:
        return datetime.fromtimestamp(int(value.strip()), tz=timezone.utc)

    def parse_merge(self, header: str) -> Optional[Merge]:
        if self.merge_re is None:
            return None
        match = self.merge_re.search(header)
        if not match:
            return None
        values = _map_groups(match, self.options.merge_pattern_maps)
        return Merge(ref=values.get("ref", ""), source=values.get("source", ""))

    def parse_revert(self, header: str) -> Optional[Revert]:
        if self.revert_re is None:
            return None
        match = self.revert_re.search(header)
        if not match:
            return None
        values = _map_groups(match, self.options.revert_pattern_maps)
        return Revert(header=values.get("header", ""))

    def parse_notes(self, body: str) -> List[Note]:
        """
        Collect keyword notes from a commit body.

        A line "KEYWORD: text" opens a note; later lines belong to it until
        the next keyword line.
        """
        notes = []
        title = None
        lines: List[str] = []

        for line in body.splitlines():
            keyword = self._note_keyword(line)
            if keyword is not None:
                if title is not None:
                    notes.append(Note(title=title, body="\n".join(lines).strip()))
                title = keyword
                lines = [line[len(keyword) + 1:].strip()]
            elif title is not None:
                lines.append(line)

        if title is not None:
            notes.append(Note(title=title, body="\n".join(lines).strip()))

        return notes

    def _note_keyword(self, line: str) -> Optional[str]:
        for keyword in self.options.note_keywords:
            if line.startswith(keyword + ":"):
                return keyword
        return None

    def parse_refs(self, text: str) -> List[Ref]:
        if self.ref_re is None:
            return []
        return [
            Ref(action=m.group(1) or "", ref=m.group(3), source=m.group(2) or "")
            for m in self.ref_re.finditer(text)
        ]

    def parse_mentions(self, body: str) -> List[str]:
        return list(dict.fromkeys(MENTION_PATTERN.findall(body)))
