"""
Commit extractor service for taglog.

Turns the commits of one revision range into:
- commit groups, keyed by the first configured classification key found
  in each header as "(key)"
- merge and revert commits, set aside before classification
- note groups, keyed by note title
"""

import logging
import re
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Dict, List, Optional, Tuple

from ..config import ChangelogOptions
from ..domain import Commit, CommitGroup, Note, NoteGroup
from ..fields import dot_get, less_by_path

logger = logging.getLogger(__name__)

_WORD_START = re.compile(r'(?<!\w)\w')


@dataclass
class Extraction:
    """Result of extracting one revision range."""
    commit_groups: List[CommitGroup] = field(default_factory=list)
    merge_commits: List[Commit] = field(default_factory=list)
    revert_commits: List[Commit] = field(default_factory=list)
    note_groups: List[NoteGroup] = field(default_factory=list)

    def __iter__(self):
        return iter((self.commit_groups, self.merge_commits,
                     self.revert_commits, self.note_groups))


def filter_commits(commits: List[Commit], filters: Dict[str, List[str]]) -> List[Commit]:
    """
    Keep commits whose every filtered field holds an allowed value.

    Args:
        commits: Commits to filter
        filters: Field path -> allowed string values (e.g. {"Type": ["feat"]})

    Returns:
        Filtered commits, in input order
    """
    if not filters:
        return list(commits)

    kept = []
    for commit in commits:
        for path, allowed in filters.items():
            value, ok = dot_get(commit, path)
            if isinstance(allowed, str):
                allowed = (allowed,)
            if not ok or not isinstance(value, str) or value not in allowed:
                break
        else:
            kept.append(commit)
    return kept


def _capitalize(word: str) -> str:
    """Uppercase the first letter of every word ("hot-fix" -> "Hot-Fix")."""
    return _WORD_START.sub(lambda m: m.group().upper(), word)


class CommitExtractor:
    """
    Classifies and groups the commits of a revision range.

    Example:
        extractor = CommitExtractor(ChangelogOptions(commit_group_by="feat.fix"))
        groups, merges, reverts, notes = extractor.extract(commits)
    """

    def __init__(self, options: ChangelogOptions):
        self.options = options
        self.group_keys = options.group_keys

    def extract(self, commits: List[Commit]) -> Extraction:
        """
        Extract groups from a list of commits.

        Merge and revert commits are taken from the unfiltered list; grouping
        and notes use the commits that pass the configured filters.
        """
        merge_commits = []
        revert_commits = []
        for commit in commits:
            if commit.merge is not None:
                merge_commits.append(commit)
            elif commit.revert is not None:
                revert_commits.append(commit)

        groups: Dict[str, CommitGroup] = {}
        notes: Dict[str, NoteGroup] = {}

        for commit in filter_commits(commits, self.options.commit_filters):
            if commit.merge is None and commit.revert is None:
                self._add_to_group(groups, commit)
            for note in commit.notes:
                self._add_note(notes, note)

        commit_groups = self.sort_commit_groups(list(groups.values()))
        note_groups = self.sort_note_groups(list(notes.values()))

        logger.debug(
            f"Extracted {len(commit_groups)} groups, {len(merge_commits)} merges, "
            f"{len(revert_commits)} reverts, {len(note_groups)} note groups"
        )
        return Extraction(
            commit_groups=commit_groups,
            merge_commits=merge_commits,
            revert_commits=revert_commits,
            note_groups=note_groups,
        )

    def classify(self, commit: Commit) -> Optional[str]:
        """
        Find the classification key of a commit.

        The first key (in priority order) whose "(key)" appears in the
        header after its first character wins.
        """
        for key in self.group_keys:
            if commit.header.rfind(f"({key})") > 0:
                return key
        return None

    def group_title(self, commit: Commit) -> Tuple[str, str]:
        """Return (raw key, display title), or ("", "") if unclassified."""
        raw = self.classify(commit)
        if raw is None:
            return "", ""
        title = self.options.commit_group_title_maps.get(raw, _capitalize(raw))
        return raw, title

    def _add_to_group(self, groups: Dict[str, CommitGroup], commit: Commit) -> None:
        raw, title = self.group_title(commit)
        if not raw:
            return
        group = groups.get(raw)
        if group is None:
            groups[raw] = CommitGroup(raw_title=raw, title=title, commits=[commit])
        else:
            group.commits.append(commit)

    @staticmethod
    def _add_note(groups: Dict[str, NoteGroup], note: Note) -> None:
        group = groups.get(note.title)
        if group is None:
            groups[note.title] = NoteGroup(title=note.title, notes=[note])
        else:
            group.notes.append(note)

    def sort_commit_groups(self, groups: List[CommitGroup]) -> List[CommitGroup]:
        """Sort groups, and commits within each group, by the configured paths."""
        groups = sorted(groups, key=cmp_to_key(less_by_path(self.options.commit_group_sort_by)))
        commit_key = cmp_to_key(less_by_path(self.options.commit_sort_by))
        for group in groups:
            group.commits.sort(key=commit_key)
        return groups

    @staticmethod
    def sort_note_groups(groups: List[NoteGroup]) -> List[NoteGroup]:
        """Sort note groups, and notes within each group, by lowercased title."""
        groups = sorted(groups, key=lambda g: g.title.lower())
        for group in groups:
            group.notes.sort(key=lambda n: n.title.lower())
        return groups
