"""
Tag selector service for taglog.

Narrows a newest-first tag list with a query:

    v1.2.0          a single tag
    v1.0.0..v1.2.0  an inclusive range, older..newer
    v1.0.0..        from the newest tag down to v1.0.0
    ..v1.2.0        from v1.2.0 down to the oldest tag

Besides the selected tags, select() returns the name of the tag just older
than the oldest selected one ("first"), which bounds that tag's revision
range. It is empty when the selection reaches the oldest tag.
"""

import logging
from typing import List, Optional, Tuple

from ..domain import Tag
from ..exit_codes import InvalidQueryError, TagNotFoundError

logger = logging.getLogger(__name__)

RANGE_TOKEN = ".."


def _index_of(tags: List[Tag], name: str) -> Optional[int]:
    for i, tag in enumerate(tags):
        if tag.name == name:
            return i
    return None


def _boundary(tags: List[Tag], oldest_index: int) -> str:
    if oldest_index + 1 < len(tags):
        return tags[oldest_index + 1].name
    return ""


class TagSelector:
    """Selects a subset of tags from a query string."""

    def select(self, tags: List[Tag], query: str) -> Tuple[List[Tag], str]:
        """
        Select tags matching a query.

        Args:
            tags: Tags sorted newest first
            query: Tag name or range query

        Returns:
            Tuple of (selected tags, first boundary tag name)

        Raises:
            InvalidQueryError: If the query has more than one range token
            TagNotFoundError: If the query selects no tags
        """
        query = query.strip()
        tokens = query.split(RANGE_TOKEN)

        if len(tokens) == 1:
            selected, first = self._select_single(tags, tokens[0])
        elif len(tokens) == 2:
            old, new = tokens[0].strip(), tokens[1].strip()
            if old and new:
                selected, first = self._select_range(tags, old, new)
            elif old:
                selected, first = self._select_before(tags, old)
            elif new:
                selected, first = self._select_after(tags, new)
            else:
                raise InvalidQueryError(query)
        else:
            raise InvalidQueryError(query)

        if not selected:
            raise TagNotFoundError(query)

        logger.debug(f"Query '{query}' selected {len(selected)} tags (first={first or '-'})")
        return selected, first

    def _select_single(self, tags: List[Tag], name: str) -> Tuple[List[Tag], str]:
        i = _index_of(tags, name)
        if i is None:
            return [], ""
        return [tags[i]], _boundary(tags, i)

    def _select_range(self, tags: List[Tag], old: str, new: str) -> Tuple[List[Tag], str]:
        i_new = _index_of(tags, new)
        i_old = _index_of(tags, old)
        if i_new is None or i_old is None or i_new > i_old:
            return [], ""
        return tags[i_new:i_old + 1], _boundary(tags, i_old)

    def _select_before(self, tags: List[Tag], old: str) -> Tuple[List[Tag], str]:
        """From the newest tag down to `old`."""
        i = _index_of(tags, old)
        if i is None:
            return [], ""
        return tags[:i + 1], _boundary(tags, i)

    def _select_after(self, tags: List[Tag], new: str) -> Tuple[List[Tag], str]:
        """From `new` down to the oldest tag."""
        i = _index_of(tags, new)
        if i is None:
            return [], ""
        return tags[i:], ""
