"""Recent-changes feed parsing from the homepage comment list."""

import logging
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from .dataclasses import Change, ChangeType

logger = logging.getLogger(__name__)

COMMENTS_SELECTOR = 'ol.commentlist.snap_preview div.comment_message > p'

_CHANGE_PATTERNS = (
    (re.compile(r'.+? is broken\.'), ChangeType.BROKEN),
    (re.compile(r'.+? has been editted\.'), ChangeType.EDIT),  # sic, as written by the site
)
_TRAILING_ID = re.compile(r'(\d+)/?$')


def classify_comment(text: str) -> Optional[ChangeType]:
    """Map a feed comment to a change type, or None for other comments."""
    for pattern, change_type in _CHANGE_PATTERNS:
        if pattern.search(text):
            return change_type
    return None


def parse_changes(document: BeautifulSoup) -> List[Change]:
    """Return the latest change per album, in order of first appearance.

    Comments are scanned in document order; a later comment about the same
    album replaces the earlier status but keeps its position.
    """
    records: Dict[int, ChangeType] = {}

    for comment in document.select(COMMENTS_SELECTOR):
        link = comment.find('a', href=True)
        match = _TRAILING_ID.search(link['href'].strip()) if link else None
        if not match:
            logger.debug(f"Skipping comment without album link: {comment.get_text()[:80]!r}")
            continue

        change_type = classify_comment(comment.get_text())
        if change_type is None:
            continue

        records[int(match.group(1))] = change_type

    logger.debug(f"Parsed {len(records)} changes from the comment feed")
    return [Change(album_id=album_id, type=change_type) for album_id, change_type in records.items()]
