"""Homepage snapshot and the name -> ID tables derived from it."""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup

from .dataclasses import Artist, Genre, Tag
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class TagKind(str, Enum):
    ARTIST = 'artist'
    GENRE = 'genre'

    @classmethod
    def coerce(cls, kind: Union['TagKind', str]) -> 'TagKind':
        try:
            return cls(kind)
        except ValueError:
            raise ConfigurationError(f"invalid type: {kind}") from None

    @property
    def listing_type(self) -> str:
        """Value of the ``type`` attribute on the homepage tag elements."""
        return 'm_artist' if self is TagKind.ARTIST else 'm_style'

    @property
    def record_class(self) -> type:
        return Artist if self is TagKind.ARTIST else Genre


class HomepageSnapshot:
    """Lazily fetched, parsed homepage.

    ``generation`` increases on every ``invalidate()``; dependent caches
    remember the generation they were built from and rebuild when it moves.
    """

    def __init__(self, fetch: Callable[[], str], parser: str = 'lxml') -> None:
        self._fetch = fetch
        self.parser = parser
        self.generation = 0
        self._document: Optional[BeautifulSoup] = None
        self.logger = logging.getLogger(__name__)

    def get(self) -> BeautifulSoup:
        if self._document is None:
            self.logger.debug(f"Fetching homepage (generation {self.generation})")
            html = self._fetch()
            self._document = BeautifulSoup(html, self.parser)
        return self._document

    def invalidate(self) -> None:
        self._document = None
        self.generation += 1
        self.logger.debug(f"Homepage snapshot invalidated (generation {self.generation})")

    @property
    def is_loaded(self) -> bool:
        return self._document is not None


def scan_tags(document: BeautifulSoup, kind: Union[TagKind, str]) -> List[Tag]:
    """Return the homepage tag listing for ``kind`` in document order."""
    kind = TagKind.coerce(kind)
    record_class = kind.record_class
    tags = []
    for element in document.select(f'div[type="{kind.listing_type}"]'):
        value = element.get('value', '').strip()
        if not value.isdigit():
            logger.debug(f"Skipping {kind.value} tag without numeric value: {element!r:.80}")
            continue
        tags.append(record_class(name=element.get_text().strip(), id=int(value)))
    return tags


class IdentifierCache:
    """Name -> catalog ID table for one tag kind, rebuilt per snapshot generation."""

    def __init__(self, snapshot: HomepageSnapshot, kind: Union[TagKind, str]) -> None:
        self.snapshot = snapshot
        self.kind = TagKind.coerce(kind)
        self.logger = logging.getLogger(__name__)
        self._table: Dict[str, int] = {}
        self._built_generation: Optional[int] = None

    def resolve(self, name: str) -> Optional[int]:
        """Return the ID for an exact (trimmed) name, or None when unknown."""
        return self._ensure_table().get(name.strip())

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    def __len__(self) -> int:
        return len(self._ensure_table())

    def _ensure_table(self) -> Dict[str, int]:
        if self._built_generation != self.snapshot.generation:
            tags = scan_tags(self.snapshot.get(), self.kind)
            self._table = {tag.name: tag.id for tag in tags}
            self._built_generation = self.snapshot.generation
            self.logger.debug(f"Built {self.kind.value} table with {len(self._table)} entries")
        return self._table
