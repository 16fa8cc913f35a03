"""Album record extraction from AJAX album fragments."""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, Union

from bs4 import BeautifulSoup

from .dataclasses import Album
from .errors import MarkupError
from .text_utils import split_labels

BROKEN_MARKER = 'Please Fix'

Resolver = Callable[[str], Optional[int]]


@dataclass
class ExtractionResult:
    """Albums from one fragment plus the labels that could not be resolved."""
    albums: List[Album] = field(default_factory=list)
    unresolved: List[Tuple[str, str]] = field(default_factory=list)  # (kind, label)


class AlbumExtractor:
    """Turns one album fragment into Album records.

    The fragment lists each album field in its own set of elements, so every
    field is collected as a document-ordered column and the columns are
    zipped back together. Genre and artist names are mapped to IDs with the
    given resolvers; names without an ID are left out of the album.
    """

    def __init__(self, resolve_genre: Resolver, resolve_artist: Resolver, parser: str = 'lxml') -> None:
        self.resolve_genre = resolve_genre
        self.resolve_artist = resolve_artist
        self.parser = parser
        self.logger = logging.getLogger(__name__)

    def extract(self, fragment: Union[str, BeautifulSoup]) -> ExtractionResult:
        doc = fragment if isinstance(fragment, BeautifulSoup) else BeautifulSoup(fragment or '', self.parser)

        ids = [self._parse_id(node.get('postid', '')) for node in doc.select('.music')]
        titles = [node.get_text() for node in doc.select('.cellInformation_edit_title')]
        covers = [img.get('src', '') for img in doc.select('div.album-container > img')]
        broken = [
            ''.join(marker.get_text() for marker in container.select('.broken_album_overlay-text')).strip() == BROKEN_MARKER
            for container in doc.select('div.album-container')
        ]
        links = [node.get_text() for node in doc.select('.cellInformation_edit_download')]
        genre_labels = [split_labels(node.get_text()) for node in doc.select('.cellInformation_edit_style')]
        artist_labels = [split_labels(node.get_text()) for node in doc.select('.cellInformation_edit_artist')]

        columns = {
            'id': ids, 'title': titles, 'cover': covers, 'broken': broken,
            'download': links, 'genres': genre_labels, 'artists': artist_labels,
        }
        lengths = {name: len(values) for name, values in columns.items()}
        if len(set(lengths.values())) > 1:
            raise MarkupError(f"Album fragment fields are misaligned: {lengths}")

        result = ExtractionResult()
        for album_id, title, cover, is_broken, link, genres, artists in zip(
                ids, titles, covers, broken, links, genre_labels, artist_labels):
            result.albums.append(Album(
                id=album_id,
                title=title,
                url=None if is_broken else link,
                cover=cover,
                genres=self._resolve_all(genres, self.resolve_genre, 'genre', result),
                artists=self._resolve_all(artists, self.resolve_artist, 'artist', result),
            ))

        if result.unresolved:
            self.logger.warning(f"Dropped {len(result.unresolved)} unknown labels: {result.unresolved}")
        self.logger.debug(f"Extracted {len(result.albums)} albums ({sum(broken)} with broken links)")
        return result

    @staticmethod
    def _parse_id(value: str) -> int:
        try:
            return int(value.strip())
        except ValueError:
            raise MarkupError(f"Album node has a non-numeric postid: {value!r}") from None

    @staticmethod
    def _resolve_all(labels: List[str], resolve: Resolver, kind: str, result: ExtractionResult) -> Tuple[int, ...]:
        resolved = []
        for label in labels:
            tag_id = resolve(label)
            if tag_id is None:
                result.unresolved.append((kind, label))
            else:
                resolved.append(tag_id)
        return tuple(resolved)
