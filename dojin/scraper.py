"""Catalog scraping: query resolution, AJAX pagination and tag/change lookups."""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .config import ScraperConfig
from .changes import parse_changes
from .dataclasses import Album, Artist, Change, Genre
from .errors import ConfigurationError, PaginationLimitError
from .extractor import AlbumExtractor
from .homepage import HomepageSnapshot, IdentifierCache, TagKind, scan_tags
from .queries import (
    ALBUMS_PER_PAGE,
    AlbumRequest,
    IdsRequest,
    NewestRequest,
    SearchRequest,
    build_request,
    form_params,
)
from .text_utils import decode_payload
from .transport import HttpTransport

ArtistQuery = Union[int, str, re.Pattern]


class DojinScraper:
    """Reads artists, genres, albums and recent changes from a catalog site.

    Album retrieval goes through the site's ``admin-ajax.php`` endpoint,
    which returns at most 25 albums per call together with the full list of
    matching IDs (``arraySet``). The first response fixes that list for the
    run; each following call asks for the IDs not yet retrieved until the
    list is used up.

    The homepage is fetched once and reused for tag listings, name lookups
    and the change feed until ``refresh()`` is called.
    """

    def __init__(self, config: Union[ScraperConfig, str], transport: Optional[Any] = None) -> None:
        if isinstance(config, str):
            config = ScraperConfig(host=config)
        self.config = config.validate()
        self.transport = transport or HttpTransport(self.config)
        self.logger = logging.getLogger(__name__)

        self.homepage = HomepageSnapshot(
            lambda: self.transport.get(self.config.homepage_url),
            parser=self.config.html_parser,
        )
        self._artist_ids = IdentifierCache(self.homepage, TagKind.ARTIST)
        self._genre_ids = IdentifierCache(self.homepage, TagKind.GENRE)
        self.extractor = AlbumExtractor(
            self._genre_ids.resolve,
            self._artist_ids.resolve,
            parser=self.config.html_parser,
        )

        # Labels dropped during the most recent fetch run
        self.last_unresolved_labels: List[Tuple[str, str]] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        del exc_type, exc_val, exc_tb
        self.close()

    def close(self) -> None:
        close = getattr(self.transport, 'close', None)
        if close:
            close()

    @property
    def url(self) -> str:
        return self.config.base_url

    # Tags

    def artists(self) -> List[Artist]:
        """All artists listed on the homepage, in listing order."""
        return scan_tags(self.homepage.get(), TagKind.ARTIST)

    def genres(self) -> List[Genre]:
        """All genres listed on the homepage, in listing order."""
        return scan_tags(self.homepage.get(), TagKind.GENRE)

    def tags(self, kind: Union[TagKind, str]) -> list:
        return scan_tags(self.homepage.get(), kind)

    def resolve_tag(self, kind: Union[TagKind, str], name: str) -> Optional[int]:
        """Look up a tag ID by exact name, or None when it is not listed."""
        kind = TagKind.coerce(kind)
        cache = self._artist_ids if kind is TagKind.ARTIST else self._genre_ids
        return cache.resolve(name)

    def refresh(self) -> None:
        """Drop the cached homepage and name tables (for long-running processes)."""
        self.homepage.invalidate()
        self.logger.info("Homepage cache cleared")

    # Albums

    def resolve_artist(self, query: ArtistQuery) -> Optional[int]:
        """Turn an artist ID, exact name or compiled pattern into an artist ID."""
        if isinstance(query, bool):
            raise ConfigurationError(f"Unsupported artist query: {query!r}")
        if isinstance(query, int):
            return query
        if isinstance(query, str):
            artist_id = self._artist_ids.resolve(query)
            if artist_id is None:
                self.logger.info(f"No artist named '{query}'")
            return artist_id
        if isinstance(query, re.Pattern):
            for artist in self.artists():
                if query.search(artist.name):
                    self.logger.debug(f"Pattern {query.pattern!r} matched artist '{artist.name}' ({artist.id})")
                    return artist.id
            self.logger.info(f"No artist matches pattern {query.pattern!r}")
            return None
        raise ConfigurationError(f"Unsupported artist query type: {type(query).__name__}")

    def albums_by_artist(self, query: ArtistQuery) -> Optional[List[Album]]:
        """All albums by an artist, or None when the name/pattern matches nobody."""
        artist_id = self.resolve_artist(query)
        if artist_id is None:
            return None
        return self.fetch_albums(SearchRequest(artist=artist_id))

    def newest(self, page: int = 0) -> Optional[List[Album]]:
        """Most recently added albums; ``page`` counts in pages of 25."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise ConfigurationError(f"page must be a non-negative integer, got {page!r}")
        return self.fetch_albums(offset=page * ALBUMS_PER_PAGE)

    def search(self, query: Union[str, Sequence[str]]) -> Optional[List[Album]]:
        """Albums matching one or more free-text terms."""
        if isinstance(query, str):
            query = [query]
        if not isinstance(query, (list, tuple)):
            raise ConfigurationError(f"search query must be a string or list of strings, got {type(query).__name__}")
        return self.fetch_albums(search={'query': list(query)})

    def search_albums(self, query: Sequence[str] = (), artist: Optional[int] = None,
                      genres: Sequence[int] = (), excluded_genres: Sequence[int] = (),
                      excluded_artists: Sequence[int] = ()) -> Optional[List[Album]]:
        """Full search form: terms, artist and included/excluded genre filters."""
        return self.fetch_albums(search={
            'query': list(query),
            'artist': artist,
            'genres': list(genres),
            'excluded_genres': list(excluded_genres),
            'excluded_artists': list(excluded_artists),
        })

    def albums_from_ids(self, ids: Sequence[int]) -> Optional[List[Album]]:
        if not isinstance(ids, (list, tuple)):
            raise ConfigurationError(f"ids must be a list of album IDs, got {type(ids).__name__}")
        return self.fetch_albums(from_ids=list(ids))

    def changes(self) -> List[Change]:
        """Latest edit/broken status per album from the homepage comment feed."""
        return parse_changes(self.homepage.get())

    # Pagination

    def fetch_albums(self, request: Optional[AlbumRequest] = None, *,
                     search: Optional[Dict[str, Any]] = None,
                     from_ids: Optional[Sequence[int]] = None,
                     offset: Optional[int] = None) -> Optional[List[Album]]:
        """Retrieve every album for one request, following pagination.

        Pass either a request object or exactly one of ``search``,
        ``from_ids`` and ``offset``.

        Returns:
            The albums in page order, or None when a response cannot be
            decoded.

        Raises:
            ConfigurationError: for an ambiguous or malformed request, before
                any network call.
            PaginationLimitError: when the run exceeds ``config.max_pages``.
        """
        if request is None:
            request = build_request(search=search, from_ids=from_ids, offset=offset)
        elif any(value is not None for value in (search, from_ids, offset)):
            raise ConfigurationError("Pass either a request object or keyword shapes, not both")
        elif not isinstance(request, (SearchRequest, IdsRequest, NewestRequest)):
            raise ConfigurationError(f"Unsupported request type: {type(request).__name__}")

        if isinstance(request, IdsRequest) and not request.ids:
            return []

        # Caller-supplied IDs are authoritative; otherwise the first response decides
        pending: Optional[List[Any]] = list(request.ids) if isinstance(request, IdsRequest) else None
        authoritative = set(pending) if pending is not None else None
        params = form_params(request)
        records: List[Album] = []
        unresolved: List[Tuple[str, str]] = []
        pages = 0

        self.logger.debug(f"Starting {type(request).__name__} run")
        while True:
            if self.config.max_pages and pages >= self.config.max_pages:
                raise PaginationLimitError(self.config.max_pages, len(pending or ()))

            page = decode_payload(self.transport.post_form(self.config.ajax_url, params))
            pages += 1
            if page is None:
                self.logger.warning(f"Undecodable response on page {pages}, aborting run")
                return None

            if pending is None:
                pending = self._id_list(page.get('arraySet'))
                authoritative = set(pending)
                self.logger.debug(f"Server reported {len(pending)} matching albums")

            result = self.extractor.extract(page.get('album') or page.get('data') or '')
            stray = [album.id for album in result.albums if authoritative and album.id not in authoritative]
            if stray:
                self.logger.warning(f"Page {pages} returned albums outside the requested set: {stray}")
            records.extend(result.albums)
            unresolved.extend(result.unresolved)

            del pending[:ALBUMS_PER_PAGE]
            if not pending:
                break
            params = form_params(IdsRequest(ids=tuple(pending)))

        self.last_unresolved_labels = unresolved
        self.logger.info(f"Fetched {len(records)} albums in {pages} page(s)")
        return records

    def _id_list(self, array_set: Any) -> List[Any]:
        if array_set is None:
            return []
        if not isinstance(array_set, list):
            self.logger.warning(f"Unexpected arraySet type {type(array_set).__name__}, treating as single page")
            return []
        ids = []
        for value in array_set:
            try:
                ids.append(int(value))
            except (TypeError, ValueError):
                ids.append(value)
        return ids
