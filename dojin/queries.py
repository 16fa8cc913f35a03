"""Request shapes accepted by the AJAX album endpoint.

The endpoint understands three request modes. Each is a small frozen
dataclass; ``form_params`` turns one into the form fields the site expects.
``build_request`` maps keyword-style inputs onto exactly one mode and
rejects ambiguous combinations before anything is sent.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .errors import ConfigurationError

ALBUMS_PER_PAGE = 25


@dataclass(frozen=True)
class SearchRequest:
    """Server-side search (``exploreLoad``)."""
    query: Tuple[str, ...] = ()
    artist: Optional[int] = None
    genres: Tuple[int, ...] = ()
    excluded_genres: Tuple[int, ...] = ()
    excluded_artists: Tuple[int, ...] = ()


@dataclass(frozen=True)
class IdsRequest:
    """Explicit album IDs (``infiniteScrollingAction`` with an arraySet)."""
    ids: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NewestRequest:
    """Chronological listing starting at ``offset`` albums."""
    offset: int = 0


AlbumRequest = Union[SearchRequest, IdsRequest, NewestRequest]

_SEARCH_FIELDS = ('query', 'artist', 'genres', 'excluded_genres', 'excluded_artists')


def build_request(search: Optional[Union[SearchRequest, Mapping[str, Any]]] = None,
                  from_ids: Optional[Sequence[int]] = None,
                  offset: Optional[int] = None) -> AlbumRequest:
    """Select the request mode from exactly one of ``search``, ``from_ids`` or ``offset``.

    Raises:
        ConfigurationError: if none or more than one shape is supplied, or
            the supplied shape has the wrong type.
    """
    supplied = [name for name, value in (('search', search), ('from_ids', from_ids), ('offset', offset))
                if value is not None]
    if len(supplied) != 1:
        raise ConfigurationError(
            f"Exactly one of search, from_ids or offset is required, got {supplied or 'none'}"
        )

    if search is not None:
        if isinstance(search, SearchRequest):
            return search
        if not isinstance(search, Mapping):
            raise ConfigurationError(f"search must be a mapping, got {type(search).__name__}")
        unknown = set(search) - set(_SEARCH_FIELDS)
        if unknown:
            raise ConfigurationError(f"Unknown search fields: {sorted(unknown)}")
        return SearchRequest(
            query=_as_tuple(search.get('query', ()), str, 'query'),
            artist=_as_artist(search.get('artist')),
            genres=_as_tuple(search.get('genres', ()), int, 'genres'),
            excluded_genres=_as_tuple(search.get('excluded_genres', ()), int, 'excluded_genres'),
            excluded_artists=_as_tuple(search.get('excluded_artists', ()), int, 'excluded_artists'),
        )

    if from_ids is not None:
        return IdsRequest(ids=_as_tuple(from_ids, int, 'from_ids'))

    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise ConfigurationError(f"offset must be a non-negative integer, got {offset!r}")
    return NewestRequest(offset=offset)


def form_params(request: AlbumRequest) -> Dict[str, Any]:
    """Build the POST form fields for a request."""
    if isinstance(request, SearchRequest):
        return {
            'action': 'exploreLoad',
            'artist': '' if request.artist is None else str(request.artist),
            'style': list(request.genres),
            'exartist': list(request.excluded_artists),
            'exstyle': list(request.excluded_genres),
            'searchQuery': list(request.query),
            'orderType': 'downloads',
            'orderDate': 'all',
            'orderDateMagnitude': '',
            'onlyShowBroken': 'false',
        }
    if isinstance(request, IdsRequest):
        return {
            'action': 'infiniteScrollingAction',
            'postsPerPage': ALBUMS_PER_PAGE,  # ignored by the server
            'arraySet': json.dumps(list(request.ids)),
        }
    if isinstance(request, NewestRequest):
        return {
            'action': 'infiniteScrollingAction',
            'postsPerPage': ALBUMS_PER_PAGE,
            'offset': request.offset,
            'arraySet': json.dumps([]),
        }
    raise ConfigurationError(f"Unsupported request type: {type(request).__name__}")


def _as_tuple(values: Any, item_type: type, name: str) -> Tuple:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise ConfigurationError(f"{name} must be a list, got {type(values).__name__}")
    for value in values:
        if not isinstance(value, item_type) or isinstance(value, bool):
            raise ConfigurationError(f"{name} entries must be {item_type.__name__}, got {value!r}")
    return tuple(values)


def _as_artist(artist: Any) -> Optional[int]:
    if artist is None:
        return None
    if isinstance(artist, bool) or not isinstance(artist, int):
        raise ConfigurationError(f"artist must be an integer ID, got {artist!r}")
    return artist
