"""Dojin catalog scraping modules."""

__version__ = "0.3.0"

# Core API
from .dataclasses import Album, Artist, Change, ChangeType, Genre, Tag
from .config import ScraperConfig
from .scraper import DojinScraper
from .errors import ConfigurationError, DojinError, MarkupError, PaginationLimitError

# Internal components (for advanced usage)
from .queries import ALBUMS_PER_PAGE, IdsRequest, NewestRequest, SearchRequest, build_request
from .homepage import HomepageSnapshot, IdentifierCache, TagKind
from .extractor import AlbumExtractor, ExtractionResult
from .changes import parse_changes
from .transport import HttpTransport

__all__ = [
    # Version
    '__version__',

    # Core API
    'DojinScraper',
    'ScraperConfig',
    'Album',
    'Artist',
    'Genre',
    'Tag',
    'Change',
    'ChangeType',

    # Errors
    'DojinError',
    'ConfigurationError',
    'MarkupError',
    'PaginationLimitError',

    # Internal components (for advanced usage)
    'ALBUMS_PER_PAGE',
    'SearchRequest',
    'IdsRequest',
    'NewestRequest',
    'build_request',
    'HomepageSnapshot',
    'IdentifierCache',
    'TagKind',
    'AlbumExtractor',
    'ExtractionResult',
    'parse_changes',
    'HttpTransport',
]
