"""Exception types raised by the dojin scraper."""


class DojinError(Exception):
    """Base class for scraper errors."""


class ConfigurationError(DojinError, ValueError):
    """Invalid arguments or settings, detected before any request is made."""


class MarkupError(DojinError):
    """Album fragment whose per-album fields cannot be aligned."""


class PaginationLimitError(DojinError):
    """Fetch run needed more pages than the configured cap allows."""
    def __init__(self, max_pages: int, remaining: int, message: str = None):
        self.max_pages = max_pages
        self.remaining = remaining
        super().__init__(message or f"Page limit of {max_pages} reached with {remaining} album IDs still pending")
