"""Configuration for the dojin catalog scraper."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from .errors import ConfigurationError
from .text_utils import normalize_host

AJAX_PATH = '/wp-admin/admin-ajax.php'
DEFAULT_USER_AGENT = 'Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0'


@dataclass(frozen=True)
class ScraperConfig:
    """Connection and pagination settings with validation."""

    host: str
    scheme: str = 'http'

    # Transport
    request_timeout: Optional[float] = 30.0  # None = wait forever
    user_agent: str = DEFAULT_USER_AGENT

    # Pagination
    max_pages: int = 1000  # 0 = unlimited

    # BeautifulSoup tree builder
    html_parser: str = 'lxml'

    def __post_init__(self):
        # Accept full URLs for convenience; only the host is kept
        object.__setattr__(self, 'host', normalize_host(self.host))

    @classmethod
    def from_env(cls, host: Optional[str] = None) -> 'ScraperConfig':
        """Create ScraperConfig from DOJIN_* environment variables."""
        timeout = os.environ.get('DOJIN_TIMEOUT')
        max_pages = os.environ.get('DOJIN_MAX_PAGES')
        try:
            return cls(
                host=host or os.environ.get('DOJIN_HOST', ''),
                request_timeout=float(timeout) if timeout else 30.0,
                max_pages=int(max_pages) if max_pages else 1000,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid DOJIN_* environment value: {e}") from e

    def with_overrides(self, **changes) -> 'ScraperConfig':
        """Return a copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def validate(self) -> 'ScraperConfig':
        if not self.host:
            raise ConfigurationError("A catalog host is required")
        if self.scheme not in ('http', 'https'):
            raise ConfigurationError(f"Unsupported scheme: {self.scheme}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.max_pages < 0:
            raise ConfigurationError(f"max_pages must be >= 0, got {self.max_pages}")
        return self

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}"

    @property
    def homepage_url(self) -> str:
        return f"{self.base_url}/"

    @property
    def ajax_url(self) -> str:
        return f"{self.base_url}{AJAX_PATH}"
