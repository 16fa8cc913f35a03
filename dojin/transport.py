"""HTTP transport for the catalog site."""

import logging
from typing import Any, Dict, Optional

import requests

from .config import ScraperConfig


class HttpTransport:
    """Blocking GET/form-POST over a shared requests session.

    Errors are not retried: connection failures and non-2xx statuses
    surface as ``requests.RequestException`` to the caller.
    """

    def __init__(self, config: ScraperConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': config.user_agent,
            'Accept-Language': 'en-US,en;q=0.9',
        })

    def get(self, url: str) -> str:
        """Fetch a page and return its body decoded as UTF-8."""
        self.logger.debug(f"GET {url}")
        response = self.session.get(url, timeout=self.config.request_timeout)
        return self._text(response)

    def post_form(self, url: str, data: Dict[str, Any]) -> str:
        """POST form-encoded data (list values repeat the key) and return the body."""
        self.logger.debug(f"POST {url} action={data.get('action')}")
        response = self.session.post(
            url,
            data=data,
            headers={'X-Requested-With': 'XMLHttpRequest'},
            timeout=self.config.request_timeout,
        )
        return self._text(response)

    def close(self) -> None:
        self.session.close()

    def _text(self, response: requests.Response) -> str:
        response.raise_for_status()
        # The site omits charset in its headers; requests would fall back to latin-1
        response.encoding = 'utf-8'
        self.logger.debug(f"Received {len(response.text)} characters from {response.url} ({response.status_code})")
        return response.text
