"""Pytest configuration and fixtures for dojin tests."""

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from dojin.config import ScraperConfig
from dojin.scraper import DojinScraper


class StubTransport:
    """Transport double that serves canned bodies and records every call."""

    def __init__(self, homepage: str = '', responses: Optional[List[str]] = None) -> None:
        self.homepage = homepage
        self.responses = list(responses or [])
        self.get_calls: List[str] = []
        self.post_calls: List[tuple] = []
        self.closed = False

    def get(self, url: str) -> str:
        self.get_calls.append(url)
        return self.homepage

    def post_form(self, url: str, data: Dict[str, Any]) -> str:
        self.post_calls.append((url, dict(data)))
        if not self.responses:
            raise requests.ConnectionError(f"No response queued for POST #{len(self.post_calls)} to {url}")
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


def album_node(album_id: int, title: str = None, genres: str = '', artists: str = '',
               link: str = None, broken: bool = False, cover: str = None) -> str:
    """Markup for one album as the AJAX endpoint renders it."""
    title = title if title is not None else f"Album {album_id}"
    link = link if link is not None else f"https://files.example.com/{album_id}.zip"
    cover = cover if cover is not None else f"https://img.example.com/{album_id}.jpg"
    overlay = '<div class="broken_album_overlay"><span class="broken_album_overlay-text">Please Fix</span></div>' if broken else ''
    return f'''
    <div class="music" postid="{album_id}">
        <div class="album-container">
            <img src="{cover}"/>
            {overlay}
        </div>
        <div class="cellInformation">
            <div class="cellInformation_edit_title">{title}</div>
            <div class="cellInformation_edit_artist">{artists}</div>
            <div class="cellInformation_edit_style">{genres}</div>
            <div class="cellInformation_edit_download">{link}</div>
        </div>
    </div>
    '''


def album_fragment(nodes: List[str]) -> str:
    return '<div class="albums">' + ''.join(nodes) + '</div>'


def ajax_body(album_ids: List[int], array_set: Optional[List[int]] = None, field: str = 'album') -> str:
    """JSON body for one AJAX page holding plain albums with the given IDs."""
    payload: Dict[str, Any] = {field: album_fragment([album_node(i) for i in album_ids])}
    if array_set is not None:
        payload['arraySet'] = array_set
    return json.dumps(payload)


HOMEPAGE_HTML = '''
<html>
<head><title>Dojin Catalog</title></head>
<body>
    <div id="sidebar">
        <div class="tag-list artists">
            <div type="m_artist" value="7">Circle A</div>
            <div type="m_artist" value="8"> Circle B </div>
            <div type="m_artist" value="9">Another Circle</div>
        </div>
        <div class="tag-list styles">
            <div type="m_style" value="1">Arrange</div>
            <div type="m_style" value="2">Vocal</div>
            <div type="m_style" value="3">Rock</div>
        </div>
    </div>
    <ol class="commentlist snap_preview">
        <li><div class="comment_message"><p><a href="/?p=123">#123</a> has been editted.</p></div></li>
        <li><div class="comment_message"><p><a href="/?p=456">#456</a> is broken.</p></div></li>
        <li><div class="comment_message"><p>Thanks for the upload!</p></div></li>
        <li><div class="comment_message"><p><a href="/?p=789">#789</a> looks great.</p></div></li>
        <li><div class="comment_message"><p><a href="/?p=123">#123</a> is broken.</p></div></li>
    </ol>
</body>
</html>
'''


@pytest.fixture
def homepage_html():
    """Sample homepage with tag listings and a comment feed."""
    return HOMEPAGE_HTML


@pytest.fixture
def transport(homepage_html):
    """Stub transport serving the sample homepage; tests queue AJAX responses."""
    return StubTransport(homepage=homepage_html)


@pytest.fixture
def config():
    """Scraper configuration for tests."""
    return ScraperConfig(host='catalog.example.com')


@pytest.fixture
def scraper(config, transport):
    """Scraper wired to the stub transport."""
    return DojinScraper(config, transport=transport)
