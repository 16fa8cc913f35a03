"""Tests for ScraperConfig."""

import pytest

from dojin.config import ScraperConfig
from dojin.errors import ConfigurationError


class TestScraperConfig:
    """Test suite for ScraperConfig."""

    def test_urls_from_bare_host(self):
        config = ScraperConfig(host='catalog.example.com')

        assert config.base_url == 'http://catalog.example.com'
        assert config.homepage_url == 'http://catalog.example.com/'
        assert config.ajax_url == 'http://catalog.example.com/wp-admin/admin-ajax.php'

    def test_scheme_stripped_from_host(self):
        config = ScraperConfig(host='https://catalog.example.com/', scheme='https')

        assert config.host == 'catalog.example.com'
        assert config.base_url == 'https://catalog.example.com'

    def test_defaults(self):
        config = ScraperConfig(host='x.example')

        assert config.request_timeout == 30.0
        assert config.max_pages == 1000
        assert config.html_parser == 'lxml'

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('DOJIN_HOST', 'env.example.com')
        monkeypatch.setenv('DOJIN_TIMEOUT', '5')
        monkeypatch.setenv('DOJIN_MAX_PAGES', '0')

        config = ScraperConfig.from_env()

        assert config.host == 'env.example.com'
        assert config.request_timeout == 5.0
        assert config.max_pages == 0

    def test_from_env_explicit_host_wins(self, monkeypatch):
        monkeypatch.setenv('DOJIN_HOST', 'env.example.com')

        assert ScraperConfig.from_env('cli.example.com').host == 'cli.example.com'

    def test_from_env_bad_number(self, monkeypatch):
        monkeypatch.setenv('DOJIN_MAX_PAGES', 'many')

        with pytest.raises(ConfigurationError):
            ScraperConfig.from_env('x.example')

    def test_with_overrides_ignores_none(self):
        config = ScraperConfig(host='x.example').with_overrides(request_timeout=None, max_pages=3)

        assert config.request_timeout == 30.0
        assert config.max_pages == 3

    @pytest.mark.parametrize('kwargs', [
        {'host': ''},
        {'host': 'x.example', 'scheme': 'ftp'},
        {'host': 'x.example', 'request_timeout': 0},
        {'host': 'x.example', 'max_pages': -1},
    ])
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ConfigurationError):
            ScraperConfig(**kwargs).validate()

    def test_validate_returns_self(self):
        config = ScraperConfig(host='x.example')
        assert config.validate() is config
