#!/usr/bin/env python3
"""Command-line interface for the dojin catalog scraper.

Prints artists, genres, albums or recent changes from a catalog site as
JSON on stdout.
"""

import argparse
import json
import logging
import re
import sys
from typing import Any, List, Optional

import requests

from dojin import __version__
from dojin.config import ScraperConfig
from dojin.errors import DojinError
from dojin.scraper import DojinScraper


def setup_logging(debug: bool = False):
    """Configure logging for CLI."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Read artists, genres, albums and changes from a dojin catalog site',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --host example.com artists
  %(prog)s albums-by "Some Circle"
  %(prog)s albums-by --regex "^some"
  %(prog)s newest --page 2
  %(prog)s search touhou arrange
  %(prog)s from-ids 101 102 103

Environment Variables:
  DOJIN_HOST       Catalog host (used when --host is not given)
  DOJIN_TIMEOUT    Request timeout in seconds
  DOJIN_MAX_PAGES  Maximum AJAX pages per album query (0 = unlimited)
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--host',
        help='Catalog host or URL (default: from DOJIN_HOST env var)'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        help='Request timeout in seconds (default: 30)'
    )

    parser.add_argument(
        '--max-pages',
        type=int,
        help='Maximum AJAX pages per album query, 0 for no limit (default: 1000)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('artists', help='List all artists')
    commands.add_parser('genres', help='List all genres')
    commands.add_parser('changes', help='List recent edits and broken links')

    albums_by = commands.add_parser('albums-by', help='Albums by an artist ID, name or pattern')
    albums_by.add_argument('artist', help='Artist ID, exact name, or pattern with --regex')
    albums_by.add_argument(
        '--regex',
        action='store_true',
        help='Treat ARTIST as a regular expression; the first matching artist is used'
    )

    newest = commands.add_parser('newest', help='Most recently added albums')
    newest.add_argument('--page', type=int, default=0, help='Page number, 25 albums per page (default: 0)')

    search = commands.add_parser('search', help='Free-text album search')
    search.add_argument('terms', nargs='+', help='Search terms')

    from_ids = commands.add_parser('from-ids', help='Albums by album ID')
    from_ids.add_argument('ids', nargs='+', type=int, help='Album IDs')

    return parser.parse_args(argv)


def create_config_from_args(args) -> ScraperConfig:
    """Create ScraperConfig from command-line arguments and environment variables."""
    return ScraperConfig.from_env(args.host).with_overrides(
        request_timeout=args.timeout,
        max_pages=args.max_pages,
    )


def run_command(scraper: DojinScraper, args) -> Any:
    """Run the selected subcommand and return JSON-serializable output (None for no result)."""
    if args.command == 'artists':
        return [{'name': a.name, 'id': a.id} for a in scraper.artists()]
    if args.command == 'genres':
        return [{'name': g.name, 'id': g.id} for g in scraper.genres()]
    if args.command == 'changes':
        return [change.to_dict() for change in scraper.changes()]

    if args.command == 'albums-by':
        if args.regex:
            query = re.compile(args.artist)
        elif args.artist.isdigit():
            query = int(args.artist)
        else:
            query = args.artist
        albums = scraper.albums_by_artist(query)
    elif args.command == 'newest':
        albums = scraper.newest(args.page)
    elif args.command == 'search':
        albums = scraper.search(args.terms)
    else:  # from-ids
        albums = scraper.albums_from_ids(args.ids)

    if albums is None:
        return None
    return [album.to_dict() for album in albums]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    try:
        config = create_config_from_args(args).validate()
    except DojinError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with DojinScraper(config) as scraper:
            output = run_command(scraper, args)
    except re.error as e:
        print(f"Error: invalid pattern: {e}", file=sys.stderr)
        return 1
    except (DojinError, requests.RequestException) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if output is None:
        print("No result", file=sys.stderr)
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
