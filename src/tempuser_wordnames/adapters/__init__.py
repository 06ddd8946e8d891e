"""Interface adapters: MediaWiki page fetcher, web API."""

from .mediawiki import MediaWikiPageFetcher
from .web import app, set_serial_mapping

__all__ = [
    # MediaWiki
    "MediaWikiPageFetcher",
    # Web
    "app",
    "set_serial_mapping",
]
