"""Conversion of raw syndication feeds into typed feed entries."""

from .service import FeedParseError, entry_from_feedparser, parse_feed

__all__ = ["FeedParseError", "entry_from_feedparser", "parse_feed"]
