"""Command line helpers for converting feeds and printing mappings."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rssriver.config import get_settings
from rssriver.documents import entry_to_json
from rssriver.fields import DIALECTS
from rssriver.parsing import FeedParseError, parse_feed
from rssriver.schema import schema_to_json
from rssriver.xcontent import SerializationError


def _mapping(args: argparse.Namespace) -> int:
    settings = get_settings()
    type_name = args.type_name or settings.default_type
    print(schema_to_json(type_name, args.dialect or settings.mapping_dialect, pretty=args.pretty))
    return 0


def _convert(args: argparse.Namespace) -> int:
    settings = get_settings()
    river = args.river if args.river is not None else settings.river_name
    try:
        parsed = parse_feed(args.feed.read_bytes())
        # Render everything first so a failing entry leaves no partial output.
        lines = [entry_to_json(entry, args.feedname, river, pretty=args.pretty) for entry in parsed.entries]
    except (FeedParseError, SerializationError) as exc:
        print(f"Conversion failed: {exc}", file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    return 0


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rssriver", description="Turn RSS/Atom feeds into search documents.")
    commands = parser.add_subparsers(dest="command", required=True)

    mapping = commands.add_parser("mapping", help="Print the index mapping for a document type")
    mapping.add_argument("type_name", nargs="?", default=None, help="Document type (defaults to configured type)")
    mapping.add_argument("--dialect", choices=DIALECTS, default=None, help="Mapping dialect")
    mapping.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    mapping.set_defaults(handler=_mapping)

    convert = commands.add_parser("convert", help="Convert a feed file into JSON documents, one per line")
    convert.add_argument("feed", type=Path, help="Path to an RSS/Atom document")
    convert.add_argument("--feedname", required=True, help="Feed identifier stamped on each document")
    convert.add_argument("--river", default=None, help="Optional ingestion-run tag")
    convert.add_argument("--pretty", action="store_true", help="Indent each document")
    convert.set_defaults(handler=_convert)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    sys.exit(main())
