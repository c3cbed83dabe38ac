"""Command line front end for pyquotes.

Usage
-----
::

    pyquotes random [--category Books]
    pyquotes add "Stay hungry, stay foolish." Motivation
    pyquotes list [--category Books]
    pyquotes categories
    pyquotes export [--output quotes.json]
    pyquotes import quotes.json
    pyquotes sync

State is kept in a JSON file (``--storage``, ``QUOTES_STORAGE_PATH`` or
``~/.pyquotes.json``).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from pyquotes.client import QuoteClient
from pyquotes.config import QuoteConfig
from pyquotes.exceptions import QuoteConfigError, QuoteImportFormatError, QuoteValidationError
from pyquotes.models.quote import Quote
from pyquotes.models.sync import SyncStatus
from pyquotes.storage.backends import JsonFileBlobStore

_DEFAULT_STORAGE = "~/.pyquotes.json"


def _format_quote(quote: Quote) -> str:
    return f'"{quote.text}"\n  Category: {quote.category}'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pyquotes", description="Quote generator with server sync")
    parser.add_argument("--storage", help="JSON file used for persistent state")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    random_cmd = sub.add_parser("random", help="Show a random quote")
    random_cmd.add_argument("--category", help="Only pick from this category")

    add_cmd = sub.add_parser("add", help="Add a quote")
    add_cmd.add_argument("text")
    add_cmd.add_argument("category")

    list_cmd = sub.add_parser("list", help="List quotes")
    list_cmd.add_argument("--category", help="Only list this category")

    sub.add_parser("categories", help="List filter options")

    export_cmd = sub.add_parser("export", help="Export quotes as JSON")
    export_cmd.add_argument("--output", "-o", help="Write to FILE instead of stdout")

    import_cmd = sub.add_parser("import", help="Import quotes from a JSON file")
    import_cmd.add_argument("file")

    sub.add_parser("sync", help="Sync with the server now")
    return parser


async def run(args: argparse.Namespace) -> int:
    storage = args.storage or os.environ.get("QUOTES_STORAGE_PATH") or _DEFAULT_STORAGE
    config = QuoteConfig.from_env(auto_sync=False, storage_path=storage)

    async with QuoteClient(config, blob_store=JsonFileBlobStore(storage)) as client:
        if args.command == "random":
            quote = client.show_random_quote(args.category)
            print(_format_quote(quote) if quote is not None else "No quotes available.")
            return 0

        if args.command == "add":
            try:
                quote = client.add_quote(args.text, args.category)
            except QuoteValidationError as exc:
                print(f"Please enter both a quote and a category ({exc}).", file=sys.stderr)
                return 1
            print(_format_quote(quote))
            return 0

        if args.command == "list":
            quotes = client.filter_quotes(args.category) if args.category else client.quotes()
            for quote in quotes:
                print(_format_quote(quote))
            return 0

        if args.command == "categories":
            print("\n".join(client.categories()))
            return 0

        if args.command == "export":
            payload = client.export_collection()
            if args.output:
                Path(args.output).write_text(payload, encoding="utf-8")
                print(f"JSON written to {args.output}", file=sys.stderr)
            else:
                print(payload)
            return 0

        if args.command == "import":
            try:
                count = client.import_collection(Path(args.file).read_bytes())
            except QuoteImportFormatError as exc:
                print(f"Failed to import quotes: {exc}", file=sys.stderr)
                return 1
            print(f"Imported {count} quote(s).")
            return 0

        if args.command == "sync":
            outcome = await client.sync_now()
            print(f"[{outcome.message.kind}] {outcome.message.text}")
            for conflict in outcome.conflicts:
                print(f"  id={conflict.id}: {conflict.local.text!r} -> {conflict.server.text!r}")
            return 2 if outcome.status == SyncStatus.FAILED else 0

    return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        return asyncio.run(run(args))
    except QuoteConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
