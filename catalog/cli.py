#!/usr/bin/env python3
"""
Command line interface for the topic catalog.

Commands:
    validate    Load every article, build the catalog and print a summary
    categories  Print category names
    list        Print the articles of one category
    show        Print one article (reads only that file)
    export      Write a JSON snapshot of the catalog
    serve       Run the HTTP API

Usage:
    python -m catalog validate
    python -m catalog list git
    python -m catalog show git rebase --raw
    python -m catalog export --output output/catalog.json
    python -m catalog --content-dir docs/ serve --port 8800
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from retrieval import QueryService

from . import config
from .article_store import ArticleStore
from .errors import CatalogError, NotFound


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="topic-catalog",
        description="Browse a directory of categorized markdown articles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Check that every article loads and has a title
    topic-catalog validate

    # List the articles of a category
    topic-catalog list python

    # Print an article's raw markdown
    topic-catalog show git rebase --raw

    # Serve the HTTP API
    topic-catalog serve --port 8800
        """
    )

    parser.add_argument(
        "--content-dir",
        type=Path,
        default=config.CONTENT_DIR,
        help=f"Content directory, one folder per category (default: {config.CONTENT_DIR})"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=config.LOAD_WORKERS,
        help=f"Parallel file reads during loading (default: {config.LOAD_WORKERS})"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("validate", help="Build the catalog and print a summary")
    subparsers.add_parser("categories", help="Print category names")

    list_parser = subparsers.add_parser("list", help="Print the articles of a category")
    list_parser.add_argument("category")

    show_parser = subparsers.add_parser("show", help="Print one article")
    show_parser.add_argument("category")
    show_parser.add_argument("slug")
    show_parser.add_argument(
        "--raw",
        action="store_true",
        help="Print only the raw markdown content"
    )

    export_parser = subparsers.add_parser("export", help="Write a JSON snapshot of the catalog")
    export_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=config.DEFAULT_HOST)
    serve_parser.add_argument("--port", type=int, default=config.DEFAULT_PORT)
    serve_parser.add_argument("--reload", action="store_true")

    return parser


def cmd_validate(args: argparse.Namespace, service: QueryService) -> int:
    print("\n" + "=" * 70)
    print("Topic Catalog")
    print("=" * 70)
    print(f"Content: {args.content_dir}")

    stats = service.stats()

    print(f"\n✓ {stats['total_articles']} articles in {stats['total_categories']} categories")
    for category in sorted(service.list_categories()):
        entries = service.list_articles(category)
        print(f"\n{category} ({len(entries)})")
        for entry in entries:
            print(f"  • {entry.title} (slug: {entry.slug})")
            if args.verbose and entry.description:
                print(f"      {entry.description}")

    print("\n" + "=" * 70 + "\n")
    return 0


def cmd_categories(args: argparse.Namespace, service: QueryService) -> int:
    for category in sorted(service.list_categories()):
        print(category)
    return 0


def cmd_list(args: argparse.Namespace, service: QueryService) -> int:
    for entry in service.list_articles(args.category):
        print(f"{entry.slug}\t{entry.title}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    # Reads only the requested file, without building the catalog
    store = ArticleStore(args.content_dir)
    article = store.get(args.category, args.slug)

    if args.raw:
        sys.stdout.write(article.raw_content)
        return 0

    print(f"Title:       {article.title}")
    print(f"Category:    {article.category}")
    print(f"Slug:        {article.slug}")
    print(f"Description: {article.description or '(none)'}")
    print("Sections:")
    for section in article.sections:
        print(f"  {'  ' * (section.level - 1)}{section.text}")
    print("\n" + "-" * 70)
    print(article.raw_content)
    return 0


def cmd_export(args: argparse.Namespace, service: QueryService) -> int:
    if args.output:
        service.index.save(args.output)
        print(f"✓ Wrote {service.index.total_articles} articles to {args.output}")
    else:
        print(json.dumps(service.index.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from backend.app import run_server

    # The server factory reads configuration; the environment also reaches
    # the worker process uvicorn spawns with --reload.
    os.environ["CATALOG_CONTENT_DIR"] = str(args.content_dir)
    os.environ["CATALOG_LOAD_WORKERS"] = str(args.workers)
    config.CONTENT_DIR = args.content_dir
    config.LOAD_WORKERS = args.workers
    run_server(host=args.host, port=args.port, reload=args.reload)
    return 0


# Commands that query the built catalog through one QueryService
CATALOG_COMMANDS = {
    "validate": cmd_validate,
    "categories": cmd_categories,
    "list": cmd_list,
    "export": cmd_export,
}

COMMANDS = {
    "show": cmd_show,
    "serve": cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    try:
        if args.command in CATALOG_COMMANDS:
            service = QueryService.from_directory(args.content_dir, max_workers=args.workers)
            return CATALOG_COMMANDS[args.command](args, service)
        return COMMANDS[args.command](args)
    except NotFound as exc:
        print(f"✗ Not found: {exc}", file=sys.stderr)
        return 1
    except CatalogError as exc:
        print(f"✗ Catalog error: {exc}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"✗ Error reading content: {exc}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
