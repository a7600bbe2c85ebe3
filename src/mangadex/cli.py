"""CLI for browsing the MangaDex catalogue through the extension."""

import argparse
import sys

import requests

from common.logger import error, get_logger, print_json, setup_logging, warning

from .clients.base import MangaDexError
from .extension import MangaDexExtension, get_extension

logger = get_logger(__name__)


def _parse_order(value: str) -> dict[str, str]:
    """Parse 'field:direction' into a sort order."""
    field, _, direction = value.partition(":")
    direction = direction or "desc"
    if not field or direction not in ("asc", "desc"):
        raise argparse.ArgumentTypeError(f"expected FIELD[:asc|desc], got '{value}'")
    return {field: direction}


def cmd_search(extension: MangaDexExtension, args) -> None:
    """Search manga by title."""
    results = extension.search(
        args.query,
        limit=args.limit,
        mature_content=not args.safe,
        order=args.order,
    )
    if not results:
        warning(f"No manga found for '{args.query}'")
    print_json(results)


def cmd_explore(extension: MangaDexExtension, args) -> None:
    """Show the latest and most followed manga."""
    print_json(extension.explorer(limit=args.limit, mature_content=not args.safe))


def cmd_info(extension: MangaDexExtension, args) -> None:
    """Show a manga's details."""
    manga = extension.informations(args.manga_id)
    if manga is None:
        warning(f"Manga {args.manga_id} not found")
    print_json(manga)


def cmd_chapters(extension: MangaDexExtension, args) -> None:
    """List one page of a manga's chapters."""
    print_json(
        extension.chapters(args.manga_id, language=args.language, page=args.page, limit=args.limit)
    )


def cmd_reader(extension: MangaDexExtension, args) -> None:
    """List the page image URLs of a chapter."""
    pages = extension.reader(args.chapter_id, data_saver=args.data_saver)
    if not pages:
        warning(f"No pages available for chapter {args.chapter_id}")
    print_json(pages)


COMMANDS = {
    "search": cmd_search,
    "explore": cmd_explore,
    "info": cmd_info,
    "chapters": cmd_chapters,
    "reader": cmd_reader,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mangadex",
        description="Browse the MangaDex catalogue",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    search_parser = subparsers.add_parser(
        "search",
        help="Search manga by title",
        description=(
            "Search manga by title.\n\n"
            "Examples:\n"
            "  mangadex search 'one piece'\n"
            "  mangadex search frieren --limit 3 --safe\n"
            "  mangadex search '' --order followedCount:desc\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    search_parser.add_argument("query", help="Title to search for")
    search_parser.add_argument("--limit", type=int, default=10, help="Maximum results (default: 10)")
    search_parser.add_argument(
        "--safe", action="store_true", help="Only include 'safe' and 'suggestive' titles"
    )
    search_parser.add_argument(
        "--order",
        type=_parse_order,
        default=None,
        help="Sort as FIELD[:asc|desc] (default: relevance:desc)",
    )

    explore_parser = subparsers.add_parser("explore", help="Show latest and most followed manga")
    explore_parser.add_argument("--limit", type=int, default=10, help="Manga per category (default: 10)")
    explore_parser.add_argument(
        "--safe", action="store_true", help="Only include 'safe' and 'suggestive' titles"
    )

    info_parser = subparsers.add_parser("info", help="Show a manga's details")
    info_parser.add_argument("manga_id", help="Manga UUID")

    chapters_parser = subparsers.add_parser("chapters", help="List a manga's chapters")
    chapters_parser.add_argument("manga_id", help="Manga UUID")
    chapters_parser.add_argument("--language", default="en", help="Translated language (default: en)")
    chapters_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    chapters_parser.add_argument("--limit", type=int, default=100, help="Chapters per page (default: 100)")

    reader_parser = subparsers.add_parser("reader", help="List a chapter's page image URLs")
    reader_parser.add_argument("chapter_id", help="Chapter UUID")
    reader_parser.add_argument(
        "--data-saver", action="store_true", help="Use compressed data-saver images"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the mangadex CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(level=args.log_level)

    with get_extension() as extension:
        try:
            COMMANDS[args.command](extension, args)
        except (MangaDexError, requests.exceptions.RequestException, ValueError) as e:
            logger.debug("Command failed", exc_info=True)
            error(str(e))
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
