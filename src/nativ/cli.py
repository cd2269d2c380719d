# SPDX-License-Identifier: Apache-2.0
"""
Nativ - CLI Tool

Command-line access to the Nativ localization API. Results are printed
as JSON.

Usage:
    nativ [options] <command> [command options]

Examples:
    nativ translate "Hello world" --to French
    nativ translate "Sign up" --to French --to-code fr --formality formal
    nativ search-tm "Sign up" --target fr --min-score 70
    nativ inspect-image banner.jpg --countries JP,CN
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import aiohttp

from nativ.client import Nativ
from nativ.errors import NativError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:]).

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="nativ",
        description="Nativ localization API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s translate "Hello world" --to French
  %(prog)s translate "Sign up" --to French --formality formal
  %(prog)s extract-text screenshot.png
  %(prog)s search-tm "Sign up" --target fr --min-score 70
  %(prog)s languages

Environment Variables:
  NATIV_API_KEY    Nativ API key (required unless --api-key is given)
  NATIV_API_URL    API root (default: https://api.usenativ.com)
""",
    )

    parser.add_argument(
        "--api-key",
        help="Nativ API key (or set NATIV_API_KEY)",
    )
    parser.add_argument(
        "--base-url",
        help="API root URL (or set NATIV_API_URL)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: 120)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # translate
    translate = subparsers.add_parser("translate", help="Translate text")
    translate.add_argument("text", help="Text to translate")
    translate.add_argument(
        "-t",
        "--to",
        dest="target_language",
        required=True,
        help="Target language name (e.g. French)",
    )
    translate.add_argument("--to-code", dest="target_language_code", help="Target language code")
    translate.add_argument(
        "-s",
        "--from",
        dest="source_language",
        default="English",
        help="Source language name (default: English)",
    )
    translate.add_argument(
        "--from-code",
        dest="source_language_code",
        default="en",
        help="Source language code (default: en)",
    )
    translate.add_argument("--context", help="Context for the translation")
    translate.add_argument("--glossary", help="Glossary terms to enforce")
    translate.add_argument("--formality", help="Formality level (e.g. formal)")
    translate.add_argument("--max-characters", type=int, help="Maximum output length")
    translate.add_argument(
        "--backtranslate",
        action="store_true",
        help="Also return a back-translation",
    )

    # extract-text
    extract = subparsers.add_parser("extract-text", help="Extract text from an image (OCR)")
    extract.add_argument("image", type=Path, help="Image file")

    # inspect-image
    inspect = subparsers.add_parser(
        "inspect-image", help="Check an image for cultural sensitivity issues"
    )
    inspect.add_argument("image", type=Path, help="Image file")
    inspect.add_argument(
        "--countries",
        metavar="COUNTRIES",
        help="Comma-separated countries to check",
    )

    # languages
    subparsers.add_parser("languages", help="List workspace languages")

    # search-tm
    search = subparsers.add_parser("search-tm", help="Fuzzy-search the translation memory")
    search.add_argument("query", help="Text to search for")
    search.add_argument("--source", default="en", help="Source language code (default: en)")
    search.add_argument("--target", help="Target language code")
    search.add_argument("--min-score", type=float, default=0, help="Minimum score 0-100 (default: 0)")
    search.add_argument("--limit", type=int, default=10, help="Maximum matches (default: 10)")

    # tm-stats
    subparsers.add_parser("tm-stats", help="Show translation memory statistics")

    # brand-voice
    subparsers.add_parser("brand-voice", help="Show the brand voice prompt")

    return parser.parse_args(argv)


def split_countries(value: str | None) -> list[str] | None:
    """Split a comma-separated country list.

    Args:
        value: Raw option value.

    Returns:
        List of country names, or None if none were given.
    """
    if not value:
        return None
    countries = [c.strip() for c in value.split(",") if c.strip()]
    return countries or None


def to_jsonable(result: Any) -> Any:
    """Convert results (or lists of results) for json.dumps."""
    if isinstance(result, list):
        return [to_jsonable(item) for item in result]
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return result


async def execute(client: Nativ, args: argparse.Namespace) -> Any:
    """Dispatch a parsed command to the client.

    Args:
        client: Nativ client.
        args: Command line arguments.

    Returns:
        Operation result.
    """
    if args.command == "translate":
        return await client.translate(
            args.text,
            args.target_language,
            target_language_code=args.target_language_code,
            source_language=args.source_language,
            source_language_code=args.source_language_code,
            context=args.context,
            glossary=args.glossary,
            formality=args.formality,
            max_characters=args.max_characters,
            backtranslate=args.backtranslate,
        )
    elif args.command == "extract-text":
        return await client.extract_text(args.image)
    elif args.command == "inspect-image":
        return await client.inspect_image(
            args.image, countries=split_countries(args.countries)
        )
    elif args.command == "languages":
        return await client.get_languages()
    elif args.command == "search-tm":
        return await client.search_tm(
            args.query,
            source_language_code=args.source,
            target_language_code=args.target,
            min_score=args.min_score,
            limit=args.limit,
        )
    elif args.command == "tm-stats":
        return await client.get_tm_stats()
    elif args.command == "brand-voice":
        return await client.get_brand_voice()
    raise ValueError(f"Unknown command: {args.command}")


async def run(args: argparse.Namespace) -> int:
    """Execute the selected command.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    try:
        client = Nativ(args.api_key, base_url=args.base_url, timeout=args.timeout)
    except (NativError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with client:
        try:
            result = await execute(client, args)
        except NativError as e:
            status = f" (HTTP {e.status_code})" if e.status_code else ""
            print(f"Error: {e}{status}", file=sys.stderr)
            return 1
        except (OSError, asyncio.TimeoutError, aiohttp.ClientError) as e:
            print(f"Error: {e}", file=sys.stderr)
            if args.verbose:
                logger.exception("Request failed")
            return 1

    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
