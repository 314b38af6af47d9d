"""Command-line entry point for SERP Search Hub."""

import argparse
import asyncio
import os
import sys

from .config import get_settings
from .search import SerpSearch
from .utils.errors import SearchError
from .utils.logging import configure_logging


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Search Serper and print aggregated results as JSON"
    )
    parser.add_argument("query", help="Query text, or a prompt with --extensive")
    parser.add_argument(
        "--extensive",
        action="store_true",
        help="Expand the prompt into several queries before searching",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    parser.add_argument("--api-key", help="Serper API key (overrides SERP_API_KEY)")
    parser.add_argument(
        "--num-results", type=int, help="Results requested per query"
    )
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    return parser.parse_args(argv)


async def run(query: str, extensive: bool = False) -> str:
    """Run one search with settings from the environment."""
    async with SerpSearch() as searcher:
        if extensive:
            return await searcher.extensive_search(query)
        return await searcher.simple_search(query)


def main(argv=None) -> int:
    """Run a search and print its JSON envelope."""
    args = parse_args(argv)

    # Set environment variables based on command-line arguments if provided
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    if args.api_key:
        os.environ["SERP_API_KEY"] = args.api_key
    if args.num_results is not None:
        os.environ["SERPER__NUM_RESULTS"] = str(args.num_results)
    if args.timeout is not None:
        os.environ["SERPER__TIMEOUT"] = str(args.timeout)

    # Pick up the overrides above
    get_settings.cache_clear()
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # stdout carries the JSON output
    configure_logging(settings.log_level, stream=sys.stderr)

    try:
        output = asyncio.run(run(args.query, extensive=args.extensive))
    except SearchError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
