"""Command-line entry point: fetch entries from a Contentful space and print them as JSON."""

import argparse
import asyncio
import json
import logging
import os

from contentful_cda import ClientParameters, TransportError, create_client


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch entries from the Contentful Content Delivery API.",
    )
    parser.add_argument("--content-type", help="Restrict entries to this content type ID.")
    parser.add_argument("--limit", type=int, default=10, help="Maximum number of entries (default: 10).")
    return parser


async def fetch_entries(params: ClientParameters, content_type: str | None, limit: int) -> dict:
    query: dict[str, object] = {"limit": limit}
    if content_type:
        query["content_type"] = content_type
    async with create_client(params) as client:
        return await client.get_entries(query)


def main() -> None:
    """Load configuration from the environment and print one page of entries."""
    _configure_logging()
    logger = logging.getLogger("contentful-cda")
    args = build_parser().parse_args()
    params = ClientParameters.load()

    try:
        entries = asyncio.run(fetch_entries(params, args.content_type, args.limit))
    except TransportError:
        logger.exception("Fetching entries failed.")
        raise SystemExit(1)
    print(json.dumps(entries, indent=2))


if __name__ == "__main__":
    main()
