"""Command-line interface: clone all content types, entries and assets of a space."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .clone import (
    DEFAULT_ENVIRONMENT_ID,
    DEFAULT_PAGE_SIZE,
    SPACE_CREATE_DELAY_SECONDS,
    CloneResult,
    SpaceCloner,
)
from .core.client import DEFAULT_HOST, ContentfulClient
from .core.config import ACCESS_TOKEN_ENV
from .core.errors import ContentfulClientError
from .core.logging import setup_logging

log = logging.getLogger("contentful_cma.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contentful-clone-space",
        description=(
            "Clone all Content Types and Entries of a Space to another Space."
        ),
    )
    parser.add_argument(
        "--access-token",
        default=os.getenv(ACCESS_TOKEN_ENV),
        help=f"Contentful Management API Access Token (default: ${ACCESS_TOKEN_ENV})",
    )
    parser.add_argument(
        "--destination-access-token",
        help=(
            "Access token of destination Space if different from source. "
            "Defaults to value of --access-token."
        ),
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Contentful Management API Hostname (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--destination-host",
        help="Host of destination API. Defaults to value of --host.",
    )
    parser.add_argument(
        "--source-space-id",
        required=True,
        help="ID of Space you want to clone from",
    )
    parser.add_argument(
        "--destination-space-id",
        help="ID of Space you want to clone to. Space will be created if not specified.",
    )
    parser.add_argument(
        "--destination-organization-id",
        help=(
            "ID of Organization the destination Space should be created in. "
            "Only required if --destination-space-id is not given and your user "
            "is in multiple organizations."
        ),
    )
    parser.add_argument(
        "--environment-id",
        default=DEFAULT_ENVIRONMENT_ID,
        help=f"Environment to read from and write to (default: {DEFAULT_ENVIRONMENT_ID})",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Entries/assets fetched per request (default: {DEFAULT_PAGE_SIZE})",
    )
    parser.add_argument(
        "--space-create-delay",
        type=float,
        default=SPACE_CREATE_DELAY_SECONDS,
        help="Seconds to wait after creating the destination Space (default: 5)",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.access_token:
        parser.error(f"--access-token is required (or set {ACCESS_TOKEN_ENV})")
    args.destination_access_token = args.destination_access_token or args.access_token
    args.destination_host = args.destination_host or args.host
    for option, host in (("--host", args.host), ("--destination-host", args.destination_host)):
        if not host.strip():
            parser.error(f"{option} must not be blank")
    return args


async def run(args: argparse.Namespace) -> CloneResult:
    source = ContentfulClient(access_token=args.access_token, host=args.host)
    destination = ContentfulClient(
        access_token=args.destination_access_token, host=args.destination_host
    )
    async with source, destination:
        cloner = SpaceCloner(
            source,
            destination,
            environment_id=args.environment_id,
            page_size=args.page_size,
            space_create_delay=args.space_create_delay,
        )
        return await cloner.clone(
            args.source_space_id,
            destination_space_id=args.destination_space_id,
            destination_organization_id=args.destination_organization_id,
        )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        result = asyncio.run(run(args))
    except ContentfulClientError as exc:
        log.error("Clone failed: %s", exc)
        return 1

    log.info(
        "Cloned %d content types, %d entries, %d assets into %s",
        result.content_types,
        result.entries,
        result.assets,
        result.destination_space_id,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
