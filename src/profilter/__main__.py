"""Command line entry point: ``profilter [mode] [filters] <username>``."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from profilter.application.services import AggregationService, format_rank
from profilter.config import Settings, get_settings
from profilter.domain.dtos import Mode
from profilter.domain.exceptions import ConfigurationError, DomainException
from profilter.domain.filters import Filter
from profilter.infrastructure.integrations import SpotifyClient
from profilter.infrastructure.observability import configure_logging, set_correlation_id

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="profilter",
        description="Lookup the top albums or artists in a spotify user's public playlists.",
        epilog="The Spotify bearer token is read from the API_KEY environment variable.",
    )
    ap.add_argument("username", nargs="?", default=None, help="Spotify user id")

    # Modes (last one wins)
    modes = ap.add_argument_group("modes")
    modes.add_argument("-a", "--albums", dest="mode", action="store_const", const=Mode.ALBUMS,
                       help="View the user's top albums")
    modes.add_argument("-A", "--artists", dest="mode", action="store_const", const=Mode.ARTISTS,
                       help="View the user's top artists (default)")
    modes.add_argument("-t", "--tracks", dest="mode", action="store_const", const=Mode.TRACKS,
                       help="View the user's top tracks")
    modes.add_argument("-r", "--raw", dest="mode", action="store_const", const=Mode.RAW,
                       help="View the raw JSON profile")
    ap.set_defaults(mode=Mode.ARTISTS)

    # Filters (repeatable, all must match)
    filters = ap.add_argument_group("filters")
    filters.add_argument("-fa", "--filter-artist", dest="filters", action="append",
                         type=Filter.artist_name, metavar="ARTIST",
                         help="Filter by artist name (every credited artist must match)")
    filters.add_argument("-fA", "--filter-album", dest="filters", action="append",
                         type=Filter.album_name, metavar="ALBUM",
                         help="Filter by album name")

    # Output
    output = ap.add_argument_group("output")
    output.add_argument("--descending", action="store_true",
                        help="List the most frequent entries first")
    output.add_argument("--limit", type=_positive_int, default=None,
                        help="Only show the N most frequent entries")
    output.add_argument("--log-level", default=None,
                        help="Log level (overrides PROFILTER_LOG_LEVEL)")
    output.add_argument("--log-json", action="store_true", default=None,
                        help="Emit JSON log lines on stderr")
    return ap


def load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


async def run(args: argparse.Namespace, settings: Settings) -> str:
    """Look the user up and return what should be printed on stdout."""
    if not args.username:
        raise ConfigurationError("You must provide a username")

    async with SpotifyClient(settings) as client:
        service = AggregationService(client)
        logger.info(f"Looking up {args.username}...")

        if args.mode is Mode.RAW:
            user = await service.fetch_raw_profile(args.username)
            return json.dumps(user, indent=2, ensure_ascii=False)

        profile = await service.aggregate(args.username, args.filters or [])
        return format_rank(
            profile.table(args.mode),
            descending=args.descending,
            limit=args.limit,
        )


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(e.message)
        return EXIT_USAGE

    configure_logging(
        log_level=args.log_level or settings.log_level,
        json_format=settings.log_json if args.log_json is None else args.log_json,
    )
    set_correlation_id()

    try:
        output = asyncio.run(run(args, settings))
    except ConfigurationError as e:
        logger.error(e.message)
        ap.print_usage(sys.stderr)
        return EXIT_USAGE
    except DomainException as e:
        logger.error(e.message, exc_info=logger.isEnabledFor(logging.DEBUG))
        return EXIT_FAILURE

    if output:
        print(output)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
