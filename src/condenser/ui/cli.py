from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from condenser.app import build_cache, condense
from condenser.config import (
    ConfigurationError,
    configure_logging,
    get_caching_config,
    get_condensation_config,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--wikidata-dump",
        type=Path,
        help="Path to the Wikidata JSON dump, .gz or .bz2 (env: CONDENSER_WIKIDATA_DUMP)",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        help="Directory holding the Wikidata cache (env: CONDENSER_CACHE_DIR)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        help="Number of concurrent workers (env: CONDENSER_WORKERS, default: CPU count)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Condense Wikidata into products and organisations"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    condense_parser = subparsers.add_parser(
        "condense", help="Extract products and organisations with their certifications"
    )
    _add_common_arguments(condense_parser)
    condense_parser.add_argument(
        "--origin-dir",
        type=Path,
        help="Directory holding the certification datasets (env: CONDENSER_ORIGIN_DIR)",
    )
    condense_parser.add_argument(
        "--target-dir",
        type=Path,
        help="Directory receiving products.json and organisations.json "
        "(env: CONDENSER_TARGET_DIR)",
    )
    condense_parser.add_argument(
        "--language",
        type=str,
        help="Language code of labels and descriptions (env: CONDENSER_LANGUAGE, default: en)",
    )

    cache_parser = subparsers.add_parser(
        "cache", help="Traverse the dump once and save manufacturer and class ids"
    )
    _add_common_arguments(cache_parser)

    return parser.parse_args(list(argv))


def _build_job(args: argparse.Namespace) -> Callable[[], object]:
    if args.command == "condense":
        condensation_config = get_condensation_config(
            dump_path=args.wikidata_dump,
            origin_dir=args.origin_dir,
            cache_dir=args.cache_dir,
            target_dir=args.target_dir,
            language=args.language,
            workers=args.workers,
        )
        return partial(condense, condensation_config)
    if args.command == "cache":
        caching_config = get_caching_config(
            dump_path=args.wikidata_dump,
            cache_dir=args.cache_dir,
            workers=args.workers,
        )
        return partial(build_cache, caching_config)
    raise ConfigurationError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        job = _build_job(parsed_args)
        job()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
