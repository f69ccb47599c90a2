#!/usr/bin/env python3
"""
Match sync command line entry point.

Subcommands:
  sync            fetch all grades, export, diff against the snapshot (default)
  ensure-headers  install RUNS / LOG / CHANGES headers in the store
  check-store     verify the configured store is reachable
  inspect URL     print a JSON endpoint's top-level keys and a preview
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console

from configurations import (
    EnvironmentVariables,
    PipelineConfig,
    ResultsVaultConfig,
    RetryConfig,
    TelegramConfig,
    get_config,
)
from exceptions import ConfigurationError, FetchError, TabularStoreError
from logger import setup_session_logger
from notifications import TelegramNotifier
from pipelines import check_store, ensure_headers, inspect_endpoint, sync_matches

console = Console()
logger = logging.getLogger("match_sync")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ResultsVault match sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sync --environment production
  %(prog)s ensure-headers
  %(prog)s inspect "https://api.resultsvault.co.uk/rv/134453/grades/?apiid=1002"
        """,
    )
    parser.add_argument(
        "--environment",
        default="development",
        choices=["development", "testing", "production"],
        help="Configuration environment",
    )
    parser.add_argument("--env-file", default=".env", help="Path of the .env file")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="More console output"
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("sync", help="Run one complete match sync (default)")
    subparsers.add_parser("ensure-headers", help="Install bookkeeping headers")
    subparsers.add_parser("check-store", help="Verify store access")
    inspect_parser = subparsers.add_parser("inspect", help="Inspect a JSON endpoint")
    inspect_parser.add_argument("url", help="Endpoint to fetch")
    inspect_parser.add_argument(
        "--length", type=int, default=1000, help="Preview length in characters"
    )
    return parser


def _load_config(args) -> PipelineConfig:
    if args.command == "inspect":
        # inspect needs no endpoints or snapshot settings
        try:
            return PipelineConfig(
                resultsvault=ResultsVaultConfig.from_env(), retry=RetryConfig.from_env()
            )
        except ValueError as error:
            raise ConfigurationError(str(error)) from error
    # .env was loaded by main
    return get_config(args.environment, env_file=None)


def _notify_fatal(telegram: TelegramConfig, message: str) -> None:
    TelegramNotifier(telegram).notify(f"Fatal error: {message}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    args.command = args.command or "sync"

    EnvironmentVariables(env_file_path=args.env_file).load()
    # alerts must work even when the rest of the configuration is invalid
    telegram = TelegramConfig.from_env()

    try:
        config = _load_config(args)
    except ConfigurationError as error:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Configuration error: %s", error)
        _notify_fatal(telegram, str(error))
        return 1

    level = "DEBUG" if args.verbose else config.log_level
    setup_session_logger("match_sync", config.log_dir, level)
    logger.info("Configuration: %s", config.get_summary())

    try:
        if args.command == "sync":
            summary = sync_matches(config=config)
            console.print(
                f"[bold green]Run {summary.run_id} finished:[/] "
                f"{summary.grade_count} grades, {summary.match_count} matches, "
                f"{summary.errors} errors"
            )
        elif args.command == "ensure-headers":
            written = ensure_headers(config)
            console.print(f"Headers written: {', '.join(written) or 'none needed'}")
        elif args.command == "check-store":
            console.print_json(data=check_store(config))
        elif args.command == "inspect":
            result = inspect_endpoint(args.url, config, preview_length=args.length)
            console.print(f"JSON top-level keys: {result['keys']}")
            console.print(result["preview"], markup=False)
    except (ConfigurationError, FetchError, TabularStoreError) as error:
        logger.error("%s failed: %s", args.command, error)
        if args.command != "sync":
            _notify_fatal(telegram, str(error))
        return 1
    except Exception:
        logger.exception("%s failed", args.command)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
