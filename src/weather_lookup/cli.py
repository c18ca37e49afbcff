"""CLI: configure the default weather provider and fetch forecasts."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from .commands import configure, get
from .config import load_settings
from .exceptions import (
    ConfigError,
    ConfigStoreError,
    ConfigurationError,
    DateError,
    ProviderError,
    WeatherLookupError,
)
from .log_setup import setup_logger
from .providers.registry import supported_names
from .redaction import sanitize_text
from .store import JsonConfigStore

EXIT_CODES: tuple[tuple[type[WeatherLookupError], int], ...] = (
    (ConfigError, 2),
    (ConfigurationError, 3),
    (ConfigStoreError, 3),
    (DateError, 4),
    (ProviderError, 5),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-lookup",
        description="CLI for getting information about weather.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the provider config file (overrides WEATHER_CONFIG_PATH).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    configure_parser = subparsers.add_parser(
        "configure",
        help="Configure the provider and API key for it.",
    )
    configure_parser.add_argument(
        "-p",
        "--provider",
        required=True,
        help=f"Provider name ({', '.join(supported_names())}).",
    )
    configure_parser.add_argument(
        "-a",
        "--api-key",
        default=None,
        help="API key for the provider; required the first time a provider is configured.",
    )

    get_parser = subparsers.add_parser(
        "get",
        help="Get weather information for the address on the date.",
    )
    get_parser.add_argument("-a", "--address", required=True, help="Name of city.")
    get_parser.add_argument(
        "-d",
        "--date",
        default=None,
        help="Date as DD.MM.YYYY [default: now].",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    return build_parser().parse_args(argv)


def _exit_code_for(exc: WeatherLookupError) -> int:
    for error_type, code in EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command and return the process exit code."""
    args = parse_args(argv)
    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logger().error("Configuration failure: %s", exc)
        err_console.print(f"Error: {sanitize_text(str(exc))}", markup=False)
        return 2

    logger = setup_logger(level=settings.log_level)
    config_path = args.config or settings.config_path

    try:
        store = JsonConfigStore(config_path)
        if args.command == "configure":
            provider = configure(store, args.provider, args.api_key)
            console.print(f"Success! Provider {provider} is default provider now", markup=False)
        else:
            report = get(
                store,
                args.address,
                args.date,
                settings=settings,
                provider_logger=logger.getChild("providers"),
            )
            console.print(report.render(), markup=False, end="")
    except WeatherLookupError as exc:
        logger.error("%s failed: %s", args.command, exc, extra={"command": args.command})
        err_console.print(f"Error: {sanitize_text(str(exc))}", markup=False)
        return _exit_code_for(exc)
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        logger.exception("Unexpected failure: %s", exc, extra={"command": args.command})
        err_console.print(f"Error: {sanitize_text(str(exc))}", markup=False)
        return 99
    return 0


if __name__ == "__main__":
    sys.exit(main())
