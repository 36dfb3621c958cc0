"""
Command-line interface for the Ambient Weather client.

Credentials come from ``AMBIENT_API_KEY`` / ``AMBIENT_APP_KEY`` (see
``ambient_weather.config``); readings are printed as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ambient_weather import __version__
from ambient_weather.client import ALTERNATE_HOST, STABLE_HOST, RateLimiter
from ambient_weather.config import Settings, get_settings
from ambient_weather.devices import get_historic, get_latest, list_devices
from ambient_weather.exceptions import AmbientWeatherError
from ambient_weather.http import create_session
from ambient_weather.schemas import Credentials


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ambient-weather",
        description="Fetch current and historical readings from Ambient Weather stations",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--device-id",
        type=int,
        default=None,
        help="Device index on the account (default: AMBIENT_DEVICE_ID or 0)",
    )
    parser.add_argument(
        "--new-endpoint",
        action="store_true",
        default=None,
        help=f"Use {ALTERNATE_HOST} instead of {STABLE_HOST}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show configuration")
    subparsers.add_parser("devices", help="List devices on the account")
    subparsers.add_parser("latest", help="Print the latest reading as JSON")

    history_parser = subparsers.add_parser("history", help="Print past readings as JSON")
    history_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Max number of records (vendor default: 288)",
    )

    return parser


def _credentials(args: argparse.Namespace, settings: Settings) -> Credentials | None:
    if not settings.has_keys:
        print("Error: AMBIENT_API_KEY and AMBIENT_APP_KEY must be set", file=sys.stderr)
        return None
    return settings.credentials(device_id=args.device_id, use_new_endpoint=args.new_endpoint)


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Host: {ALTERNATE_HOST if settings.use_new_endpoint else STABLE_HOST}")
    print(f"Device: {settings.device_id}")
    print(f"Keys configured: {'yes' if settings.has_keys else 'no'}")
    print(f"Min request interval: {settings.min_request_interval}s")
    return 0


def cmd_devices(args: argparse.Namespace) -> int:
    """Handle the 'devices' command."""
    settings = get_settings()
    credentials = _credentials(args, settings)
    if credentials is None:
        return 1

    devices = list_devices(
        credentials,
        session=create_session(timeout=settings.timeout),
        rate_limiter=RateLimiter(settings.min_request_interval),
    )
    for i, device in enumerate(devices):
        name = device.info.name if device.info and device.info.name else "-"
        print(f"{i}\t{device.mac_address}\t{name}")
    return 0


def cmd_latest(args: argparse.Namespace) -> int:
    """Handle the 'latest' command."""
    settings = get_settings()
    credentials = _credentials(args, settings)
    if credentials is None:
        return 1

    record = get_latest(
        credentials,
        session=create_session(timeout=settings.timeout),
        rate_limiter=RateLimiter(settings.min_request_interval),
    )
    print(record.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    """Handle the 'history' command."""
    settings = get_settings()
    credentials = _credentials(args, settings)
    if credentials is None:
        return 1

    records = get_historic(
        credentials,
        limit=args.limit,
        session=create_session(timeout=settings.timeout),
        rate_limiter=RateLimiter(settings.min_request_interval),
    )
    payload = [r.model_dump(mode="json", by_alias=True, exclude_none=True) for r in records]
    print(json.dumps(payload, indent=2))
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug or get_settings().debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "devices": cmd_devices,
        "latest": cmd_latest,
        "history": cmd_history,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except AmbientWeatherError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
