"""
Command-line interface for the GDD dashboard.

Runs one dashboard session against the GDD service and prints the summary
and daily records, optionally writing the HTML dashboard to a file.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from gdd_dashboard import __version__
from gdd_dashboard.config import get_settings
from gdd_dashboard.controller import DashboardController, DashboardState
from gdd_dashboard.params import ParameterStore
from gdd_dashboard.renderers.dashboard import build_dashboard_html
from gdd_dashboard.schemas import RequestStatus
from gdd_dashboard.views import table_headings


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="gdd-dashboard",
        description="Growing Degree Day accumulation for a crop planting",
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

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    query_parser = subparsers.add_parser("query", help="Query GDD for a planting")
    query_parser.add_argument(
        "--location",
        type=str,
        default=None,
        help="Location name (default: default_location from settings)",
    )
    query_parser.add_argument(
        "--base-temp",
        type=str,
        default=None,
        help="Base temperature in °C (default: default_base_temp from settings)",
    )
    query_parser.add_argument(
        "--start-date",
        type=str,
        required=True,
        help="Planting date, YYYY-MM-DD",
    )
    query_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the HTML dashboard to this file",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"GDD service: {settings.api_base_url}")
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Handle the 'query' command: one fetch, then print and optionally render."""
    settings = get_settings()
    store = ParameterStore(
        location=args.location if args.location is not None else settings.default_location,
        base_temperature=(
            args.base_temp if args.base_temp is not None else settings.default_base_temp
        ),
        planting_date=args.start_date,
    )
    if not store.params.is_ready:
        print("Error: no planting date given (use --start-date YYYY-MM-DD)", file=sys.stderr)
        return 1

    print(f"Querying GDD for {store.params.location} from {store.params.planting_date}...")

    state = asyncio.run(run_session(store))

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(build_dashboard_html(state), encoding="utf-8")
        print(f"Dashboard written: {args.output}")

    if state.status != RequestStatus.SUCCESS:
        print(f"Error: {state.error_message}", file=sys.stderr)
        return 1

    print_state(state)
    return 0


async def run_session(store: ParameterStore) -> DashboardState:
    """Mount a controller on ``store``, wait for its query, and return the result."""
    async with DashboardController(store) as controller:
        await controller.wait_idle()
        return controller.state


def print_state(state: DashboardState) -> None:
    """Print the summary line and the daily records table."""
    if state.summary_line:
        print(state.summary_line)
    if not state.table_rows:
        print("No daily records returned.")
        return
    headings = table_headings(state.series)
    print(" | ".join(headings))
    for row in state.table_rows:
        print(" | ".join((row.date, row.gdd, row.primary, row.secondary)))


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
        "query": cmd_query,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
