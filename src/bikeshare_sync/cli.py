"""Command-line interface for the bike-share sync tool."""

import argparse
import asyncio
import sys
from pathlib import Path

from bikeshare_sync import main as app
from bikeshare_sync.adapters.config import AppConfig
from bikeshare_sync.application.services import compare_stations, find_duplicate_ids
from bikeshare_sync.domain.errors import StationRecordFormatError
from bikeshare_sync.domain.models.bike_share_system import DEFAULT_MOVE_THRESHOLD_METERS
from bikeshare_sync.domain.station_records import decode_snapshot


def _setup_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bikeshare-sync",
        description="Compare bike-share GBFS feeds with their history and with OpenStreetMap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List configured systems
  bikeshare-sync list

  # Sync system 1 and answer the task-creation question up front
  bikeshare-sync run 1 --no-tasks

  # Check setup and MapRoulette access for system 1
  bikeshare-sync validate 1

  # Compare two snapshot files offline
  bikeshare-sync compare new/bikeshare.geojson old/bikeshare.geojson --tolerance 3
        """,
    )
    parser.add_argument("--log-level", help="Log level (overrides LOG_LEVEL)")
    parser.add_argument("--data-dir", help="Data directory (overrides DATA_DIR)")
    parser.add_argument("--systems-file", help="Systems JSON file (overrides SYSTEMS_FILE)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    run_parser = subparsers.add_parser("run", help="Sync one system")
    run_parser.add_argument("system_id", type=int, help="System id from the systems file")
    tasks = run_parser.add_mutually_exclusive_group()
    tasks.add_argument(
        "--yes", dest="create_tasks", action="store_const", const=True,
        help="Create MapRoulette tasks without asking",
    )
    tasks.add_argument(
        "--no-tasks", dest="create_tasks", action="store_const", const=False,
        help="Never create MapRoulette tasks",
    )

    subparsers.add_parser("list", help="List configured systems")

    validate_parser = subparsers.add_parser("validate", help="Validate a system's setup")
    validate_parser.add_argument("system_id", type=int, help="System id from the systems file")

    project_parser = subparsers.add_parser(
        "test-project", help="Check that a MapRoulette project id is usable"
    )
    project_parser.add_argument("project_id", type=int, help="MapRoulette project id")

    compare_parser = subparsers.add_parser("compare", help="Compare two snapshot files")
    compare_parser.add_argument("current", type=Path, help="Newer snapshot file")
    compare_parser.add_argument("reference", type=Path, help="Older snapshot file")
    compare_parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_MOVE_THRESHOLD_METERS,
        help=f"Move tolerance in meters (default: {DEFAULT_MOVE_THRESHOLD_METERS})",
    )
    return parser


def _build_config(args: argparse.Namespace) -> AppConfig:
    overrides = {
        key: value
        for key, value in (
            ("log_level", args.log_level),
            ("data_dir", args.data_dir),
            ("systems_file", args.systems_file),
        )
        if value is not None
    }
    return AppConfig(**overrides)


def compare_snapshot_files(current: Path, reference: Path, tolerance: float) -> int:
    """Print the classification of two snapshot files. Returns the exit code."""
    try:
        current_stations = decode_snapshot(current.read_text(encoding="utf-8"))
        reference_stations = decode_snapshot(reference.read_text(encoding="utf-8"))
    except (OSError, StationRecordFormatError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for label, stations in (("current", current_stations), ("reference", reference_stations)):
        duplicates = find_duplicate_ids(stations)
        if duplicates:
            print(f"Warning: {label} snapshot repeats ids {', '.join(duplicates)}; last wins")

    comparison = compare_stations(current_stations, reference_stations, tolerance)
    print(f"Compared {len(current_stations)} current with {len(reference_stations)} reference stations")
    for name, stations in (
        ("added", comparison.added),
        ("removed", comparison.removed),
        ("moved", comparison.moved),
    ):
        ids = ", ".join(sorted(station.id for station in stations))
        print(f"  {name}: {len(stations)}" + (f" ({ids})" if ids else ""))
    renamed = sorted(comparison.renamed, key=lambda pair: pair.id)
    print(f"  renamed: {len(renamed)}")
    for pair in renamed:
        print(f"    {pair.id}: {pair.previous_name!r} -> {pair.current.name!r}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command. Returns the process exit code."""
    parser = _setup_argparse()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "compare":
        return compare_snapshot_files(args.current, args.reference, args.tolerance)

    config = _build_config(args)
    app.configure_logging(config)

    try:
        if args.command == "run":
            return asyncio.run(app.run_system(config, args.system_id, args.create_tasks))
        if args.command == "list":
            return app.list_systems(config)
        if args.command == "validate":
            return asyncio.run(app.validate_system(config, args.system_id))
        if args.command == "test-project":
            return asyncio.run(app.test_project(config, args.project_id))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def run() -> None:
    """Synchronous entry point for the console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()
