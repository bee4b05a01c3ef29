#!/usr/bin/env python3
"""
Unified CLI for vehicle maintenance tracking.

Commands:
  init            - Create a new vehicle file
  status          - Show what maintenance is due, overdue, or current
  history         - View service history
  log             - Add a new service record
  update-distance - Update the odometer reading
  tasks           - List the maintenance task catalog
"""

import argparse
import logging
import math
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Dict, List, Optional

from upkeep import (
    DueItem,
    InvalidInput,
    ServiceRecord,
    Status,
    StorageError,
    append_service_record,
    compute_due_items,
    get_task,
    init_vehicle_file,
    latest_by_key,
    load_snapshot,
    save_catalog,
    sort_history,
    to_calendar_date,
    write_current_distance,
)

logger = logging.getLogger("maint")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_distance(distance: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{distance:,.0f}" if distance is not None else "-"


def format_remaining(item: DueItem) -> str:
    """Format remaining distance for display."""
    if item.distance_remaining is None:
        return "-"
    if item.distance_remaining < 0:
        return f"-{abs(item.distance_remaining):,.0f}"
    return f"{item.distance_remaining:,.0f}"


def format_time_remaining(item: DueItem) -> str:
    """Format remaining time for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if item.time_remaining is None:
        return "-"

    days = abs(item.time_remaining)
    sign = "-" if item.time_remaining < 0 else ""
    months = days // 30
    if months > 0:
        return f"{sign}{months}mo {days % 30}d"
    return f"{sign}{days}d"


def format_last_done(record: Optional[ServiceRecord]) -> str:
    """Format the baseline record as 'date @ distance'."""
    if record is None:
        return "-"
    parts = []
    if record.done_at_date is not None:
        parts.append(str(record.done_at_date))
    if record.done_at_distance is not None:
        parts.append(format_distance(record.done_at_distance))
    return " @ ".join(parts) if parts else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Status command
# =============================================================================


def make_status_table(
    items: List[DueItem], last_by_key: Dict[str, ServiceRecord]
) -> List[List[str]]:
    """Convert due items to table rows."""
    rows = []
    for item in items:
        rows.append(
            [
                item.task.display_name,
                format_last_done(last_by_key.get(item.key)),
                format_remaining(item),
                format_time_remaining(item),
            ]
        )
    return rows


def cmd_status(args):
    """Show what maintenance is due, overdue, or current."""
    snapshot = load_snapshot(args.vehicle_file)
    as_of = to_calendar_date(args.as_of) if args.as_of else date.today()

    current = snapshot.current_distance
    items = compute_due_items(
        current if current is not None else 0,
        as_of,
        snapshot.records,
        catalog=snapshot.catalog,
    )
    last_by_key = latest_by_key(snapshot.records)

    # Header
    if snapshot.name:
        print(f"Vehicle: {snapshot.name}")
    if current is None:
        print("Current distance: not set (update-distance to record one)")
    else:
        print(f"Current distance: {current:,.0f}")
    print(f"As of: {as_of.isoformat()}")
    print(f"Tasks: {len(snapshot.catalog)}")
    print(f"History entries: {len(snapshot.records)}")
    print()

    headers = ["Task", "Last Done", "Remaining (dist)", "Remaining (time)"]
    groups = [Status.OVERDUE, Status.DUE_SOON]
    if not args.due_only:
        groups.append(Status.OK)

    for status in groups:
        group = [item for item in items if item.status == status]
        if group:
            print(f"{status.label}:")
            print(
                tabulate(
                    make_status_table(group, last_by_key),
                    headers=headers,
                    tablefmt="simple",
                )
            )
            print()

    if args.due_only and not any(item.is_due for item in items):
        print("Nothing due.")

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(records: List[ServiceRecord], catalog) -> List[List[str]]:
    """Convert service records to table rows."""
    rows = []
    for record in records:
        # Fall back to the key for tasks no longer in the catalog
        task = get_task(catalog, record.key)
        rows.append(
            [
                str(record.done_at_date) if record.done_at_date is not None else "-",
                format_distance(record.done_at_distance),
                task.display_name if task else record.key,
            ]
        )
    return rows


def cmd_history(args):
    """View service history."""
    snapshot = load_snapshot(args.vehicle_file)
    records = sort_history(snapshot.records, reverse=not args.asc)

    # Apply filters
    if args.task:
        records = [r for r in records if args.task.lower() in r.key.lower()]

    if args.since:
        since = to_calendar_date(args.since)
        records = [
            r
            for r in records
            if r.done_at_date is not None and to_calendar_date(r.done_at_date) >= since
        ]

    if snapshot.name:
        print(f"Vehicle: {snapshot.name}")
    print(f"Total services: {len(snapshot.records)}")
    if args.task or args.since:
        print(f"Showing: {len(records)} (filtered)")
    print()

    if not records:
        print("No history entries found.")
        return 0

    headers = ["Date", "Distance", "Task"]
    print(
        tabulate(
            make_history_table(records, snapshot.catalog),
            headers=headers,
            tablefmt="simple",
        )
    )

    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new service record."""
    snapshot = load_snapshot(args.vehicle_file)

    task = get_task(snapshot.catalog, args.task_key)
    if task is None:
        print(f"Error: Unknown task key '{args.task_key}'")
        print("\nAvailable tasks:")
        for t in snapshot.catalog:
            print(f"  {t.display_name}")
            print(f"    Key: {t.key}")
        return 1

    done_at = to_calendar_date(args.date) if args.date else date.today()
    distance = args.distance
    if distance is None:
        # Logging "now" records the stored odometer reading
        distance = snapshot.current_distance
    elif not math.isfinite(distance):
        print(f"Error: Invalid distance: {distance}")
        return 1

    # Show what will be added
    print(f"Adding service record to {args.vehicle_file}:")
    print(f"  Task:     {task.display_name}")
    print(f"  Date:     {done_at.isoformat()}")
    if distance is not None:
        print(f"  Distance: {distance:,.0f}")
    else:
        print("  Distance: - (no odometer reading stored)")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    # Use the canonical key from the matched task
    append_service_record(args.vehicle_file, task.key, distance, done_at.isoformat())
    print("Record saved.")

    return 0


# =============================================================================
# Update Distance command
# =============================================================================


def cmd_update_distance(args):
    """Update the odometer reading."""
    if not math.isfinite(args.distance):
        print(f"Error: Invalid distance: {args.distance}")
        return 1

    snapshot = load_snapshot(args.vehicle_file)
    old = snapshot.current_distance

    print(f"Current distance: {format_distance(old)}")
    print(f"New distance:     {args.distance:,.0f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    write_current_distance(args.vehicle_file, args.distance)
    print("Distance updated.")

    return 0


# =============================================================================
# Tasks command
# =============================================================================


def cmd_tasks(args):
    """List the maintenance task catalog."""
    snapshot = load_snapshot(args.vehicle_file)

    print(f"Tasks: {len(snapshot.catalog)}")
    print()

    rows = []
    for task in snapshot.catalog:
        interval = []
        if task.interval.distance:
            interval.append(format_distance(task.interval.distance))
        if task.interval.days:
            interval.append(f"{task.interval.days}d")
        lead = []
        if task.interval.distance:
            lead.append(format_distance(task.lead_distance))
        if task.interval.days:
            lead.append(f"{task.lead_time}d")

        rows.append(
            [
                task.key,
                task.display_name,
                " / ".join(interval) if interval else "-",
                " / ".join(lead) if lead else "-",
                truncate(task.notes),
            ]
        )

    headers = ["Key", "Task", "Interval", "Lead", "Notes"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    if args.save:
        save_catalog(args.vehicle_file, snapshot.catalog)
        print()
        print(f"Catalog written to {args.vehicle_file}.")

    return 0


# =============================================================================
# Init command
# =============================================================================


def cmd_init(args):
    """Create a new vehicle file."""
    init_vehicle_file(args.vehicle_file, name=args.name, current_distance=args.distance)
    print(f"Created {args.vehicle_file}.")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s integra.yaml init --name "2024 Acura Integra" --distance 1200
  %(prog)s integra.yaml status
  %(prog)s integra.yaml status --due-only --as-of 2025-06-01
  %(prog)s integra.yaml history --task oil
  %(prog)s integra.yaml log oil_change --distance 12345
  %(prog)s integra.yaml update-distance 12500
  %(prog)s integra.yaml tasks
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Init subcommand
    init_parser = subparsers.add_parser("init", help="Create a new vehicle file")
    init_parser.add_argument("--name", type=str, help="Vehicle name")
    init_parser.add_argument("--distance", type=float, help="Current odometer reading")

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show what maintenance is due, overdue, or current"
    )
    status_parser.add_argument(
        "--as-of",
        type=str,
        help="Reference date in YYYY-MM-DD format (default: today)",
    )
    status_parser.add_argument(
        "--due-only",
        action="store_true",
        help="Only show overdue and due-soon tasks",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View service history")
    history_parser.add_argument(
        "--task",
        type=str,
        help="Filter to task keys containing text (case-insensitive, e.g. 'oil')",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only entries since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort oldest first instead of newest first",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new service record")
    log_parser.add_argument(
        "task_key",
        type=str,
        help="Task key (e.g., 'oil_change')",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--distance",
        type=float,
        help="Odometer reading at time of service (default: stored reading)",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Update Distance subcommand
    update_parser = subparsers.add_parser(
        "update-distance", help="Update the odometer reading"
    )
    update_parser.add_argument(
        "distance",
        type=float,
        help="Current odometer reading",
    )
    update_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Tasks subcommand
    tasks_parser = subparsers.add_parser("tasks", help="List the maintenance task catalog")
    tasks_parser.add_argument(
        "--save",
        action="store_true",
        help="Write the catalog into the vehicle file for editing",
    )

    return parser


COMMANDS = {
    "init": cmd_init,
    "status": cmd_status,
    "history": cmd_history,
    "log": cmd_log,
    "update-distance": cmd_update_distance,
    "tasks": cmd_tasks,
}


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    # Validate vehicle file exists
    if args.command != "init" and not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (InvalidInput, StorageError) as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
