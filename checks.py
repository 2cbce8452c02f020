#!/usr/bin/env python3
"""
CLI for fleet vehicle inspection checks.

Commands:
  vehicles - List fleet vehicles
  history  - View inspection checks for a vehicle
  show     - Show a single check in detail
  log      - Record a new inspection check
  delete   - Delete an inspection check
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleetcheck import (
    Check,
    CheckItemKey,
    CheckService,
    Vehicle,
    YamlCheckStore,
    YamlVehicleCatalog,
    parse_check_request,
)

DEFAULT_DATA_DIR = Path(
    os.environ.get("FLEETCHECK_DATA_DIR", Path(__file__).parent / "data")
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format odometer reading for display."""
    return f"{km:,.0f} km" if km is not None else "-"


def format_issue(check: Check) -> str:
    """Flag checks with failed items."""
    return "ISSUE" if check.has_issue else "ok"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def item_statuses(check: Check) -> List[str]:
    """Item statuses in CheckItemKey order."""
    by_key = {item.key: item.status.value for item in check.items}
    return [by_key.get(key, "-") for key in CheckItemKey]


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    return [
        [v.id, v.registration, v.make, v.model, str(v.year)] for v in vehicles
    ]


def make_history_table(checks: List[Check]) -> List[List[str]]:
    """Convert checks to table rows."""
    rows = []
    for check in checks:
        rows.append(
            [
                check.created_at,
                format_km(check.odometer_km),
                *item_statuses(check),
                format_issue(check),
                truncate(check.note),
            ]
        )
    return rows


def parse_fail_keys(value: Optional[str]) -> List[str]:
    """Split a comma-separated --fail list into upper-case keys."""
    if not value:
        return []
    return [k.strip().upper() for k in value.split(",") if k.strip()]


def build_payload(
    vehicle_id: str,
    odometer_km: float,
    fail_keys: List[str],
    note: Optional[str] = None,
) -> dict:
    """Build a create-check payload with every item OK except fail_keys."""
    payload = {
        "vehicleId": vehicle_id,
        "odometerKm": odometer_km,
        "items": [
            {"key": key.value, "status": "FAIL" if key.value in fail_keys else "OK"}
            for key in CheckItemKey
        ],
    }
    if note is not None:
        payload["note"] = note
    return payload


# =============================================================================
# Commands
# =============================================================================


def cmd_vehicles(args, vehicles: YamlVehicleCatalog, service: CheckService):
    """List fleet vehicles."""
    fleet = vehicles.read_vehicles()
    if not fleet:
        print("No vehicles found.")
        return 0

    headers = ["ID", "Registration", "Make", "Model", "Year"]
    print(tabulate(make_vehicle_table(fleet), headers=headers, tablefmt="simple"))
    return 0


def cmd_history(args, vehicles: YamlVehicleCatalog, service: CheckService):
    """View inspection checks for a vehicle."""
    vehicle = vehicles.get_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        return 1

    checks = service.get_checks(args.vehicle_id, has_issue=args.has_issue)

    print(f"Vehicle: {vehicle.name}")
    print(f"Checks: {len(checks)}")
    if args.has_issue is not None:
        print(f"Filter: {'WITH ISSUES' if args.has_issue else 'NO ISSUES'}")
    print()

    if not checks:
        print("No checks found.")
        return 0

    headers = ["Date", "Odometer", *[k.value for k in CheckItemKey], "Result", "Note"]
    print(tabulate(make_history_table(checks), headers=headers, tablefmt="simple"))
    return 0


def cmd_show(args, vehicles: YamlVehicleCatalog, service: CheckService):
    """Show a single check in detail."""
    check = service.get_check_by_id(args.check_id)
    if check is None:
        print(f"Error: Check not found: {args.check_id}")
        return 1

    print(f"Check:    {check.id}")
    print(f"Vehicle:  {check.vehicle_id}")
    print(f"Date:     {check.created_at}")
    print(f"Odometer: {format_km(check.odometer_km)}")
    print(f"Result:   {format_issue(check)}")
    if check.note:
        print(f"Note:     {check.note}")
    print()
    rows = [[item.key.value, item.status.value] for item in check.items]
    print(tabulate(rows, headers=["Item", "Status"], tablefmt="simple"))
    return 0


def cmd_log(args, vehicles: YamlVehicleCatalog, service: CheckService):
    """Record a new inspection check."""
    fail_keys = parse_fail_keys(args.fail)
    valid_keys = [k.value for k in CheckItemKey]
    unknown = [k for k in fail_keys if k not in valid_keys]
    if unknown:
        print(f"Error: Unknown item(s): {', '.join(unknown)}")
        print(f"Valid items: {', '.join(valid_keys)}")
        return 1

    payload = build_payload(args.vehicle_id, args.odometer_km, fail_keys, args.note)
    result = parse_check_request(payload, vehicles.vehicle_exists)
    if not result.ok:
        print("Error: Invalid check:")
        for error in result.errors:
            print(f"  {error.field}: {error.reason}")
        return 1

    failed = [i.key.value for i in result.data.items if i.failed]
    print(f"Adding check for {args.vehicle_id}:")
    print(f"  Odometer: {format_km(args.odometer_km)}")
    print(f"  Failed:   {', '.join(failed) if failed else 'none'}")
    if args.note:
        print(f"  Note:     {args.note}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    check = service.create_check(result.data)
    print(f"Check saved: {check.id}")
    return 0


def cmd_delete(args, vehicles: YamlVehicleCatalog, service: CheckService):
    """Delete an inspection check."""
    check = service.get_check_by_id(args.check_id)
    if check is None:
        print(f"Error: Check not found: {args.check_id}")
        return 1

    print(f"Deleting check {check.id} ({check.vehicle_id}, {check.created_at})")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    if not service.delete_check(args.check_id):
        print(f"Error: Check not found: {args.check_id}")
        return 1
    print("Check deleted.")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet vehicle inspection checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles
  %(prog)s history VH001
  %(prog)s history VH001 --issues
  %(prog)s log VH001 15000 --fail brakes,lights --note "Pads worn"
  %(prog)s show 3f2b9c1e-...
  %(prog)s delete 3f2b9c1e-...
""",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="Directory holding vehicles.yaml and checks.yaml",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("vehicles", help="List fleet vehicles")

    history_parser = subparsers.add_parser(
        "history", help="View inspection checks for a vehicle"
    )
    history_parser.add_argument("vehicle_id", type=str, help="Vehicle ID (e.g., VH001)")
    issue_group = history_parser.add_mutually_exclusive_group()
    issue_group.add_argument(
        "--issues",
        dest="has_issue",
        action="store_const",
        const=True,
        help="Only checks with a failed item",
    )
    issue_group.add_argument(
        "--no-issues",
        dest="has_issue",
        action="store_const",
        const=False,
        help="Only checks where every item passed",
    )

    show_parser = subparsers.add_parser("show", help="Show a single check")
    show_parser.add_argument("check_id", type=str, help="Check ID")

    log_parser = subparsers.add_parser("log", help="Record a new inspection check")
    log_parser.add_argument("vehicle_id", type=str, help="Vehicle ID (e.g., VH001)")
    log_parser.add_argument("odometer_km", type=float, help="Odometer reading in km")
    log_parser.add_argument(
        "--fail",
        type=str,
        help="Comma-separated items that failed (e.g., 'brakes,lights')",
    )
    log_parser.add_argument("--note", type=str, help="Notes about the inspection")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete an inspection check")
    delete_parser.add_argument("check_id", type=str, help="Check ID")
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without saving",
    )

    return parser


COMMANDS = {
    "vehicles": cmd_vehicles,
    "history": cmd_history,
    "show": cmd_show,
    "log": cmd_log,
    "delete": cmd_delete,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    vehicles = YamlVehicleCatalog(args.data_dir / "vehicles.yaml")
    service = CheckService(YamlCheckStore(args.data_dir / "checks.yaml"))

    return COMMANDS[args.command](args, vehicles, service)


if __name__ == "__main__":
    sys.exit(main() or 0)
