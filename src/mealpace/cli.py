#!/usr/bin/env python3
"""Command-line interface for mealpace."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from mealpace.config import (
    create_default_config,
    find_config_file,
    get_meal_option_budgets,
    get_periods,
    get_storage_path,
    load_config,
    save_config,
)
from mealpace.dashboard import Dashboard
from mealpace.models import PlanKind
from mealpace.pacing import PacingReport, ResourcePacing
from mealpace.store import ImportStatus, JsonFileBackend, LedgerStore
from mealpace.utils import fetch_url, parse_date, read_file


def _format_rate(value: float | None, money: bool = False) -> str:
    if value is None:
        return "n/a"
    return f"${value:.2f}" if money else f"{value:.2f}"


def _format_status(pacing: ResourcePacing, money: bool) -> str:
    delta = f"${pacing.delta:.2f}" if money else f"{pacing.delta:.1f} blocks"
    return f"{pacing.status.value} by {delta}"


def print_report(report: PacingReport) -> None:
    """Print a pacing report the way the dashboard lays it out."""
    print(f"Current meal option: {report.option.value}")
    print(f"Total days on campus: {report.total_days}")
    print(f"Current day: {report.day_index}")

    if report.blocks:
        blocks = report.blocks
        print(f"\nMeal blocks remaining: {blocks.remaining:.0f}")
        print(f"  Status: {_format_status(blocks, money=False)}")
        print(f"  Ideal per day: {_format_rate(blocks.ideal_per_day)}")
        print(f"  Actual per day: {_format_rate(blocks.actual_per_day)}")
        print(f"  Per day from now on: {_format_rate(blocks.projected_per_day)}")
        print(f"  Average value per block: "
              f"{_format_rate(report.average_value_per_block, money=True)}")
    else:
        print("\nNo meal block plan found for this option.")

    if report.flex:
        flex = report.flex
        print(f"\nFlex dollars remaining: ${flex.remaining:.2f}")
        print(f"  Status: {_format_status(flex, money=True)}")
        print(f"  Ideal per day: {_format_rate(flex.ideal_per_day, money=True)}")
        print(f"  Actual per day: {_format_rate(flex.actual_per_day, money=True)}")
        print(f"  Per day from now on: {_format_rate(flex.projected_per_day, money=True)}")
    else:
        print("\nNo flex dollar plan found for this option.")

    for warning in report.warnings:
        print(f"Warning: {warning}", file=sys.stderr)


def _read_statement(source: str) -> str:
    if source.startswith(("http://", "https://")):
        return fetch_url(source)
    return read_file(Path(source))


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Track meal plan blocks and flex dollars against the semester",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mealpace ~/Downloads/statement.html --status
  mealpace --import-json meal_plan_data.json
  mealpace --export meal_plan_data.json
  mealpace --series flex
  mealpace --clear --yes
        """,
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Saved statement pages (HTML files or URLs) to merge",
    )
    parser.add_argument(
        "--import-json",
        type=Path,
        help="Merge a previously exported ledger",
    )
    parser.add_argument(
        "--export",
        help="Write the ledger as JSON to this file ('-' for stdout)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all stored meal plan data",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm --clear",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show pacing for the current meal option",
    )
    parser.add_argument(
        "--series",
        choices=["blocks", "flex"],
        help="Print ideal and actual usage series as JSON",
    )
    parser.add_argument(
        "--toggle-dark-mode",
        action="store_true",
        help="Flip the stored dark mode preference",
    )
    parser.add_argument(
        "--now",
        help="Report as of this date (YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.json file",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        help="Path to the ledger storage file",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config.json to the XDG config directory",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()

    if args.init_config:
        path = save_config(create_default_config())
        print(f"Wrote default configuration to {path}", file=sys.stderr)
        return 0

    try:
        config: dict[str, Any] | None = load_config(args.config)
        periods = get_periods(config)
        budgets = get_meal_option_budgets(config)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.verbose and not args.config and find_config_file() is None:
        print("No configuration found, using the built-in calendar.", file=sys.stderr)

    today = date.today()
    if args.now:
        parsed = parse_date(args.now)
        if parsed is None:
            print(f"Error: invalid date for --now: {args.now}", file=sys.stderr)
            return 1
        today = parsed

    storage_path = args.storage or get_storage_path(config)
    try:
        store = LedgerStore(JsonFileBackend(storage_path))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    actions = [
        args.inputs, args.import_json, args.export, args.clear,
        args.status, args.series, args.toggle_dark_mode,
    ]
    if not any(actions):
        parser.print_help()
        return 1

    exit_code = 0

    if args.toggle_dark_mode:
        dark_mode = store.toggle_dark_mode()
        print(f"Dark mode {'on' if dark_mode else 'off'}", file=sys.stderr)

    if args.clear:
        if not args.yes:
            print("Error: --clear deletes all data; pass --yes to confirm", file=sys.stderr)
            return 1
        store.clear_all()
        print("All meal plan data cleared", file=sys.stderr)

    if args.import_json:
        try:
            status = store.import_ledger(read_file(args.import_json))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if status is ImportStatus.SUCCESS:
            print(f"Imported {args.import_json}", file=sys.stderr)
        else:
            print(f"Error: {args.import_json}: {store.last_error}", file=sys.stderr)
            exit_code = 1

    for source in args.inputs:
        try:
            html = _read_statement(source)
        except ValueError as e:
            print(f"Warning: {e}", file=sys.stderr)
            exit_code = 1
            continue

        status = store.merge_snapshot(html)
        if status is ImportStatus.SUCCESS:
            print(f"Merged {source}", file=sys.stderr)
        elif status is ImportStatus.NO_DATA:
            print(f"Warning: {source}: no meal plan data found", file=sys.stderr)
            exit_code = 1
        else:
            print(f"Error: {source}: {store.last_error}", file=sys.stderr)
            exit_code = 1

    if args.verbose:
        plans = store.ledger.meal_plans
        count = sum(len(plan.transactions) for plan in plans)
        print(f"Ledger holds {len(plans)} plans, {count} transactions", file=sys.stderr)

    if args.export:
        export = store.export_ledger()
        if args.export == "-":
            print(export)
        else:
            Path(args.export).write_text(export + "\n", encoding="utf-8")
            print(f"Wrote ledger to {args.export}", file=sys.stderr)

    dashboard = Dashboard(store.ledger, periods=periods, budgets=budgets, today=today)

    if args.status:
        report = dashboard.get_pacing_report()
        if report is None:
            print("No meal option found. Please upload your meal plan data.")
        else:
            print_report(report)

    if args.series:
        kind = PlanKind.BLOCK if args.series == "blocks" else PlanKind.FLEX
        series = dashboard.get_usage_series(kind)
        if series is None:
            print("Error: no meal option found", file=sys.stderr)
            return 1
        print(json.dumps({
            "ideal": [[p.x, p.y] for p in series.ideal],
            "actual": [[p.x, p.y] for p in series.actual],
        }, indent=2))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
