#!/usr/bin/env python3
"""
Unified CLI for fleet operations.

Commands:
  laudos      - Show expired and expiring inspection documents
  set-laudo   - Set or clear a vehicle's document date
  score       - Calculate a daily report score
  explain     - Walk through the scoring examples
  ranking     - Rank people by normalized report score
  log-report  - Add a report log entry
  export      - Export laudos, vehicles or reports to a CSV file
"""

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleetops import (
    Bucket,
    LaudoType,
    ReportEntry,
    ReportOutcome,
    EXAMPLE_SCENARIOS,
    load_fleet,
    save_laudo_date,
    save_report_entry,
    base_points,
    score,
    write_delimited,
)
from fleetops.expiration import ExpirationRecord
from fleetops.export import (
    LAUDO_COLUMNS,
    REPORT_COLUMNS,
    VEHICLE_COLUMNS,
    format_date,
    format_days,
)
from fleetops.logging_config import configure_logging
from fleetops.ranking import AggregatedScore
from fleetops.scoring import format_points

logger = logging.getLogger("fleet")

DEFAULT_FLEET_FILE = "data/fleet.yaml"

# =============================================================================
# Formatting helpers
# =============================================================================


def format_score(value: float) -> str:
    """Format a score with an explicit sign."""
    return f"{value:+.2f}"


def parse_iso_date(text: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD argument, raising ValueError with a clear message."""
    if text is None:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date '{text}' (expected YYYY-MM-DD)") from None


# =============================================================================
# Laudos command
# =============================================================================


def make_laudo_table(records: List[ExpirationRecord]) -> List[List[str]]:
    """Convert expiration records to table rows."""
    rows = []
    for record in records:
        rows.append(
            [
                record.vehicle.plate,
                record.vehicle.model or "-",
                record.team_name,
                record.laudo_label,
                format_date(record.expiration_date),
                format_days(record.days_until_expiration),
                record.bucket.badge,
            ]
        )
    return rows


def cmd_laudos(args):
    """Show expired and expiring inspection documents."""
    fleet = load_fleet(args.file)
    reference = parse_iso_date(args.as_of) or fleet.reference_date
    report = fleet.expiration_report(reference)
    summary = fleet.summary(report)

    print(f"As of: {reference.isoformat()}")
    print(f"Vehicles: {summary.total_vehicles}")
    print(f"Complete documentation: {summary.complete_vehicles}")
    print(f"Missing documentation: {summary.incomplete_vehicles}")
    print(f"Laudos needing attention: {summary.actionable_records}")
    print()

    if not report.records:
        print("No laudos expiring within 90 days.")
        return 0

    headers = ["Placa", "Modelo", "Equipe", "Laudo", "Vencimento", "Dias", "Status"]
    for bucket in Bucket:
        records = report.buckets[bucket]
        # An empty expired bucket is hidden, the others always show
        if bucket == Bucket.EXPIRED and not records:
            continue
        print(f"{bucket.title.upper()} ({len(records)}):")
        if records:
            print(tabulate(make_laudo_table(records), headers=headers, tablefmt="simple"))
        else:
            print("  Nenhum laudo nesta categoria")
        print()

    return 0


# =============================================================================
# Set Laudo command
# =============================================================================


def cmd_set_laudo(args):
    """Set or clear one document date of a vehicle."""
    fleet = load_fleet(args.file)
    vehicle = fleet.get_vehicle(args.vehicle)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.vehicle}'")
        return 1

    laudo_type = LaudoType.parse(args.laudo_type)
    if args.clear:
        new_value = None
    elif args.date:
        new_value = parse_iso_date(args.date)
    else:
        print("Error: Give a date or --clear")
        return 1

    print(f"Vehicle: {vehicle.name}")
    print(f"{laudo_type.label}: {vehicle.laudo_value(laudo_type) or '-'}")
    print(f"New value: {new_value.isoformat() if new_value else '-'}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_laudo_date(args.file, str(vehicle.id), laudo_type, new_value)
    print("Laudo updated.")
    return 0


# =============================================================================
# Score and Explain commands
# =============================================================================


def make_breakdown_table(outcomes: List[ReportOutcome], base: float) -> List[List[str]]:
    """One row per report with its signed points."""
    return [
        [f"Relatório {i}", outcome.label, format_points(outcome, base)]
        for i, outcome in enumerate(outcomes, start=1)
    ]


def print_score(total: int, outcomes: List[ReportOutcome]) -> None:
    result = score(total, outcomes)
    # Breakdown uses the unrounded base, like the final sum
    base = base_points(total)
    print(
        tabulate(
            make_breakdown_table(outcomes, base),
            headers=["Relatório", "Status", "Pontos"],
            tablefmt="simple",
            disable_numparse=True,
        )
    )
    print()
    print(f"Base points per report: {result.base_points:.2f}")
    print(
        f"On time: {result.on_time}  Late: {result.late}  Missed: {result.missed}"
    )
    print(f"Daily score: {format_score(result.daily_score)}")


def cmd_score(args):
    """Calculate a daily report score."""
    outcomes = [ReportOutcome.from_status(o) for o in args.outcomes]
    print_score(args.total, outcomes)
    return 0


def cmd_explain(args):
    """Walk through the scoring examples."""
    print("Daily score = sum of report points, always between -20 and +20")
    print("  base = 20 / reports expected per day")
    print("  on time: +base   late: -base/2   missed: -base")
    print()

    if args.scenario is not None:
        if not 1 <= args.scenario <= len(EXAMPLE_SCENARIOS):
            print(f"Error: Scenario must be between 1 and {len(EXAMPLE_SCENARIOS)}")
            return 1
        scenarios = [EXAMPLE_SCENARIOS[args.scenario - 1]]
    else:
        scenarios = EXAMPLE_SCENARIOS

    for scenario in scenarios:
        print(f"{scenario.name}:")
        print_score(scenario.total_reports, scenario.outcomes)
        print()
    return 0


# =============================================================================
# Ranking and Log Report commands
# =============================================================================


def make_ranking_table(ranking: List[AggregatedScore]) -> List[List[str]]:
    """Convert aggregated scores to table rows."""
    rows = []
    for position, agg in enumerate(ranking, start=1):
        rows.append(
            [
                str(position),
                agg.responsavel,
                format_score(agg.total_normalized_score),
                format_score(agg.average_daily_score),
                str(agg.total_days),
                str(agg.total_on_time),
                str(agg.total_late),
                str(agg.total_errors),
            ]
        )
    return rows


def cmd_ranking(args):
    """Rank people by normalized report score."""
    fleet = load_fleet(args.file)
    ranking = fleet.ranking(args.since, args.until)

    period = f"{args.since or '...'} to {args.until or '...'}"
    print(f"Period: {period}")
    print(f"Report entries: {len(fleet.reports)}")
    print()

    if not ranking:
        print("No report entries found.")
        return 0

    headers = ["#", "Responsável", "Total", "Média", "Dias", "No horário", "Atrasado", "Erro"]
    print(
        tabulate(
            make_ranking_table(ranking),
            headers=headers,
            tablefmt="simple",
            disable_numparse=True,
        )
    )
    return 0


def cmd_log_report(args):
    """Add a report log entry."""
    fleet = load_fleet(args.file)

    config = None
    for c in fleet.report_configs:
        if c.tipo_relatorio.lower() == args.tipo_relatorio.lower():
            config = c
            break

    if config is None:
        print(f"Error: Unknown report type '{args.tipo_relatorio}'")
        print("\nAvailable report types:")
        for c in fleet.report_configs:
            print(f"  {c.tipo_relatorio}")
        return 1

    outcome = ReportOutcome.from_status(args.status)
    entry = ReportEntry(
        responsavel=args.responsavel,
        data=parse_iso_date(args.date).isoformat() if args.date else date.today().isoformat(),
        tipo_relatorio=config.tipo_relatorio,
        status=outcome.status_code,
        pontos_calculados=config.points_for(outcome),
    )

    print(f"Adding report entry to {args.file}:")
    print(f"  Responsável: {entry.responsavel}")
    print(f"  Date:        {entry.data}")
    print(f"  Report:      {entry.tipo_relatorio}")
    print(f"  Status:      {outcome.label}")
    print(f"  Points:      {entry.pontos_calculados}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_report_entry(args.file, entry)
    print("Entry saved.")
    return 0


# =============================================================================
# Export command
# =============================================================================


def cmd_export(args):
    """Export laudos, vehicles or reports to a CSV file."""
    fleet = load_fleet(args.file)
    if args.what == "laudos":
        reference = parse_iso_date(args.as_of) or fleet.reference_date
        rows = fleet.expiration_report(reference).records
        columns = LAUDO_COLUMNS
    elif args.what == "vehicles":
        rows = fleet.vehicles
        columns = VEHICLE_COLUMNS
    else:
        rows = fleet.reports
        columns = REPORT_COLUMNS

    if not write_delimited(args.output, rows, columns):
        print("Nothing to export.")
        return 0

    print(f"Exported {len(rows)} rows to {args.output}")
    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "laudos": cmd_laudos,
    "set-laudo": cmd_set_laudo,
    "score": cmd_score,
    "explain": cmd_explain,
    "ranking": cmd_ranking,
    "log-report": cmd_log_report,
    "export": cmd_export,
}

# Commands that work without a fleet file
STANDALONE_COMMANDS = {"score", "explain"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet operations dashboard tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -f data/fleet.yaml laudos
  %(prog)s -f data/fleet.yaml laudos --as-of 2026-01-15
  %(prog)s -f data/fleet.yaml set-laudo ABC1D23 liner 2026-12-01
  %(prog)s -f data/fleet.yaml set-laudo ABC1D23 tacografo --clear
  %(prog)s score 4 on_time late on_time missed
  %(prog)s explain --scenario 2
  %(prog)s -f data/fleet.yaml ranking --since 2026-10-01
  %(prog)s -f data/fleet.yaml log-report Maria "Check-list" NO_HORARIO
  %(prog)s -f data/fleet.yaml export laudos laudos.csv
""",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=Path(os.environ.get("FLEET_FILE", DEFAULT_FLEET_FILE)),
        help="Path to fleet YAML file (default: $FLEET_FILE or data/fleet.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Laudos subcommand
    laudos_parser = subparsers.add_parser(
        "laudos", help="Show expired and expiring inspection documents"
    )
    laudos_parser.add_argument(
        "--as-of",
        type=str,
        help="Reference date in YYYY-MM-DD format (default: file state or today)",
    )

    # Set Laudo subcommand
    set_laudo_parser = subparsers.add_parser(
        "set-laudo", help="Set or clear a vehicle's document date"
    )
    set_laudo_parser.add_argument("vehicle", type=str, help="Vehicle id or plate")
    set_laudo_parser.add_argument(
        "laudo_type",
        type=str,
        help="Document type (eletrico, acustico, liner, tacografo)",
    )
    set_laudo_parser.add_argument(
        "date", type=str, nargs="?", help="Expiration date in YYYY-MM-DD format"
    )
    set_laudo_parser.add_argument(
        "--clear", action="store_true", help="Remove the stored date"
    )
    set_laudo_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Score subcommand
    score_parser = subparsers.add_parser("score", help="Calculate a daily report score")
    score_parser.add_argument(
        "total", type=int, help="Number of reports expected per day"
    )
    score_parser.add_argument(
        "outcomes",
        nargs="*",
        help="Report outcomes: on_time, late, missed (or NO_HORARIO, ...)",
    )

    # Explain subcommand
    explain_parser = subparsers.add_parser(
        "explain", help="Walk through the scoring examples"
    )
    explain_parser.add_argument(
        "--scenario", type=int, help="Show only one example (1-based)"
    )

    # Ranking subcommand
    ranking_parser = subparsers.add_parser(
        "ranking", help="Rank people by normalized report score"
    )
    ranking_parser.add_argument(
        "--since", type=str, help="First day included (YYYY-MM-DD)"
    )
    ranking_parser.add_argument(
        "--until", type=str, help="Last day included (YYYY-MM-DD)"
    )

    # Log Report subcommand
    log_report_parser = subparsers.add_parser(
        "log-report", help="Add a report log entry"
    )
    log_report_parser.add_argument("responsavel", type=str, help="Person responsible")
    log_report_parser.add_argument("tipo_relatorio", type=str, help="Report type")
    log_report_parser.add_argument(
        "status", type=str, help="on_time, late, missed (or NO_HORARIO, ...)"
    )
    log_report_parser.add_argument(
        "--date", type=str, help="Report date in YYYY-MM-DD format (default: today)"
    )
    log_report_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Export subcommand
    export_parser = subparsers.add_parser(
        "export", help="Export laudos, vehicles or reports to a CSV file"
    )
    export_parser.add_argument("what", choices=["laudos", "vehicles", "reports"])
    export_parser.add_argument("output", type=Path, help="Output CSV path")
    export_parser.add_argument(
        "--as-of", type=str, help="Reference date for laudos (YYYY-MM-DD)"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    # Validate fleet file exists
    if args.command not in STANDALONE_COMMANDS and not args.file.exists():
        print(f"Error: File not found: {args.file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (ValueError, KeyError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"Error: {message}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
