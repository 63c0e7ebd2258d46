"""Flask web application for the fleet operations dashboard."""

import os
from datetime import date
from pathlib import Path

from flask import Flask, Response, abort, flash, redirect, render_template, request, url_for

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleetops import Bucket, ReportOutcome, EXAMPLE_SCENARIOS, load_fleet, score, serialize_delimited
from fleetops.export import (
    LAUDO_COLUMNS,
    REPORT_COLUMNS,
    VEHICLE_COLUMNS,
    format_date,
    format_days,
)
from fleetops.logging_config import get_logger
from fleetops.scoring import base_points, format_points, score_band

logger = get_logger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Fleet snapshot (relative to project root unless absolute)
app.config["FLEET_FILE"] = Path(
    os.environ.get("FLEET_FILE", Path(__file__).parent.parent / "data" / "fleet.yaml")
)


def get_fleet():
    """Load the configured fleet snapshot, or None if the file is missing."""
    path = Path(app.config["FLEET_FILE"])
    if not path.exists():
        logger.warning("Fleet file not found: %s", path)
        return None
    return load_fleet(path)


def requested_reference_date(fleet):
    """
    Reference date from ?as_of=, else the snapshot date.

    Raises ValueError only for a malformed ?as_of=.
    """
    as_of = request.args.get("as_of")
    if as_of:
        return date.fromisoformat(as_of)
    return fleet.reference_date


def bucket_color(bucket: Bucket) -> str:
    """Get Tailwind color classes for a bucket card."""
    colors = {
        Bucket.EXPIRED: "border-red-500 text-red-700",
        Bucket.WITHIN_30: "border-red-400 text-red-600",
        Bucket.WITHIN_60: "border-orange-400 text-orange-600",
        Bucket.WITHIN_90: "border-yellow-400 text-yellow-600",
    }
    return colors.get(bucket, "border-gray-200 text-gray-800")


def bucket_badge_color(bucket: Bucket) -> str:
    """Get Tailwind color classes for a bucket badge."""
    colors = {
        Bucket.EXPIRED: "bg-red-600 text-white",
        Bucket.WITHIN_30: "bg-red-100 text-red-700",
        Bucket.WITHIN_60: "bg-orange-100 text-orange-700",
        Bucket.WITHIN_90: "bg-yellow-100 text-yellow-700",
    }
    return colors.get(bucket, "bg-gray-500 text-white")


def score_color(daily_score: float) -> str:
    """Get Tailwind text color for a daily score."""
    colors = {
        "excellent": "text-green-500",
        "good": "text-green-400",
        "warning": "text-yellow-500",
        "critical": "text-red-500",
    }
    return colors[score_band(daily_score)]


def csv_response(text: str, filename: str) -> Response:
    return Response(
        text,
        content_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename={filename}.csv",
        },
    )


# Register template filters
app.jinja_env.filters["format_date"] = format_date
app.jinja_env.filters["format_days"] = format_days
app.jinja_env.filters["bucket_color"] = bucket_color
app.jinja_env.filters["bucket_badge_color"] = bucket_badge_color
app.jinja_env.filters["score_color"] = score_color


@app.route("/")
def index():
    """Laudo dashboard: summary cards and expiration buckets."""
    fleet = get_fleet()
    if fleet is None:
        return render_template("missing.html", path=app.config["FLEET_FILE"]), 404

    try:
        reference = requested_reference_date(fleet)
    except ValueError:
        flash(f"Invalid date '{request.args['as_of']}'", "error")
        return redirect(url_for("index"))

    report = fleet.expiration_report(reference)
    summary = fleet.summary(report)

    return render_template(
        "index.html",
        report=report,
        summary=summary,
        reference=reference,
        Bucket=Bucket,
        active_tab="laudos",
    )


@app.route("/laudos.csv")
def export_laudos():
    """Download the expiring laudos as CSV."""
    fleet = get_fleet()
    if fleet is None:
        abort(404)
    try:
        reference = requested_reference_date(fleet)
    except ValueError:
        flash(f"Invalid date '{request.args['as_of']}'", "error")
        return redirect(url_for("index"))

    records = fleet.expiration_report(reference).records
    if not records:
        flash("Nenhum laudo para exportar", "error")
        return redirect(url_for("index", as_of=reference.isoformat()))
    return csv_response(
        serialize_delimited(records, LAUDO_COLUMNS), f"laudos-{reference.isoformat()}"
    )


@app.route("/vehicles.csv")
def export_vehicles():
    """Download the vehicle documentation table as CSV."""
    fleet = get_fleet()
    if fleet is None:
        abort(404)
    if not fleet.vehicles:
        flash("Nenhum veículo para exportar", "error")
        return redirect(url_for("index"))
    return csv_response(
        serialize_delimited(fleet.vehicles, VEHICLE_COLUMNS),
        f"veiculos-{fleet.reference_date.isoformat()}",
    )


@app.route("/scoring")
def scoring():
    """Scoring explainer with worked examples and an ad-hoc calculator."""
    try:
        selected = int(request.args.get("scenario", 0))
    except ValueError:
        selected = 0
    if not 0 <= selected < len(EXAMPLE_SCENARIOS):
        selected = 0
    scenario = EXAMPLE_SCENARIOS[selected]

    calculator = None
    total = request.args.get("total")
    if total:
        try:
            total_reports = int(total)
            outcomes = [
                ReportOutcome.from_status(o)
                for o in request.args.get("outcomes", "").split(",")
                if o.strip()
            ]
            calculator = {
                "total": total_reports,
                "outcomes": outcomes,
                "result": score(total_reports, outcomes),
                "base": base_points(total_reports),
            }
        except ValueError as e:
            logger.info("Rejected score request: %s", e)
            return render_template(
                "scoring.html",
                error=str(e),
                calculator=None,
                **_scenario_context(selected, scenario),
            ), 400

    return render_template(
        "scoring.html",
        calculator=calculator,
        **_scenario_context(selected, scenario),
    )


def _scenario_context(selected, scenario):
    return {
        "scenarios": EXAMPLE_SCENARIOS,
        "selected": selected,
        "scenario": scenario,
        "result": scenario.calculate(),
        "base": base_points(scenario.total_reports),
        "format_points": format_points,
        "active_tab": "scoring",
    }


@app.route("/ranking")
def ranking():
    """Normalized report ranking for a period."""
    fleet = get_fleet()
    if fleet is None:
        return render_template("missing.html", path=app.config["FLEET_FILE"]), 404

    since = request.args.get("since") or None
    until = request.args.get("until") or None

    return render_template(
        "ranking.html",
        ranking=fleet.ranking(since, until),
        since=since,
        until=until,
        active_tab="ranking",
    )


@app.route("/reports.csv")
def export_reports():
    """Download the report log as CSV."""
    fleet = get_fleet()
    if fleet is None:
        abort(404)
    if not fleet.reports:
        flash("Nenhum relatório para exportar", "error")
        return redirect(url_for("ranking"))
    return csv_response(
        serialize_delimited(fleet.reports, REPORT_COLUMNS),
        f"relatorios-{fleet.reference_date.isoformat()}",
    )


if __name__ == "__main__":
    # Run with debug mode for development
    app.run(debug=True, host="0.0.0.0", port=5001)
