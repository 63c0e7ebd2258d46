"""
Fleet operations models.

This package provides the data models and calculations behind the fleet
dashboard:
- Vehicle, Team: fleet table rows
- LaudoType: the four inspection documents tracked per vehicle
- Bucket: expiration windows (EXPIRED, WITHIN_30, WITHIN_60, WITHIN_90)
- classify: bucketed view of expired and expiring documents
- score: bounded daily report score
- calculate_ranking_for_period: normalized report ranking
- serialize_delimited: spreadsheet-friendly export
- Fleet: aggregate loaded from a YAML snapshot
"""

from .bucket import Bucket
from .laudo import LaudoType
from .team import Team, NO_TEAM
from .vehicle import Vehicle
from .calculations import parse_date, days_between, in_window, bucket_for, round2
from .expiration import (
    ExpirationRecord,
    ExpirationReport,
    FleetSummary,
    classify,
    count_complete,
    count_incomplete,
    summarize,
)
from .scoring import (
    ReportOutcome,
    ScoreResult,
    EXAMPLE_SCENARIOS,
    base_points,
    points_for,
    score,
)
from .ranking import (
    ReportEntry,
    ReportConfig,
    DailyScore,
    AggregatedScore,
    calculate_daily_normalized_score,
    calculate_all_daily_scores,
    calculate_aggregated_scores,
    calculate_ranking_for_period,
)
from .export import Column, serialize_delimited, write_delimited
from .fleet import Fleet
from .loader import load_fleet, save_laudo_date, save_report_entry

__all__ = [
    "Bucket",
    "LaudoType",
    "Team",
    "NO_TEAM",
    "Vehicle",
    "parse_date",
    "days_between",
    "in_window",
    "bucket_for",
    "round2",
    "ExpirationRecord",
    "ExpirationReport",
    "FleetSummary",
    "classify",
    "count_complete",
    "count_incomplete",
    "summarize",
    "ReportOutcome",
    "ScoreResult",
    "EXAMPLE_SCENARIOS",
    "base_points",
    "points_for",
    "score",
    "ReportEntry",
    "ReportConfig",
    "DailyScore",
    "AggregatedScore",
    "calculate_daily_normalized_score",
    "calculate_all_daily_scores",
    "calculate_aggregated_scores",
    "calculate_ranking_for_period",
    "Column",
    "serialize_delimited",
    "write_delimited",
    "Fleet",
    "load_fleet",
    "save_laudo_date",
    "save_report_entry",
]
