"""
Laudo expiration classification.

Turns a list of vehicles into the sorted, bucketed list of documents that
need attention:
- One record per present document date, at most four per vehicle
- Only day offsets inside [-30, 90] are kept
- Records sorted by urgency (stable: vehicle order, then document order)
- Buckets partition the records and keep that order
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from .bucket import Bucket
from .calculations import bucket_for, days_between, in_window, parse_date
from .laudo import LaudoType
from .team import Team, resolve_team_name
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


@dataclass
class ExpirationRecord:
    """A single document that is expired or expiring soon."""

    vehicle: Vehicle
    team_name: str
    laudo_type: LaudoType
    expiration_date: date
    days_until_expiration: int

    @property
    def laudo_label(self) -> str:
        return self.laudo_type.label

    @property
    def bucket(self) -> Optional[Bucket]:
        return bucket_for(self.days_until_expiration)

    @property
    def is_expired(self) -> bool:
        return self.days_until_expiration < 0


@dataclass
class ExpirationReport:
    """Records sorted by urgency plus their bucket partition."""

    records: List[ExpirationRecord]
    buckets: Dict[Bucket, List[ExpirationRecord]] = field(default_factory=dict)

    @property
    def expired(self) -> List[ExpirationRecord]:
        return self.buckets.get(Bucket.EXPIRED, [])

    @property
    def within_30(self) -> List[ExpirationRecord]:
        return self.buckets.get(Bucket.WITHIN_30, [])

    @property
    def within_60(self) -> List[ExpirationRecord]:
        return self.buckets.get(Bucket.WITHIN_60, [])

    @property
    def within_90(self) -> List[ExpirationRecord]:
        return self.buckets.get(Bucket.WITHIN_90, [])


@dataclass
class FleetSummary:
    """Headline counts for the laudo dashboard."""

    total_vehicles: int
    complete_vehicles: int
    incomplete_vehicles: int
    actionable_records: int


def build_team_map(teams: Iterable[Team]) -> Dict[str, str]:
    """Map team id to name. Duplicate ids: last one wins."""
    return {team.id: team.name for team in teams}


def collect_records(
    vehicles: Iterable[Vehicle], team_names: Dict[str, str], reference_date: date
) -> List[ExpirationRecord]:
    """Build records for every in-window document date, in input order."""
    records = []
    for vehicle in vehicles:
        for laudo_type in LaudoType:
            raw = vehicle.laudo_value(laudo_type)
            if not raw:
                continue
            expiration = parse_date(raw)
            if expiration is None:
                logger.warning(
                    "Skipping unparseable %s date %r for vehicle %s",
                    laudo_type.field,
                    raw,
                    vehicle.plate,
                )
                continue
            days = days_between(expiration, reference_date)
            if not in_window(days):
                continue
            records.append(
                ExpirationRecord(
                    vehicle=vehicle,
                    team_name=resolve_team_name(vehicle.team_id, team_names),
                    laudo_type=laudo_type,
                    expiration_date=expiration,
                    days_until_expiration=days,
                )
            )
    return records


def partition(records: List[ExpirationRecord]) -> Dict[Bucket, List[ExpirationRecord]]:
    """Split sorted records into buckets, preserving order within each."""
    buckets: Dict[Bucket, List[ExpirationRecord]] = {b: [] for b in Bucket}
    for record in records:
        buckets[record.bucket].append(record)
    return buckets


def classify(
    vehicles: Iterable[Vehicle],
    teams: Iterable[Team],
    reference_date: Optional[date] = None,
) -> ExpirationReport:
    """
    Classify upcoming and overdue laudos for a fleet.

    Args:
        reference_date: "today" for the day offsets (default: date.today())
    """
    if reference_date is None:
        reference_date = date.today()

    team_names = build_team_map(teams)
    records = collect_records(vehicles, team_names, reference_date)
    # sorted() is stable, so ties keep vehicle order then document order
    records = sorted(records, key=lambda r: r.days_until_expiration)
    buckets = partition(records)

    logger.debug(
        "Classified %d laudo records as of %s (%s)",
        len(records),
        reference_date.isoformat(),
        ", ".join(f"{b.name}={len(buckets[b])}" for b in Bucket),
    )
    return ExpirationReport(records=records, buckets=buckets)


def count_complete(vehicles: Iterable[Vehicle]) -> int:
    """Number of vehicles with all four documents present."""
    return sum(1 for v in vehicles if v.has_all_laudos)


def count_incomplete(vehicles: Iterable[Vehicle]) -> int:
    """Number of vehicles missing at least one document."""
    return sum(1 for v in vehicles if not v.has_all_laudos)


def summarize(vehicles: List[Vehicle], report: ExpirationReport) -> FleetSummary:
    """Summary counts shown above the bucket tables."""
    return FleetSummary(
        total_vehicles=len(vehicles),
        complete_vehicles=count_complete(vehicles),
        incomplete_vehicles=count_incomplete(vehicles),
        actionable_records=len(report.records),
    )
