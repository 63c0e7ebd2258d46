"""Fleet class - the aggregate of vehicles, teams and report logs."""

import logging
from datetime import date
from typing import List, Optional

from .calculations import parse_date
from .expiration import ExpirationReport, FleetSummary, build_team_map, classify, summarize
from .ranking import AggregatedScore, ReportConfig, ReportEntry, calculate_ranking_for_period
from .team import Team, resolve_team_name
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class Fleet:
    """A snapshot of the fleet tables plus the report log."""

    def __init__(
        self,
        vehicles: List[Vehicle],
        teams: Optional[List[Team]] = None,
        reports: Optional[List[ReportEntry]] = None,
        report_configs: Optional[List[ReportConfig]] = None,
        state_as_of_date: Optional[str] = None,
    ):
        self.vehicles = vehicles or []
        self.teams = teams or []
        self.reports = reports or []
        self.report_configs = report_configs or []
        self._state_as_of_date = state_as_of_date

    @property
    def as_of_date(self) -> str:
        """Reference date for expirations, defaults to today."""
        if self._state_as_of_date:
            return str(self._state_as_of_date)
        return date.today().isoformat()

    @property
    def reference_date(self) -> date:
        """Parsed as_of_date. A malformed state date falls back to today."""
        parsed = parse_date(self.as_of_date)
        if parsed is None:
            logger.warning(
                "Invalid asOfDate %r, using today instead", self._state_as_of_date
            )
            return date.today()
        return parsed

    def team_name(self, team_id: Optional[str]) -> str:
        return resolve_team_name(team_id, build_team_map(self.teams))

    def get_vehicle(self, key: str) -> Optional[Vehicle]:
        """Find a vehicle by id or plate (plate is case-insensitive)."""
        for vehicle in self.vehicles:
            if str(vehicle.id) == key or vehicle.plate.lower() == key.lower():
                return vehicle
        return None

    def expiration_report(self, reference_date: Optional[date] = None) -> ExpirationReport:
        if reference_date is None:
            reference_date = self.reference_date
        return classify(self.vehicles, self.teams, reference_date)

    def summary(self, report: Optional[ExpirationReport] = None) -> FleetSummary:
        if report is None:
            report = self.expiration_report()
        return summarize(self.vehicles, report)

    def ranking(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[AggregatedScore]:
        return calculate_ranking_for_period(
            self.reports, self.report_configs, start_date, end_date
        )
