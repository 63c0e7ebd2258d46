"""
Daily report score calculation.

Each person has a fixed number of reports due per day. The day is worth
DAILY_POINTS in total, split evenly across those reports:
- on time:  +base
- late:     -base / 2
- missed:   -base

All on time sums to exactly +20 and all missed to exactly -20, whatever the
quota, so people with fewer reports are not at a disadvantage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from .calculations import round2

DAILY_POINTS = 20
LATE_PENALTY_RATIO = 0.5


class ReportOutcome(Enum):
    """How a single report was delivered."""

    ON_TIME = "on_time"
    LATE = "late"
    MISSED = "missed"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def status_code(self) -> str:
        """Code used for this outcome in the report log."""
        for code, outcome in _STATUS_CODES.items():
            if outcome == self:
                return code
        raise LookupError(self)

    @classmethod
    def from_status(cls, status: str) -> "ReportOutcome":
        """
        Map a stored status code or outcome name to an outcome.

        Accepts the report log codes (NO_HORARIO, FORA_DO_HORARIO,
        ESQUECEU_ERRO) as well as on_time/late/missed (and "error").
        """
        key = status.strip()
        if key in _STATUS_CODES:
            return _STATUS_CODES[key]
        key = key.lower().replace("-", "_")
        if key == "error":
            return cls.MISSED
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown report outcome '{status}'") from None


_LABELS = {
    ReportOutcome.ON_TIME: "No horário",
    ReportOutcome.LATE: "Atrasado",
    ReportOutcome.MISSED: "Esqueceu/Erro",
}

_STATUS_CODES = {
    "NO_HORARIO": ReportOutcome.ON_TIME,
    "FORA_DO_HORARIO": ReportOutcome.LATE,
    "ESQUECEU_ERRO": ReportOutcome.MISSED,
}


@dataclass
class ScoreResult:
    """Score for one person on one day."""

    base_points: float
    daily_score: float
    on_time: int = 0
    late: int = 0
    missed: int = 0


def base_points(total_expected_reports: int) -> float:
    """Points carried by each report. The quota must be positive."""
    if total_expected_reports <= 0:
        raise ValueError(
            f"total_expected_reports must be positive, got {total_expected_reports}"
        )
    return DAILY_POINTS / total_expected_reports


def points_for(outcome: ReportOutcome, base: float) -> float:
    """Signed contribution of one report."""
    if outcome == ReportOutcome.ON_TIME:
        return base
    if outcome == ReportOutcome.LATE:
        return -base * LATE_PENALTY_RATIO
    return -base


def score(total_expected_reports: int, outcomes: Iterable[ReportOutcome]) -> ScoreResult:
    """
    Calculate the daily score for a list of report outcomes.

    Raises ValueError when total_expected_reports is not positive, or when
    more outcomes are given than the quota allows. Every accepted input
    scores within [-20, 20].
    """
    outcomes = list(outcomes)
    base = base_points(total_expected_reports)
    if len(outcomes) > total_expected_reports:
        raise ValueError(
            f"{len(outcomes)} outcomes given for a quota of {total_expected_reports}"
        )

    daily = 0.0
    counts = {outcome: 0 for outcome in ReportOutcome}
    for outcome in outcomes:
        daily += points_for(outcome, base)
        counts[outcome] += 1

    return ScoreResult(
        base_points=round2(base),
        daily_score=round2(daily),
        on_time=counts[ReportOutcome.ON_TIME],
        late=counts[ReportOutcome.LATE],
        missed=counts[ReportOutcome.MISSED],
    )


def format_points(outcome: ReportOutcome, base: float) -> str:
    """Display string for one report's points, e.g. '+3.33' or '−1.67'."""
    if outcome == ReportOutcome.ON_TIME:
        return f"+{base:.2f}"
    # U+2212 minus sign, as on the dashboard
    return f"−{abs(points_for(outcome, base)):.2f}"


def score_band(daily_score: float) -> str:
    """Color band for a daily score."""
    if daily_score >= 10:
        return "excellent"
    if daily_score >= 0:
        return "good"
    if daily_score >= -10:
        return "warning"
    return "critical"


@dataclass
class ExampleScenario:
    """A worked example for the scoring explainer."""

    name: str
    total_reports: int
    outcomes: List[ReportOutcome]

    def calculate(self) -> ScoreResult:
        return score(self.total_reports, self.outcomes)


EXAMPLE_SCENARIOS = [
    ExampleScenario("Wander (6 relatórios)", 6, [ReportOutcome.ON_TIME] * 6),
    ExampleScenario(
        "Maria (4 relatórios)",
        4,
        [
            ReportOutcome.ON_TIME,
            ReportOutcome.LATE,
            ReportOutcome.ON_TIME,
            ReportOutcome.MISSED,
        ],
    ),
    ExampleScenario(
        "João (3 relatórios)",
        3,
        [ReportOutcome.LATE, ReportOutcome.MISSED, ReportOutcome.LATE],
    ),
]
