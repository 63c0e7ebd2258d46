"""
Normalized report ranking.

Logged report entries carry per-type point values (ReportConfig). For each
person and day the obtained points are placed between the worst and best
possible totals for the reports they had, and that performance index is
mapped onto the same -20..+20 scale as the daily score. Days are then summed
into a ranking.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .calculations import round2
from .scoring import DAILY_POINTS, ReportOutcome

logger = logging.getLogger(__name__)


class ReportEntry:
    """A logged report: who, which day, which type and how it went."""

    def __init__(
        self,
        responsavel: str,
        data: str,
        tipo_relatorio: str,
        status: str,
        pontos_calculados: float = 0,
    ):
        self.responsavel = responsavel
        self.data = data
        self.tipo_relatorio = tipo_relatorio
        self.status = status
        self.pontos_calculados = pontos_calculados

    @property
    def outcome(self) -> ReportOutcome:
        return ReportOutcome.from_status(self.status)


class ReportConfig:
    """Point values for one report type."""

    def __init__(
        self,
        tipo_relatorio: str,
        pontos_no_horario: float,
        pontos_fora_do_horario: float,
        pontos_esqueceu_ou_erro: float,
        responsaveis: Optional[List[str]] = None,
    ):
        self.tipo_relatorio = tipo_relatorio
        self.pontos_no_horario = pontos_no_horario
        self.pontos_fora_do_horario = pontos_fora_do_horario
        self.pontos_esqueceu_ou_erro = pontos_esqueceu_ou_erro
        self.responsaveis = responsaveis or []

    def points_for(self, outcome: ReportOutcome) -> float:
        if outcome == ReportOutcome.ON_TIME:
            return self.pontos_no_horario
        if outcome == ReportOutcome.LATE:
            return self.pontos_fora_do_horario
        return self.pontos_esqueceu_ou_erro


@dataclass
class DailyScore:
    responsavel: str
    data: str
    sum_obtained: float
    sum_max: float
    sum_min: float
    performance_index: float
    normalized_score: float
    reports_count: int
    on_time_count: int
    late_count: int
    error_count: int


@dataclass
class AggregatedScore:
    responsavel: str
    total_normalized_score: float = 0
    total_days: int = 0
    average_daily_score: float = 0
    total_on_time: int = 0
    total_late: int = 0
    total_errors: int = 0
    total_reports: int = 0
    daily_scores: List[DailyScore] = field(default_factory=list, repr=False)


def calculate_daily_normalized_score(
    entries: List[ReportEntry], configs: Iterable[ReportConfig]
) -> Optional[DailyScore]:
    """
    Normalized score for one person's entries on one day.

    Entries whose report type has no config are ignored for the sums but
    still count towards reports_count. An entry with an unknown status still
    widens the max-min range but earns nothing and is not counted as on
    time, late or error. A zero max-min range gives a neutral index of 0.5
    (score 0).
    """
    if not entries:
        return None

    configs_by_type = {c.tipo_relatorio: c for c in configs}
    sum_obtained = sum_max = sum_min = 0.0
    counts = {outcome: 0 for outcome in ReportOutcome}

    for entry in entries:
        config = configs_by_type.get(entry.tipo_relatorio)
        if config is None:
            continue
        sum_max += config.pontos_no_horario
        sum_min += config.pontos_esqueceu_ou_erro
        try:
            outcome = entry.outcome
        except ValueError:
            logger.warning(
                "Unknown status %r for %s on %s (%s)",
                entry.status,
                entry.responsavel,
                entry.data,
                entry.tipo_relatorio,
            )
            continue
        sum_obtained += config.points_for(outcome)
        counts[outcome] += 1

    spread = sum_max - sum_min
    index = (sum_obtained - sum_min) / spread if spread != 0 else 0.5

    return DailyScore(
        responsavel=entries[0].responsavel,
        data=entries[0].data,
        sum_obtained=sum_obtained,
        sum_max=sum_max,
        sum_min=sum_min,
        performance_index=index,
        normalized_score=round2(index * 2 * DAILY_POINTS - DAILY_POINTS),
        reports_count=len(entries),
        on_time_count=counts[ReportOutcome.ON_TIME],
        late_count=counts[ReportOutcome.LATE],
        error_count=counts[ReportOutcome.MISSED],
    )


def calculate_all_daily_scores(
    entries: Iterable[ReportEntry], configs: Iterable[ReportConfig]
) -> List[DailyScore]:
    """Group entries by (person, day) and score each group."""
    configs = list(configs)
    grouped: Dict[Tuple[str, str], List[ReportEntry]] = {}
    for entry in entries:
        grouped.setdefault((entry.responsavel, entry.data), []).append(entry)

    scores = []
    for group in grouped.values():
        daily = calculate_daily_normalized_score(group, configs)
        if daily is not None:
            scores.append(daily)
    return scores


def calculate_aggregated_scores(daily_scores: Iterable[DailyScore]) -> List[AggregatedScore]:
    """Sum daily scores per person, best total first."""
    aggregated: Dict[str, AggregatedScore] = {}
    for daily in daily_scores:
        agg = aggregated.setdefault(daily.responsavel, AggregatedScore(daily.responsavel))
        agg.total_normalized_score += daily.normalized_score
        agg.total_days += 1
        agg.total_on_time += daily.on_time_count
        agg.total_late += daily.late_count
        agg.total_errors += daily.error_count
        agg.total_reports += daily.reports_count
        agg.daily_scores.append(daily)

    for agg in aggregated.values():
        if agg.total_days > 0:
            agg.average_daily_score = round2(agg.total_normalized_score / agg.total_days)
        agg.total_normalized_score = round2(agg.total_normalized_score)

    return sorted(
        aggregated.values(), key=lambda a: a.total_normalized_score, reverse=True
    )


def calculate_ranking_for_period(
    entries: Iterable[ReportEntry],
    configs: Iterable[ReportConfig],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[AggregatedScore]:
    """
    Ranking for entries between start_date and end_date (inclusive).

    Dates are ISO strings (YYYY-MM-DD) and compared as text.
    """
    filtered = list(entries)
    if start_date:
        filtered = [e for e in filtered if e.data >= start_date]
    if end_date:
        filtered = [e for e in filtered if e.data <= end_date]
    return calculate_aggregated_scores(calculate_all_daily_scores(filtered, configs))
