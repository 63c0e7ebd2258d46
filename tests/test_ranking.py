#!/usr/bin/env python3
"""Tests for the normalized report ranking."""

import logging

import pytest
from fleetops import (
    ReportConfig,
    ReportEntry,
    calculate_daily_normalized_score,
    calculate_all_daily_scores,
    calculate_aggregated_scores,
    calculate_ranking_for_period,
)


@pytest.fixture
def configs():
    return [
        ReportConfig("Check-list", 2, 0, -2, ["Maria", "João"]),
        ReportConfig("Diário de Bordo", 3, 1, -3, ["Maria"]),
    ]


class TestReportConfig:
    """Tests for ReportConfig."""

    def test_defaults_responsaveis(self):
        assert ReportConfig("X", 1, 0, -1).responsaveis == []

    def test_points_for_outcome(self, configs):
        entry = ReportEntry("Maria", "2026-10-15", "Diário de Bordo", "FORA_DO_HORARIO")
        assert configs[1].points_for(entry.outcome) == 1


class TestDailyNormalizedScore:
    """Tests for calculate_daily_normalized_score."""

    def test_empty_returns_none(self, configs):
        assert calculate_daily_normalized_score([], configs) is None

    def test_all_on_time_is_plus_twenty(self, configs):
        entries = [
            ReportEntry("Maria", "2026-10-15", "Check-list", "NO_HORARIO"),
            ReportEntry("Maria", "2026-10-15", "Diário de Bordo", "NO_HORARIO"),
        ]
        daily = calculate_daily_normalized_score(entries, configs)
        assert daily.performance_index == 1
        assert daily.normalized_score == 20
        assert daily.on_time_count == 2

    def test_all_errors_is_minus_twenty(self, configs):
        entries = [ReportEntry("João", "2026-10-15", "Check-list", "ESQUECEU_ERRO")]
        daily = calculate_daily_normalized_score(entries, configs)
        assert daily.performance_index == 0
        assert daily.normalized_score == -20
        assert daily.error_count == 1

    def test_mixed_day(self, configs):
        """obtained 3 between min -5 and max 5: index 0.8, score 12."""
        entries = [
            ReportEntry("Maria", "2026-10-15", "Check-list", "NO_HORARIO"),
            ReportEntry("Maria", "2026-10-15", "Diário de Bordo", "FORA_DO_HORARIO"),
        ]
        daily = calculate_daily_normalized_score(entries, configs)
        assert daily.sum_obtained == 3
        assert daily.sum_max == 5
        assert daily.sum_min == -5
        assert daily.performance_index == pytest.approx(0.8)
        assert daily.normalized_score == pytest.approx(12.0)
        assert (daily.on_time_count, daily.late_count, daily.error_count) == (1, 1, 0)

    def test_unconfigured_type_is_ignored_in_sums(self, configs):
        entries = [
            ReportEntry("Maria", "2026-10-15", "Desconhecido", "NO_HORARIO"),
        ]
        daily = calculate_daily_normalized_score(entries, configs)
        # zero range: neutral index
        assert daily.performance_index == 0.5
        assert daily.normalized_score == 0
        assert daily.reports_count == 1
        assert daily.on_time_count == 0


class TestAllDailyScores:
    """Tests for calculate_all_daily_scores."""

    def test_groups_by_person_and_day(self, configs):
        entries = [
            ReportEntry("Maria", "2026-10-15", "Check-list", "NO_HORARIO"),
            ReportEntry("João", "2026-10-15", "Check-list", "ESQUECEU_ERRO"),
            ReportEntry("Maria", "2026-10-15", "Diário de Bordo", "FORA_DO_HORARIO"),
            ReportEntry("João", "2026-10-16", "Check-list", "NO_HORARIO"),
        ]
        scores = calculate_all_daily_scores(entries, configs)
        assert [(s.responsavel, s.data, s.reports_count) for s in scores] == [
            ("Maria", "2026-10-15", 2),
            ("João", "2026-10-15", 1),
            ("João", "2026-10-16", 1),
        ]


class TestAggregatedScores:
    """Tests for calculate_aggregated_scores and the period ranking."""

    @pytest.fixture
    def entries(self):
        return [
            ReportEntry("Maria", "2026-10-15", "Check-list", "NO_HORARIO"),
            ReportEntry("Maria", "2026-10-15", "Diário de Bordo", "FORA_DO_HORARIO"),
            ReportEntry("João", "2026-10-15", "Check-list", "ESQUECEU_ERRO"),
            ReportEntry("João", "2026-10-16", "Check-list", "NO_HORARIO"),
            ReportEntry("João", "2026-10-17", "Check-list", "NO_HORARIO"),
        ]

    def test_sorted_by_total_descending(self, entries, configs):
        ranking = calculate_aggregated_scores(calculate_all_daily_scores(entries, configs))
        assert [a.responsavel for a in ranking] == ["João", "Maria"]
        joao, maria = ranking
        assert joao.total_normalized_score == 20
        assert joao.total_days == 3
        assert joao.average_daily_score == pytest.approx(6.67)
        assert (joao.total_on_time, joao.total_late, joao.total_errors) == (2, 0, 1)
        assert joao.total_reports == 3
        assert maria.total_normalized_score == pytest.approx(12.0)
        assert maria.average_daily_score == pytest.approx(12.0)

    def test_period_filter_inclusive(self, entries, configs):
        ranking = calculate_ranking_for_period(
            entries, configs, start_date="2026-10-15", end_date="2026-10-15"
        )
        assert [a.responsavel for a in ranking] == ["Maria", "João"]
        assert ranking[1].total_normalized_score == -20

    def test_period_start_only(self, entries, configs):
        ranking = calculate_ranking_for_period(entries, configs, start_date="2026-10-16")
        assert [a.responsavel for a in ranking] == ["João"]
        assert ranking[0].total_days == 2

    def test_no_entries(self, configs):
        assert calculate_ranking_for_period([], configs) == []


class TestUnknownStatus:
    """Entries with a status outside the three report codes."""

    def test_widens_range_without_points(self, configs, caplog):
        """max 2, min -2, obtained 0: neutral index."""
        entries = [ReportEntry("João", "2026-10-15", "Check-list", "PENDENTE")]
        with caplog.at_level(logging.WARNING, logger="fleetops.ranking"):
            daily = calculate_daily_normalized_score(entries, configs)
        assert (daily.sum_max, daily.sum_min, daily.sum_obtained) == (2, -2, 0)
        assert daily.normalized_score == 0
        assert daily.reports_count == 1
        assert (daily.on_time_count, daily.late_count, daily.error_count) == (0, 0, 0)
        assert "PENDENTE" in caplog.text

    def test_mixed_with_known_status(self, configs):
        """obtained 2 between min -4 and max 4: index 0.75, score 10."""
        entries = [
            ReportEntry("João", "2026-10-15", "Check-list", "NO_HORARIO"),
            ReportEntry("João", "2026-10-15", "Check-list", "PENDENTE"),
        ]
        daily = calculate_daily_normalized_score(entries, configs)
        assert daily.performance_index == pytest.approx(0.75)
        assert daily.normalized_score == pytest.approx(10.0)
        assert daily.on_time_count == 1

    def test_ranking_still_computed(self, configs):
        entries = [
            ReportEntry("Maria", "2026-10-15", "Check-list", "NO_HORARIO"),
            ReportEntry("João", "2026-10-15", "Check-list", "PENDENTE"),
        ]
        ranking = calculate_ranking_for_period(entries, configs)
        assert [a.responsavel for a in ranking] == ["Maria", "João"]
