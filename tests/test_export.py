#!/usr/bin/env python3
"""Tests for delimited export and field formatters."""

from datetime import date, datetime

import pytest
from fleetops import (
    Column,
    ReportEntry,
    Vehicle,
    classify,
    serialize_delimited,
    write_delimited,
)
from fleetops.export import (
    BOM,
    LAUDO_COLUMNS,
    REPORT_COLUMNS,
    VEHICLE_COLUMNS,
    format_boolean,
    format_currency,
    format_date,
    format_datetime,
    format_days,
    format_status,
    format_value,
)


class TestFormatValue:
    """Tests for format_value quoting."""

    def test_none_is_empty(self):
        assert format_value(None) == ""

    def test_plain_text_unchanged(self):
        assert format_value("ABC1D23") == "ABC1D23"
        assert format_value(42) == "42"

    def test_delimiter_is_quoted(self):
        assert format_value("a;b") == '"a;b"'

    def test_quotes_are_doubled(self):
        assert format_value('o "chefe"') == '"o ""chefe"""'

    def test_newline_is_quoted(self):
        assert format_value("linha 1\nlinha 2") == '"linha 1\nlinha 2"'


class TestSerializeDelimited:
    """Tests for serialize_delimited."""

    @pytest.fixture
    def columns(self):
        return [Column("plate", "Placa"), Column("model", "Modelo")]

    def test_bom_header_and_rows(self, columns):
        rows = [{"plate": "ABC1D23", "model": "Volvo"}, {"plate": "QWE4R56", "model": None}]
        text = serialize_delimited(rows, columns)
        assert text.startswith(BOM)
        assert text[1:].split("\n") == ["Placa;Modelo", "ABC1D23;Volvo", "QWE4R56;"]

    def test_objects_use_attributes(self, columns):
        text = serialize_delimited([Vehicle("v1", "ABC1D23", "Scania; R450")], columns)
        assert text.endswith('ABC1D23;"Scania; R450"')

    def test_formatter_receives_value_and_row(self):
        columns = [
            Column("plate", "Placa"),
            Column("team_id", "Equipe", lambda v, row: f"{v or '-'}/{row['plate']}"),
        ]
        text = serialize_delimited([{"plate": "AAA", "team_id": None}], columns)
        assert text.endswith("AAA;-/AAA")

    def test_empty_rows_is_header_only(self, columns):
        assert serialize_delimited([], columns) == BOM + "Placa;Modelo"

    def test_laudo_columns(self):
        vehicle = Vehicle("v1", "ABC1D23", "Volvo FH", laudo_liner="2026-10-14")
        report = classify([vehicle], [], date(2026, 10, 19))
        text = serialize_delimited(report.records, LAUDO_COLUMNS)
        header, row = text[1:].split("\n")
        assert header == "Placa;Modelo;Equipe;Laudo;Vencimento;Dias;Status"
        assert row == "ABC1D23;Volvo FH;Sem equipe;Laudo Liner;14/10/2026;5d atrás;Vencido"


class TestWriteDelimited:
    """Tests for write_delimited."""

    def test_writes_utf8_with_bom(self, tmp_path):
        path = tmp_path / "out.csv"
        written = write_delimited(path, [{"name": "João"}], [Column("name", "Nome")])
        assert written is True
        raw = path.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert raw.decode("utf-8-sig") == "Nome\nJoão"

    def test_no_rows_writes_nothing(self, tmp_path):
        path = tmp_path / "out.csv"
        assert write_delimited(path, [], [Column("name", "Nome")]) is False
        assert not path.exists()


class TestFormatters:
    """Tests for the field formatters."""

    def test_format_date(self):
        assert format_date("2026-10-19") == "19/10/2026"
        assert format_date(date(2026, 1, 5)) == "05/01/2026"
        assert format_date(None) == ""
        assert format_date("") == ""

    def test_format_date_unparseable_is_echoed(self):
        assert format_date("amanhã") == "amanhã"

    def test_format_datetime(self):
        assert format_datetime("2026-10-19T14:03:09") == "19/10/2026 14:03:09"
        assert format_datetime(datetime(2026, 10, 19, 8, 0)) == "19/10/2026 08:00:00"
        assert format_datetime(None) == ""

    def test_format_currency(self):
        assert format_currency(1234.5) == "R$ 1.234,50"
        assert format_currency(0) == "R$ 0,00"
        assert format_currency(1234567.891) == "R$ 1.234.567,891"
        assert format_currency(None) == ""

    def test_format_boolean(self):
        assert format_boolean(True) == "Sim"
        assert format_boolean(False) == "Não"
        assert format_boolean(None) == ""
        assert format_boolean(True, "Ativo", "Inativo") == "Ativo"

    def test_format_days(self):
        assert format_days(12) == "12d"
        assert format_days(0) == "0d"
        assert format_days(-5) == "5d atrás"

    def test_format_status(self):
        assert format_status("FORA_DO_HORARIO") == "Atrasado"
        assert format_status("PENDENTE") == "PENDENTE"
        assert format_status(None) == ""


class TestColumnSets:
    """Tests for the report and vehicle column sets."""

    def test_report_columns(self):
        entries = [
            ReportEntry("Maria", "2026-10-15", "Check-list", "NO_HORARIO", 2),
            ReportEntry("João", "2026-10-16", "Check-list", "PENDENTE", 0),
        ]
        lines = serialize_delimited(entries, REPORT_COLUMNS)[1:].split("\n")
        assert lines == [
            "Data;Tipo Relatório;Responsável;Status;Pontos",
            "15/10/2026;Check-list;Maria;No horário;2",
            "16/10/2026;Check-list;João;PENDENTE;0",
        ]

    def test_vehicle_columns(self):
        vehicles = [
            Vehicle("v1", "ABC1D23", "Volvo FH", None,
                    "2026-10-05", "2026-11-10", "2027-06-30", "2026-12-01"),
            Vehicle("v2", "QWE4R56", None, None, laudo_liner="2026-10-19"),
        ]
        lines = serialize_delimited(vehicles, VEHICLE_COLUMNS)[1:].split("\n")
        assert lines == [
            "Placa;Modelo;Laudo Elétrico;Laudo Acústico;Laudo Liner;Laudo Tacógrafo;"
            "Documentação completa",
            "ABC1D23;Volvo FH;05/10/2026;10/11/2026;30/06/2027;01/12/2026;Sim",
            "QWE4R56;;;;19/10/2026;;Não",
        ]
