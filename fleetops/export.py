"""
Delimited text export (spreadsheet-friendly CSV).

Output format:
- UTF-8 byte order mark first
- ';' between fields, '\\n' between lines, header row first
- Fields containing ';', '"' or a newline are quoted, quotes doubled
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Union

from dateutil.parser import isoparse

from .laudo import LaudoType
from .scoring import ReportOutcome

logger = logging.getLogger(__name__)

BOM = "\ufeff"
DELIMITER = ";"


class Column:
    """An export column: where the value comes from and its header."""

    def __init__(
        self,
        key: str,
        header: str,
        format: Optional[Callable[[Any, Any], Any]] = None,
    ):
        self.key = key
        self.header = header
        self.format = format

    def value_for(self, row: Any) -> Any:
        """Look up the raw value (dict key or attribute) and apply the formatter."""
        if isinstance(row, dict):
            value = row.get(self.key)
        else:
            value = getattr(row, self.key, None)
        if self.format is not None:
            return self.format(value, row)
        return value


def format_value(value: Any) -> str:
    """Render a single field, quoting it when needed."""
    if value is None:
        return ""
    text = str(value)
    if DELIMITER in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def serialize_delimited(rows: Iterable[Any], columns: List[Column]) -> str:
    """Serialize rows to BOM-prefixed, semicolon-delimited text."""
    lines = [DELIMITER.join(column.header for column in columns)]
    for row in rows:
        lines.append(
            DELIMITER.join(format_value(column.value_for(row)) for column in columns)
        )
    return BOM + "\n".join(lines)


def write_delimited(
    filename: Union[str, Path], rows: Iterable[Any], columns: List[Column]
) -> bool:
    """
    Write rows to a file.

    Returns False (and writes nothing) when there are no rows.
    """
    rows = list(rows)
    if not rows:
        logger.info("Nothing to export to %s", filename)
        return False
    with open(filename, "w", encoding="utf-8", newline="") as fp:
        fp.write(serialize_delimited(rows, columns))
    logger.info("Exported %d rows to %s", len(rows), filename)
    return True


# =============================================================================
# Field formatters
#
# Public helpers for building column sets. format_datetime and
# format_currency are not used by the built-in sets below.
# =============================================================================


def _parse(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return isoparse(str(value))


def format_date(value: Any) -> str:
    """Format as dd/mm/yyyy. Unparseable strings are returned unchanged."""
    if not value:
        return ""
    try:
        return _parse(value).strftime("%d/%m/%Y")
    except ValueError:
        return str(value)


def format_datetime(value: Any) -> str:
    """Format as dd/mm/yyyy HH:MM:SS. Unparseable strings are returned unchanged."""
    if not value:
        return ""
    try:
        return _parse(value).strftime("%d/%m/%Y %H:%M:%S")
    except ValueError:
        return str(value)


def format_currency(value: Optional[float]) -> str:
    """Format as Brazilian reais, e.g. 'R$ 1.234,56'."""
    if value is None:
        return ""
    # Two to three decimals, like toLocaleString with minimumFractionDigits=2
    text = f"{value:,.3f}"
    if text.endswith("0"):
        text = text[:-1]
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def format_boolean(
    value: Optional[bool], true_label: str = "Sim", false_label: str = "Não"
) -> str:
    if value is None:
        return ""
    return true_label if value else false_label


def format_days(days: int) -> str:
    """Format a day offset, e.g. '12d' or '5d atrás' when expired."""
    if days < 0:
        return f"{abs(days)}d atrás"
    return f"{days}d"


def format_status(status: Any) -> str:
    """Label for a report log status code. Unknown codes are shown as stored."""
    try:
        return ReportOutcome.from_status(str(status)).label
    except ValueError:
        return "" if status is None else str(status)


# =============================================================================
# Column sets
# =============================================================================


LAUDO_COLUMNS = [
    Column("vehicle", "Placa", lambda v, r: v.plate),
    Column("vehicle", "Modelo", lambda v, r: v.model or "-"),
    Column("team_name", "Equipe"),
    Column("laudo_label", "Laudo"),
    Column("expiration_date", "Vencimento", lambda v, r: format_date(v)),
    Column("days_until_expiration", "Dias", lambda v, r: format_days(v)),
    Column("bucket", "Status", lambda v, r: v.badge),
]

REPORT_COLUMNS = [
    Column("data", "Data", lambda v, r: format_date(v)),
    Column("tipo_relatorio", "Tipo Relatório"),
    Column("responsavel", "Responsável"),
    Column("status", "Status", lambda v, r: format_status(v)),
    Column("pontos_calculados", "Pontos"),
]


def _laudo_date_column(laudo_type: LaudoType) -> Column:
    return Column(laudo_type.field, laudo_type.label, lambda v, r: format_date(v))


VEHICLE_COLUMNS = [
    Column("plate", "Placa"),
    Column("model", "Modelo"),
    *[_laudo_date_column(laudo_type) for laudo_type in LaudoType],
    Column("has_all_laudos", "Documentação completa", lambda v, r: format_boolean(v)),
]
