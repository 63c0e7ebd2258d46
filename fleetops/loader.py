"""YAML loading and saving utilities for fleet snapshots."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .fleet import Fleet
from .laudo import LaudoType
from .ranking import ReportConfig, ReportEntry
from .team import Team
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Vehicle, Team, ReportConfig, ReportEntry, Fleet, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle row
    if "plate" in dct:
        return Vehicle(
            dct["id"],
            dct["plate"],
            dct.get("model"),
            dct.get("team_id"),
            dct.get("laudo_eletrico"),
            dct.get("laudo_acustico"),
            dct.get("laudo_liner"),
            dct.get("laudo_tacografo"),
        )
    # Report type config
    elif "pontos_no_horario" in dct:
        return ReportConfig(
            dct["tipo_relatorio"],
            dct["pontos_no_horario"],
            dct.get("pontos_fora_do_horario", 0),
            dct.get("pontos_esqueceu_ou_erro", 0),
            dct.get("responsaveis"),
        )
    # Report log entry
    elif "tipo_relatorio" in dct and "status" in dct:
        return ReportEntry(
            dct["responsavel"],
            dct["data"],
            dct["tipo_relatorio"],
            dct["status"],
            dct.get("pontos_calculados", 0),
        )
    # Top-level fleet object
    elif "vehicles" in dct:
        state = dct.get("state") or {}
        return Fleet(
            dct["vehicles"] or [],
            dct.get("teams"),
            dct.get("reports"),
            dct.get("report_configs"),
            state.get("asOfDate"),
        )
    # Team row
    elif "id" in dct and "name" in dct:
        return Team(dct["id"], dct["name"])
    else:
        # Return dict as-is for unknown structures (like 'state')
        return dct


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """Load a fleet snapshot from a YAML file."""
    with open(filename, "rb") as fp:
        # default=str turns unquoted YAML dates back into ISO strings
        json_data = json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), default=str)
    fleet = json.loads(json_data, object_hook=_parse_object)
    if not isinstance(fleet, Fleet):
        raise ValueError(f"{filename} is not a fleet file (no 'vehicles' list)")
    logger.debug(
        "Loaded %d vehicles, %d teams, %d reports from %s",
        len(fleet.vehicles),
        len(fleet.teams),
        len(fleet.reports),
        filename,
    )
    return fleet


def _read_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r", encoding="utf-8") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader)


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w", encoding="utf-8") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def save_laudo_date(
    filename: Union[str, Path],
    vehicle_key: str,
    laudo_type: LaudoType,
    value: Optional[Union[date, str]],
) -> None:
    """
    Set (or clear, with None) one document date of a vehicle.

    The vehicle is matched by id or plate. Raises KeyError if not found.
    """
    data = _read_raw(filename)

    for row in data.get("vehicles") or []:
        plate = str(row.get("plate", ""))
        if str(row.get("id")) == vehicle_key or plate.lower() == vehicle_key.lower():
            break
    else:
        raise KeyError(f"Unknown vehicle '{vehicle_key}'")

    if isinstance(value, date):
        value = value.isoformat()
    row[laudo_type.field] = value or None

    _write_raw(filename, data)
    logger.info("Set %s=%s for vehicle %s", laudo_type.field, value, vehicle_key)


def save_report_entry(filename: Union[str, Path], entry: ReportEntry) -> None:
    """
    Append a report log entry to a fleet YAML file.

    Loads the raw YAML, appends the entry to the reports list,
    and writes back to the file.
    """
    data = _read_raw(filename)

    if data.get("reports") is None:
        data["reports"] = []

    data["reports"].append(
        {
            "responsavel": entry.responsavel,
            "data": entry.data,
            "tipo_relatorio": entry.tipo_relatorio,
            "status": entry.status,
            "pontos_calculados": entry.pontos_calculados,
        }
    )

    _write_raw(filename, data)
