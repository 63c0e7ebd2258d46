"""Team class for vehicle ownership labels."""

from typing import Optional

NO_TEAM = "Sem equipe"


class Team:
    """An operational team that vehicles can be assigned to."""

    def __init__(self, id: str, name: str):
        self.id = id
        self.name = name


def resolve_team_name(team_id: Optional[str], team_names: dict) -> str:
    """Map a team reference to its display name, or the no-team label."""
    if not team_id:
        return NO_TEAM
    return team_names.get(team_id) or NO_TEAM
