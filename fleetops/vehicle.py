"""Vehicle class - a fleet vehicle and its inspection document dates."""

from datetime import date
from typing import List, Optional

from .calculations import DateLike, parse_date
from .laudo import LaudoType


class Vehicle:
    """A vehicle row with up to four laudo expiration dates."""

    def __init__(
        self,
        id: str,
        plate: str,
        model: Optional[str] = None,
        team_id: Optional[str] = None,
        laudo_eletrico: DateLike = None,
        laudo_acustico: DateLike = None,
        laudo_liner: DateLike = None,
        laudo_tacografo: DateLike = None,
    ):
        self.id = id
        self.plate = plate
        self.model = model
        self.team_id = team_id
        self.laudo_eletrico = laudo_eletrico
        self.laudo_acustico = laudo_acustico
        self.laudo_liner = laudo_liner
        self.laudo_tacografo = laudo_tacografo

    def laudo_value(self, laudo_type: LaudoType) -> DateLike:
        """Raw stored value for a document type."""
        return getattr(self, laudo_type.field)

    def laudo_date(self, laudo_type: LaudoType) -> Optional[date]:
        """Parsed expiration date, or None when absent or malformed."""
        return parse_date(self.laudo_value(laudo_type))

    @property
    def missing_laudos(self) -> List[LaudoType]:
        """Document types with no stored value."""
        return [t for t in LaudoType if not self.laudo_value(t)]

    @property
    def has_all_laudos(self) -> bool:
        return not self.missing_laudos

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.plate} ({self.model})" if self.model else self.plate
