"""Bucket enum for laudo expiration urgency."""

from enum import Enum


class Bucket(Enum):
    """Expiration windows. Lower value = more urgent."""

    EXPIRED = 1
    WITHIN_30 = 2
    WITHIN_60 = 3
    WITHIN_90 = 4

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def badge(self) -> str:
        """Short status label shown next to each record."""
        return _BADGES[self]


_TITLES = {
    Bucket.EXPIRED: "Laudos Vencidos",
    Bucket.WITHIN_30: "Vencer em até 30 dias",
    Bucket.WITHIN_60: "Vencer em até 60 dias",
    Bucket.WITHIN_90: "Vencer em até 90 dias",
}

_BADGES = {
    Bucket.EXPIRED: "Vencido",
    Bucket.WITHIN_30: "Crítico",
    Bucket.WITHIN_60: "Atenção",
    Bucket.WITHIN_90: "Em breve",
}
