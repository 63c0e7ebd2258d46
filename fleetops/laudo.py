"""LaudoType enum for the four inspection documents tracked per vehicle."""

from enum import Enum


class LaudoType(Enum):
    """Document types, in the order records are generated for a vehicle."""

    ELETRICO = "laudo_eletrico"
    ACUSTICO = "laudo_acustico"
    LINER = "laudo_liner"
    TACOGRAFO = "laudo_tacografo"

    @property
    def field(self) -> str:
        """Column name in the vehicles table."""
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, text: str) -> "LaudoType":
        """
        Look up a type by field name, member name or short name.

        Accepts "laudo_liner", "LINER" or "liner" alike.
        """
        normalized = text.strip().lower()
        for laudo_type in cls:
            if normalized in (laudo_type.value, laudo_type.name.lower()):
                return laudo_type
        raise ValueError(f"Unknown laudo type '{text}'")


_LABELS = {
    LaudoType.ELETRICO: "Laudo Elétrico",
    LaudoType.ACUSTICO: "Laudo Acústico",
    LaudoType.LINER: "Laudo Liner",
    LaudoType.TACOGRAFO: "Laudo Tacógrafo",
}
