"""
Catalog models: sets, cards and their print variants.

These mirror the catalog JSON written by the ingestion scripts:

    [{"id": "mega-dream-ex", "name": "MEGA Dream ex", "releaseDate": "2025-11-01",
      "cards": [{"number": "001", "name": "Bulbasaur", "rarity": "Common",
                 "variants": [{"type": "Regular", "image": "..."}]}]}]
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class VariantType(str, Enum):
    """Known print variant types."""

    REGULAR = "Regular"
    BALL = "Ball"
    ENERGY = "Energy"
    REVERSE_HOLO = "Reverse Holo"
    SECRET_RARE = "Secret Rare"
    RAINBOW_RARE = "Rainbow Rare"
    HOLO = "Holo"
    FULL_ART = "Full Art"
    ALTERNATE_ART = "Alternate Art"
    RADIANT = "Radiant"
    V_UNION = "V-Union"


@dataclass(frozen=True, slots=True)
class Variant:
    """
    One print version of a card.

    Attributes:
        type: Variant type string, normally a VariantType value.
            Unknown strings are kept as-is.
        image: Image URL or relative path
    """

    type: str
    image: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Variant":
        return cls(type=str(data["type"]), image=str(data.get("image") or ""))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "image": self.image}


@dataclass(frozen=True, slots=True)
class Card:
    """
    A card within a set.

    Attributes:
        number: Zero-padded ordinal, unique within the set ("001")
        name: Display name with variant markers already stripped
        rarity: Rarity label as scraped ("Common", "Ultra Rare", ...)
        variants: Print variants in catalog order
    """

    number: str
    name: str
    rarity: str = ""
    variants: tuple[Variant, ...] = ()

    def variant_id(self, variant: Variant) -> str:
        """Collection key for one variant of this card."""
        return card_variant_id(self.number, self.name, variant.type)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        return cls(
            number=str(data["number"]),
            name=str(data["name"]),
            rarity=str(data.get("rarity") or ""),
            variants=tuple(Variant.from_dict(v) for v in data.get("variants", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "name": self.name,
            "rarity": self.rarity,
            "variants": [v.to_dict() for v in self.variants],
        }


@dataclass(frozen=True)
class CardSet:
    """A released set and its cards."""

    id: str
    name: str
    release_date: str = ""
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CardSet":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            release_date=str(data.get("releaseDate") or ""),
            cards=[Card.from_dict(c) for c in data.get("cards", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "releaseDate": self.release_date,
            "cards": [c.to_dict() for c in self.cards],
        }


def card_variant_id(number: str, name: str, variant_type: str) -> str:
    """
    Build the stable collection key for a card variant.

    Format: "{number}-{name}-{variant type}", e.g. "001-Bulbasaur-Ball".
    Renaming a card or changing a variant type orphans any flag stored
    under the old key.
    """
    return f"{number}-{name}-{variant_type}"
