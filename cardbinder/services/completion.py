"""
Completion statistics and card listing for the display layer.

Only variants that pass the variant rules are counted, offered as filter
options or listed.
"""

import re
from dataclasses import dataclass
from enum import Enum

from cardbinder.models.card import Card, CardSet, Variant
from cardbinder.services.collection_store import CollectionStore
from cardbinder.services.variant_rules import eligible_variants, is_energy_card, is_trainer_card

_LEADING_DIGITS = re.compile(r"\d+")


class CardType(str, Enum):
    """Card type filter buckets. Energy cards are grouped with Trainers."""

    TRAINER = "Trainer"
    POKEMON = "Pokemon"


class SortOrder(str, Enum):
    """Orderings offered for a set's card listing."""

    NUMBER_DESC = "number-desc"
    NUMBER_ASC = "number-asc"
    NAME = "name"


@dataclass(frozen=True)
class SetProgress:
    """Collected vs. total eligible variants for one set."""

    set_id: str
    name: str
    card_count: int
    total_variants: int
    collected_variants: int

    @property
    def percentage(self) -> int:
        """Whole percent, rounded half up; 0 for a set with no eligible variants."""
        if self.total_variants == 0:
            return 0
        return int(self.collected_variants * 100 / self.total_variants + 0.5)


@dataclass(frozen=True)
class FilterOptions:
    """Values offered in the set page filter dropdowns."""

    variant_types: list[str]
    rarities: list[str]
    card_types: list[str]


@dataclass(frozen=True)
class CardVariantEntry:
    """One listed (card, variant) pair and its collected flag."""

    card: Card
    variant: Variant
    card_variant_id: str
    collected: bool


def card_type(card: Card) -> CardType:
    """Filter bucket for a card: Trainer (including Energy) or Pokémon."""
    if is_trainer_card(card.name) or is_energy_card(card.name):
        return CardType.TRAINER
    return CardType.POKEMON


def _card_number(card: Card) -> int:
    # Leading digits only; "TG05" and other non-numeric numbers sort as 0
    match = _LEADING_DIGITS.match(card.number)
    return int(match.group()) if match else 0


def set_progress(card_set: CardSet, store: CollectionStore) -> SetProgress:
    """Count eligible and collected variants in a set."""
    total = 0
    collected = 0

    for card in card_set.cards:
        for variant in eligible_variants(card):
            total += 1
            if store.is_collected(card_set.id, card.variant_id(variant)):
                collected += 1

    return SetProgress(
        set_id=card_set.id,
        name=card_set.name,
        card_count=len(card_set.cards),
        total_variants=total,
        collected_variants=collected,
    )


def filter_options(card_set: CardSet) -> FilterOptions:
    """Sorted variant types, rarities and card types present in a set."""
    variant_types: set[str] = set()
    rarities: set[str] = set()
    card_types: set[str] = set()

    for card in card_set.cards:
        variant_types.update(v.type for v in eligible_variants(card))
        if card.rarity:
            rarities.add(card.rarity)
        card_types.add(card_type(card).value)

    return FilterOptions(
        variant_types=sorted(variant_types),
        rarities=sorted(rarities),
        card_types=sorted(card_types),
    )


def list_card_variants(
    card_set: CardSet,
    store: CollectionStore,
    *,
    collected: bool | None = None,
    variant_type: str | None = None,
    rarity: str | None = None,
    card_type_filter: CardType | str | None = None,
    sort: SortOrder | str = SortOrder.NUMBER_DESC,
) -> list[CardVariantEntry]:
    """
    List a set's eligible card variants, filtered and sorted.

    Args:
        card_set: Set to list
        store: Source of collected flags
        collected: True for collected only, False for missing only, None for both
        variant_type: Only this variant type
        rarity: Only this rarity
        card_type_filter: Only Trainer or only Pokémon cards
        sort: Listing order (a SortOrder or its value). Ties keep catalog order.

    Returns:
        Matching entries. Ineligible variants are never listed.
    """
    sort = SortOrder(sort)
    entries: list[CardVariantEntry] = []

    for card in card_set.cards:
        if rarity is not None and card.rarity != rarity:
            continue
        if card_type_filter is not None and card_type(card) != card_type_filter:
            continue

        for variant in eligible_variants(card):
            if variant_type is not None and variant.type != variant_type:
                continue

            key = card.variant_id(variant)
            is_collected = store.is_collected(card_set.id, key)
            if collected is not None and is_collected is not collected:
                continue

            entries.append(CardVariantEntry(card, variant, key, is_collected))

    if sort is SortOrder.NUMBER_DESC:
        entries.sort(key=lambda e: _card_number(e.card), reverse=True)
    elif sort is SortOrder.NUMBER_ASC:
        entries.sort(key=lambda e: _card_number(e.card))
    elif sort is SortOrder.NAME:
        entries.sort(key=lambda e: e.card.name.casefold())

    return entries
