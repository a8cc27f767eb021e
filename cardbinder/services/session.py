"""
Binder session.

The context object the display layer owns: the loaded catalog plus the
collection store. Nothing here is module-global; create one session per
page session.
"""

from dataclasses import dataclass

from cardbinder.config import Settings, settings
from cardbinder.models.card import Card, CardSet, Variant
from cardbinder.models.collection import ToggleResult
from cardbinder.services.catalog import load_catalog
from cardbinder.services.collection_store import CollectionStore, create_collection_store
from cardbinder.services.completion import (
    CardType,
    CardVariantEntry,
    FilterOptions,
    SetProgress,
    SortOrder,
    filter_options,
    list_card_variants,
    set_progress,
)
from cardbinder.services.variant_rules import is_valid_variant


class UnknownSetError(KeyError):
    """Raised when a set id is not in the catalog."""

    pass


class UnknownCardError(KeyError):
    """Raised when a card is not part of the given set."""

    pass


class IneligibleVariantError(ValueError):
    """Raised when toggling a variant the card cannot have."""

    pass


@dataclass
class BinderSession:
    """Catalog and collection state for one display session."""

    catalog: list[CardSet]
    store: CollectionStore

    def get_set(self, set_id: str) -> CardSet:
        """
        Look up a set by id.

        Raises:
            UnknownSetError: If no set has this id
        """
        for card_set in self.catalog:
            if card_set.id == set_id:
                return card_set
        raise UnknownSetError(set_id)

    def get_card(self, set_id: str, number: str) -> Card:
        """
        Look up a card by number within a set.

        Raises:
            UnknownSetError: If no set has this id
            UnknownCardError: If the set has no card with this number
        """
        for card in self.get_set(set_id).cards:
            if card.number == number:
                return card
        raise UnknownCardError(f"{set_id}/{number}")

    async def overview(self) -> list[SetProgress]:
        """Load every set's flags and return progress for the whole catalog."""
        await self.store.load()
        return [set_progress(card_set, self.store) for card_set in self.catalog]

    async def open_set(self, set_id: str) -> tuple[SetProgress, FilterOptions]:
        """Load one set's flags and return its progress and filter options."""
        card_set = self.get_set(set_id)
        await self.store.load(set_id)
        return set_progress(card_set, self.store), filter_options(card_set)

    def list_cards(
        self,
        set_id: str,
        *,
        collected: bool | None = None,
        variant_type: str | None = None,
        rarity: str | None = None,
        card_type: CardType | str | None = None,
        sort: SortOrder | str = SortOrder.NUMBER_DESC,
    ) -> list[CardVariantEntry]:
        """Eligible card variants of a set, filtered and sorted from memory."""
        return list_card_variants(
            self.get_set(set_id),
            self.store,
            collected=collected,
            variant_type=variant_type,
            rarity=rarity,
            card_type_filter=card_type,
            sort=sort,
        )

    def is_collected(self, set_id: str, card: Card, variant: Variant) -> bool:
        return self.store.is_collected(set_id, card.variant_id(variant))

    async def toggle(self, set_id: str, card: Card, variant: Variant) -> ToggleResult:
        """
        Toggle one eligible variant of a card in the set.

        Raises:
            UnknownSetError: If the set is not in the catalog
            UnknownCardError: If the card is not in that set
            IneligibleVariantError: If the card has no such variant or the
                variant fails the variant rules
        """
        catalog_card = self.get_card(set_id, card.number)
        if catalog_card.name != card.name:
            raise UnknownCardError(
                f"{set_id}/{card.number} is {catalog_card.name}, not {card.name}"
            )

        if all(v.type != variant.type for v in catalog_card.variants):
            raise IneligibleVariantError(f"{card.name} has no {variant.type} variant")
        if not is_valid_variant(catalog_card, variant):
            raise IneligibleVariantError(f"{card.name} cannot have a {variant.type} variant")
        return await self.store.toggle(set_id, catalog_card.variant_id(variant))


def create_binder_session(config: Settings = settings) -> BinderSession:
    """
    Load the catalog and build a store from settings.

    Raises:
        CatalogLoadError: If the catalog cannot be loaded
    """
    return BinderSession(
        catalog=load_catalog(config.catalog_dir),
        store=create_collection_store(config),
    )
