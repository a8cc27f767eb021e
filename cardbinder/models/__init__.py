from cardbinder.models.card import Card, CardSet, Variant, VariantType, card_variant_id
from cardbinder.models.collection import (
    CollectionState,
    LoadResult,
    PersistResult,
    StorageBackend,
    ToggleResult,
)

__all__ = [
    "Card",
    "CardSet",
    "CollectionState",
    "LoadResult",
    "PersistResult",
    "StorageBackend",
    "ToggleResult",
    "Variant",
    "VariantType",
    "card_variant_id",
]
