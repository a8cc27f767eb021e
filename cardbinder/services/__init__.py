"""
cardbinder services.

Variant rules, catalog loading and collection tracking.
"""

from cardbinder.services.catalog import CatalogLoadError, load_catalog
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
from cardbinder.services.local_cache import LocalCache, LocalCacheError
from cardbinder.services.remote_collection import RemoteCollectionClient, RemoteCollectionError
from cardbinder.services.session import (
    BinderSession,
    IneligibleVariantError,
    UnknownCardError,
    UnknownSetError,
    create_binder_session,
)
from cardbinder.services.variant_rules import (
    CardCategory,
    card_category,
    eligible_variants,
    is_energy_card,
    is_ex_card,
    is_trainer_card,
    is_valid_variant,
    is_valid_variant_type,
)

__all__ = [
    "BinderSession",
    "CardCategory",
    "CardType",
    "CardVariantEntry",
    "CatalogLoadError",
    "CollectionStore",
    "FilterOptions",
    "IneligibleVariantError",
    "LocalCache",
    "LocalCacheError",
    "RemoteCollectionClient",
    "RemoteCollectionError",
    "SetProgress",
    "SortOrder",
    "UnknownCardError",
    "UnknownSetError",
    "card_category",
    "create_binder_session",
    "create_collection_store",
    "eligible_variants",
    "filter_options",
    "is_energy_card",
    "is_ex_card",
    "is_trainer_card",
    "is_valid_variant",
    "is_valid_variant_type",
    "list_card_variants",
    "load_catalog",
    "set_progress",
]
