"""
Database CRUD operations for collected flags.

The service keeps one row per (set, card variant). A set's flags are
always replaced as a whole; single cards are only ever toggled.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.models.collection import CollectionState
from cardbinder.models.db import CollectedVariantDB


async def get_all_collections(session: AsyncSession) -> CollectionState:
    """Every set's flags, keyed by set id."""
    result = await session.execute(
        select(CollectedVariantDB).order_by(CollectedVariantDB.set_id, CollectedVariantDB.id)
    )
    state: CollectionState = {}
    for row in result.scalars():
        state.setdefault(row.set_id, {})[row.card_variant_id] = row.collected
    return state


async def get_set_collection(session: AsyncSession, set_id: str) -> dict[str, bool]:
    """
    One set's flags.

    Returns an empty dict for a set with no rows.
    """
    result = await session.execute(
        select(CollectedVariantDB)
        .where(CollectedVariantDB.set_id == set_id)
        .order_by(CollectedVariantDB.id)
    )
    return {row.card_variant_id: row.collected for row in result.scalars()}


async def replace_set_collection(
    session: AsyncSession,
    set_id: str,
    flags: dict[str, bool],
) -> None:
    """Replace a set's flags with the given mapping."""
    await session.execute(delete(CollectedVariantDB).where(CollectedVariantDB.set_id == set_id))

    for card_variant_id, collected in flags.items():
        session.add(
            CollectedVariantDB(set_id=set_id, card_variant_id=card_variant_id, collected=collected)
        )

    await session.flush()


async def toggle_card(session: AsyncSession, set_id: str, card_variant_id: str) -> bool:
    """
    Flip one card variant's flag.

    A card with no row is treated as not collected, so its first toggle
    stores True. Returns the new flag.
    """
    result = await session.execute(
        select(CollectedVariantDB).where(
            CollectedVariantDB.set_id == set_id,
            CollectedVariantDB.card_variant_id == card_variant_id,
        )
    )
    row = result.scalar_one_or_none()

    if row is None:
        row = CollectedVariantDB(set_id=set_id, card_variant_id=card_variant_id, collected=True)
        session.add(row)
    else:
        row.collected = not row.collected

    await session.flush()
    return row.collected
