"""
Collection API endpoints.

The collection service the binder's store talks to: read all sets, read
one set, replace one set, toggle one card variant.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel, Field, StrictBool
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db import (
    get_all_collections,
    get_set_collection,
    replace_set_collection,
    toggle_card,
)
from cardbinder.db.database import get_session

router = APIRouter(prefix="/api/collection", tags=["collection"])


class SetUpdateResponse(BaseModel):
    """Response model for replacing a set's flags."""

    success: bool = True
    message: str = "Collection updated"


class ToggleResponse(BaseModel):
    """Response model for toggling one card variant."""

    success: bool = True
    collected: bool
    message: str = "Card toggled"


SetFlags = Annotated[
    dict[str, StrictBool],
    Body(
        description="Map of card variant ids to collected flags",
        examples=[{"001-Bulbasaur-Regular": True, "001-Bulbasaur-Ball": False}],
    ),
]


@router.get("", response_model=dict[str, dict[str, bool]])
async def get_collections(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, dict[str, bool]]:
    """Get every set's collected flags, keyed by set id."""
    return await get_all_collections(session)


@router.get("/{set_id}", response_model=dict[str, bool])
async def get_set(
    set_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, bool]:
    """
    Get one set's collected flags.

    Unknown sets return an empty object.
    """
    return await get_set_collection(session, set_id)


@router.post("/{set_id}", response_model=SetUpdateResponse)
async def update_set(
    set_id: str,
    flags: SetFlags,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SetUpdateResponse:
    """
    Replace one set's collected flags.

    The posted object becomes the set's whole state; ids missing from it
    are dropped.
    """
    for card_variant_id in flags:
        if not card_variant_id.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Card variant ids cannot be empty",
            )

    await replace_set_collection(session, set_id, flags)
    return SetUpdateResponse()


@router.put("/{set_id}/card/{card_variant_id}", response_model=ToggleResponse)
async def toggle_set_card(
    set_id: str,
    card_variant_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ToggleResponse:
    """Flip one card variant's flag and return the new value."""
    collected = await toggle_card(session, set_id, card_variant_id)
    return ToggleResponse(collected=collected)
