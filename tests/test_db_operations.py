"""Tests for database CRUD operations."""

from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db.operations import (
    get_all_collections,
    get_set_collection,
    replace_set_collection,
    toggle_card,
)


class TestReplaceSetCollection:
    async def test_stores_flags(self, session: AsyncSession) -> None:
        await replace_set_collection(
            session, "set-a", {"001-Bulbasaur-Regular": True, "001-Bulbasaur-Ball": False}
        )
        await session.commit()

        flags = await get_set_collection(session, "set-a")

        assert flags == {"001-Bulbasaur-Regular": True, "001-Bulbasaur-Ball": False}

    async def test_replaces_previous_flags(self, session: AsyncSession) -> None:
        await replace_set_collection(session, "set-a", {"001-Bulbasaur-Regular": True})
        await replace_set_collection(session, "set-a", {"002-Ivysaur-Regular": True})
        await session.commit()

        assert await get_set_collection(session, "set-a") == {"002-Ivysaur-Regular": True}

    async def test_empty_mapping_clears_set(self, session: AsyncSession) -> None:
        await replace_set_collection(session, "set-a", {"001-Bulbasaur-Regular": True})
        await replace_set_collection(session, "set-a", {})

        assert await get_set_collection(session, "set-a") == {}


class TestGetAllCollections:
    async def test_groups_by_set(self, session: AsyncSession) -> None:
        await replace_set_collection(session, "set-b", {"010-Froakie-Regular": True})
        await replace_set_collection(session, "set-a", {"001-Bulbasaur-Regular": False})

        state = await get_all_collections(session)

        assert state == {
            "set-a": {"001-Bulbasaur-Regular": False},
            "set-b": {"010-Froakie-Regular": True},
        }

    async def test_empty_database(self, session: AsyncSession) -> None:
        assert await get_all_collections(session) == {}


class TestToggleCard:
    async def test_absent_card_becomes_collected(self, session: AsyncSession) -> None:
        assert await toggle_card(session, "set-a", "001-Bulbasaur-Ball") is True

    async def test_toggle_twice_restores(self, session: AsyncSession) -> None:
        await replace_set_collection(session, "set-a", {"001-Bulbasaur-Ball": True})

        assert await toggle_card(session, "set-a", "001-Bulbasaur-Ball") is False
        assert await toggle_card(session, "set-a", "001-Bulbasaur-Ball") is True

    async def test_scoped_to_set(self, session: AsyncSession) -> None:
        await toggle_card(session, "set-a", "001-Bulbasaur-Ball")

        assert await get_set_collection(session, "set-b") == {}
