"""Tests for the collection service client (mocked HTTP)."""

import json

import httpx
import pytest
import respx

from cardbinder.services.remote_collection import RemoteCollectionClient, RemoteCollectionError

BASE_URL = "http://collection.test"


@pytest.fixture
def remote() -> RemoteCollectionClient:
    return RemoteCollectionClient(BASE_URL, timeout=1.0)


class TestUrls:
    def test_collection_root(self, remote: RemoteCollectionClient) -> None:
        assert remote._url() == f"{BASE_URL}/api/collection"

    def test_card_ids_are_escaped(self, remote: RemoteCollectionClient) -> None:
        url = remote._url("set-a", "card", "004-Ethan's Pinsir-Reverse Holo")

        assert url == f"{BASE_URL}/api/collection/set-a/card/004-Ethan%27s%20Pinsir-Reverse%20Holo"

    def test_trailing_slash_on_base_url(self) -> None:
        client = RemoteCollectionClient(BASE_URL + "/")

        assert client._url("set-a") == f"{BASE_URL}/api/collection/set-a"


class TestReads:
    @respx.mock
    async def test_read_all(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection").mock(
            return_value=httpx.Response(200, json={"set-a": {"001-Bulbasaur-Ball": True}})
        )

        assert await remote.read_all() == {"set-a": {"001-Bulbasaur-Ball": True}}

    @respx.mock
    async def test_read_set(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection/set-a").mock(
            return_value=httpx.Response(200, json={"001-Bulbasaur-Ball": False})
        )

        assert await remote.read_set("set-a") == {"001-Bulbasaur-Ball": False}

    @respx.mock
    async def test_non_success_status_raises(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection/set-a").mock(return_value=httpx.Response(500))

        with pytest.raises(RemoteCollectionError):
            await remote.read_set("set-a")

    @respx.mock
    async def test_connection_error_raises(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        with pytest.raises(RemoteCollectionError, match="Connection refused"):
            await remote.read_all()

    @respx.mock
    async def test_timeout_raises(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection").mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(RemoteCollectionError):
            await remote.read_all()

    @respx.mock
    async def test_invalid_json_raises(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(RemoteCollectionError, match="invalid JSON"):
            await remote.read_all()

    @respx.mock
    async def test_malformed_body_raises(self, remote: RemoteCollectionClient) -> None:
        respx.get(f"{BASE_URL}/api/collection").mock(
            return_value=httpx.Response(200, json=["not", "a", "mapping"])
        )

        with pytest.raises(RemoteCollectionError, match="malformed"):
            await remote.read_all()

    async def test_invalid_base_url_raises(self) -> None:
        remote = RemoteCollectionClient("http://[::1", timeout=1.0)

        with pytest.raises(RemoteCollectionError, match="failed"):
            await remote.read_all()


class TestWrites:
    @respx.mock
    async def test_write_set_posts_flags(self, remote: RemoteCollectionClient) -> None:
        route = respx.post(f"{BASE_URL}/api/collection/set-a").mock(
            return_value=httpx.Response(200, json={"success": True})
        )

        await remote.write_set("set-a", {"001-Bulbasaur-Ball": True})

        assert route.called
        assert json.loads(route.calls.last.request.content) == {"001-Bulbasaur-Ball": True}

    @respx.mock
    async def test_toggle_returns_collected(self, remote: RemoteCollectionClient) -> None:
        respx.put(f"{BASE_URL}/api/collection/set-a/card/001-Bulbasaur-Ball").mock(
            return_value=httpx.Response(
                200, json={"success": True, "collected": True, "message": "Card toggled"}
            )
        )

        assert await remote.toggle_card("set-a", "001-Bulbasaur-Ball") is True

    @respx.mock
    async def test_toggle_without_flag_raises(self, remote: RemoteCollectionClient) -> None:
        respx.put(f"{BASE_URL}/api/collection/set-a/card/001-Bulbasaur-Ball").mock(
            return_value=httpx.Response(200, json={"success": True})
        )

        with pytest.raises(RemoteCollectionError, match="no collected flag"):
            await remote.toggle_card("set-a", "001-Bulbasaur-Ball")

    async def test_uses_injected_client(self) -> None:
        """A caller-provided client is used for requests."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"collected": False})
        )
        async with httpx.AsyncClient(transport=transport) as http_client:
            remote = RemoteCollectionClient(BASE_URL, client=http_client)

            assert await remote.toggle_card("set-a", "001-Bulbasaur-Ball") is False
