"""Tests for the httpx JSON source adapter."""

import httpx
import pytest

from domainslices.adapters.http.client import HttpxJsonSource
from domainslices.core.errors import DecodeError, FetchError, TransportError
from domainslices.core.users import UserService, UserStore


def _source(handler) -> HttpxJsonSource:
    return HttpxJsonSource(
        base_url="http://api.test/",
        transport=httpx.MockTransport(handler),
    )


class TestHttpxJsonSource:
    """Tests for request handling and error mapping."""

    @pytest.mark.asyncio
    async def test_get_json_returns_decoded_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"username": "johndoe"}])

        async with _source(handler) as source:
            data = await source.get_json("/api/users")

        assert data == [{"username": "johndoe"}]
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "http://api.test/api/users"

    def test_base_url_trailing_slash_is_stripped(self) -> None:
        source = _source(lambda request: httpx.Response(200, json=[]))
        assert source.base_url == "http://api.test"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_transport_error_with_status(self) -> None:
        async with _source(lambda request: httpx.Response(503)) as source:
            with pytest.raises(TransportError) as exc_info:
                await source.get_json("/api/users")

        assert exc_info.value.status_code == 503
        assert "HTTP 503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _source(handler) as source:
            with pytest.raises(TransportError, match="connection refused") as exc_info:
                await source.get_json("/api/posts")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_url_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid URL component 'host'")

        async with _source(handler) as source:
            with pytest.raises(TransportError, match="Invalid URL") as exc_info:
                await source.get_json("/api/posts")

        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_decode_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>not json</html>")

        async with _source(handler) as source:
            with pytest.raises(DecodeError, match="invalid JSON"):
                await source.get_json("/api/users")

    @pytest.mark.asyncio
    async def test_close_closes_client(self) -> None:
        source = _source(lambda request: httpx.Response(200, json=[]))
        await source.close()
        assert source.client.is_closed


class TestHttpSourceThroughStore:
    """The store sees adapter failures only as its error message."""

    @pytest.mark.asyncio
    async def test_store_reports_http_failure(self) -> None:
        async with _source(lambda request: httpx.Response(500)) as source:
            store = UserStore(UserService(source))
            await store.fetch()

        assert store.error == "Failed to fetch users: GET /api/users returned HTTP 500"
        assert store.loading is False
        assert store.collection == ()

    @pytest.mark.asyncio
    async def test_store_reports_invalid_url(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid URL component 'host'")

        async with _source(handler) as source:
            store = UserStore(UserService(source))
            await store.fetch()

        assert store.error is not None
        assert store.error.startswith("Failed to fetch users: GET /api/users failed")
        assert store.loading is False

    @pytest.mark.asyncio
    async def test_service_wraps_decode_error(self) -> None:
        async with _source(lambda request: httpx.Response(200, content=b"{")) as source:
            with pytest.raises(FetchError) as exc_info:
                await UserService(source).fetch_all()

        assert isinstance(exc_info.value.__cause__, DecodeError)
