"""Tests for station_extractor.core.fetcher.

HTTP is served by httpx.MockTransport, so no network access is needed.
"""

import httpx
import pytest

from station_extractor.core.config import FetchConfig
from station_extractor.core.fetcher import DocumentFetcher, default_headers
from station_extractor.pydantic_models import Source

SOURCE = Source(name="Main ECJ Document", url="https://ecj.example/main.pdf")


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# Headers
# =============================================================================


class TestDefaultHeaders:

    def test_browser_like_headers(self):
        headers = default_headers()
        assert headers["User-Agent"] == FetchConfig.USER_AGENT
        assert "Mozilla" in headers["User-Agent"]
        assert headers["Referer"] == "https://ecj.com.jm/"
        assert "application/pdf" in headers["Accept"]


# =============================================================================
# fetch()
# =============================================================================


class TestDocumentFetcher:

    @pytest.mark.asyncio
    async def test_success_returns_content(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            return httpx.Response(200, content=b"%PDF-1.7 data")

        async with client_for(handler) as client:
            document = await DocumentFetcher(client=client).fetch(SOURCE)

        assert document.fetched
        assert document.content == b"%PDF-1.7 data"
        assert document.error is None
        assert seen["url"] == SOURCE.url
        assert seen["headers"]["referer"] == FetchConfig.REFERER
        assert seen["headers"]["user-agent"] == FetchConfig.USER_AGENT

    @pytest.mark.asyncio
    async def test_http_error_status_is_absorbed(self):
        async with client_for(lambda request: httpx.Response(404)) as client:
            document = await DocumentFetcher(client=client).fetch(SOURCE)

        assert not document.fetched
        assert document.content is None
        assert document.error == "HTTP 404"

    @pytest.mark.asyncio
    async def test_server_error_is_absorbed(self):
        async with client_for(lambda request: httpx.Response(503)) as client:
            document = await DocumentFetcher(client=client).fetch(SOURCE)

        assert document.error == "HTTP 503"

    @pytest.mark.asyncio
    async def test_network_error_is_absorbed(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with client_for(handler) as client:
            document = await DocumentFetcher(client=client).fetch(SOURCE)

        assert not document.fetched
        assert "ConnectError" in document.error

    @pytest.mark.asyncio
    async def test_timeout_is_absorbed(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        async with client_for(handler) as client:
            document = await DocumentFetcher(client=client, timeout=5.0).fetch(SOURCE)

        assert not document.fetched
        assert document.error == "Timed out after 5.0s"
        assert document.timed_out
        assert document.timeout_seconds == 5.0

    @pytest.mark.asyncio
    async def test_status_error_is_not_a_timeout(self):
        async with client_for(lambda request: httpx.Response(404)) as client:
            document = await DocumentFetcher(client=client).fetch(SOURCE)

        assert not document.timed_out

    @pytest.mark.asyncio
    async def test_custom_headers(self):
        seen = {}

        def handler(request):
            seen["agent"] = request.headers["user-agent"]
            return httpx.Response(200, content=b"x")

        async with client_for(handler) as client:
            fetcher = DocumentFetcher(client=client, headers={"User-Agent": "station-test"})
            await fetcher.fetch(SOURCE)

        assert seen["agent"] == "station-test"


# =============================================================================
# Client ownership
# =============================================================================


class TestClientOwnership:

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = client_for(lambda request: httpx.Response(200, content=b"x"))
        async with DocumentFetcher(client=client):
            pass
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        fetcher = DocumentFetcher()
        await fetcher.aclose()
        assert fetcher._client.is_closed
