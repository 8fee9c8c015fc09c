"""Download source documents over HTTP.

Failures never propagate: a source that cannot be retrieved comes back as a
SourceDocument with ``content=None`` and ``error`` set.
"""

import logging

import httpx

from station_extractor.core.config import FetchConfig
from station_extractor.pydantic_models.pipeline import SourceDocument
from station_extractor.pydantic_models.stations import Source

logger = logging.getLogger(__name__)


def default_headers() -> dict[str, str]:
    """Browser-like headers; some sources reject default client signatures."""
    return {
        "User-Agent": FetchConfig.USER_AGENT,
        "Accept": FetchConfig.ACCEPT,
        "Referer": FetchConfig.REFERER,
    }


class DocumentFetcher:
    """Retrieves raw document bytes for registered sources.

    Usage:
        async with DocumentFetcher() as fetcher:
            document = await fetcher.fetch(source)
            if document.fetched:
                ...

    An ``httpx.AsyncClient`` may be injected (tests pass one built on
    ``httpx.MockTransport``); an injected client is not closed by ``aclose``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = FetchConfig.TIMEOUT_SECONDS,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self.headers = headers or default_headers()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers=self.headers,
            follow_redirects=True,
        )

    async def fetch(self, source: Source) -> SourceDocument:
        """Download one source.

        Args:
            source: Registered source to retrieve.

        Returns:
            SourceDocument with ``content`` set on success, or ``error`` set
            on any network error, timeout, or non-2xx status.
        """
        logger.info(f"Downloading {source.name}...")
        try:
            response = await self._client.get(
                source.url,
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            message = f"Timed out after {self.timeout}s"
            logger.warning(f"Error downloading {source.name}: {message} ({type(e).__name__})")
            return SourceDocument(source=source, error=message, timeout_seconds=self.timeout)
        except httpx.HTTPStatusError as e:
            message = f"HTTP {e.response.status_code}"
            logger.warning(f"Error downloading {source.name}: {message}")
            return SourceDocument(source=source, error=message)
        except httpx.HTTPError as e:
            message = f"{type(e).__name__}: {e}"
            logger.warning(f"Error downloading {source.name}: {message}")
            return SourceDocument(source=source, error=message)

        logger.info(f"Downloaded {len(response.content)} bytes from {source.name}")
        return SourceDocument(source=source, content=response.content)

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, _exc_type, _exc_val, _exc_tb):
        await self.aclose()
        return False
