"""Dictionary Client — thin async proxy to the upstream word-search API.

Invariants:
    - The query is URL-encoded with quote(safe="") and sent as the keyword parameter
    - The upstream body and content type are returned untouched
    - Transport errors and non-2xx statuses become DictionaryServiceError (core/errors.py)
    - No retries: one upstream call per request

Design Decisions:
    - One httpx.AsyncClient per process, opened in the lifespan and closed on shutdown
      (connection pooling across requests)
    - Transport injectable: tests pass httpx.MockTransport instead of patching
"""

import logging
from dataclasses import dataclass
from urllib.parse import quote

import httpx
from fastapi import Request

from kanji_api.core.errors import DictionaryServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw upstream payload, forwarded verbatim."""
    content: bytes
    media_type: str


class DictionaryClient:
    """Forwards free-text searches to the upstream dictionary service."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds, transport=transport,
        )

    def build_url(self, query: str) -> str:
        return f"{self.base_url}?keyword={quote(query, safe='')}"

    async def search(self, query: str) -> UpstreamResponse:
        """Run one upstream search. Raises DictionaryServiceError on any failure."""
        url = self.build_url(query)
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(
                f"Dictionary upstream returned {status_code}",
                extra={"query": query, "upstream_status": status_code},
            )
            raise DictionaryServiceError(
                f"Upstream returned HTTP {status_code}", status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Dictionary upstream unreachable: {e}", extra={"query": query},
            )
            raise DictionaryServiceError(
                f"{type(e).__name__}: {e}",
            ) from e
        return UpstreamResponse(
            content=response.content,
            media_type=response.headers.get("content-type", "application/json"),
        )

    async def close(self) -> None:
        await self.client.aclose()


def get_dictionary_client(request: Request) -> DictionaryClient:
    """FastAPI dependency — the process-wide client built by the lifespan."""
    client: DictionaryClient | None = getattr(
        request.app.state, "dictionary_client", None,
    )
    if not client:
        raise RuntimeError("Dictionary client not initialized")
    return client
