"""Configuration fetch — one transport round trip per check, no retry, no cache.

Architecture:
  HttpxTransport   — async HTTP GET (httpx), raises TransportError
  FetchCoordinator — classifies the transport outcome into bytes or a
                     TransportError / EmptyResponse / EmptyBody failure
"""

import logging
from dataclasses import dataclass

import httpx

from launchgate.branding import AppBranding
from launchgate.core.errors import EmptyBody, EmptyResponse, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class RawResponse:
    """What a transport got back: status and payload (possibly missing)."""

    status_code: int
    body: bytes | None
    content_type: str = ""


class HttpxTransport:
    """Fetches a URI with ``httpx.AsyncClient``.

    An injected client is used as-is and left open for its owner; otherwise a
    short-lived client is created for each request.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 http_client: httpx.AsyncClient | None = None):
        self.timeout = timeout
        self._http_client = http_client

    async def perform_request(self, uri: str) -> RawResponse | None:
        headers = {
            'User-Agent': AppBranding.user_agent(),
            'Accept': 'application/json',
        }
        try:
            if self._http_client is not None:
                resp = await self._http_client.get(uri, headers=headers,
                                                   timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout,
                                             follow_redirects=True) as client:
                    resp = await client.get(uri, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not resp.is_success:
            raise TransportError(f"bad status: {resp.status_code}")

        return RawResponse(
            status_code=resp.status_code,
            body=resp.content,
            content_type=resp.headers.get('content-type', ''),
        )


class FetchCoordinator:
    """Drives the transport once and normalizes its outcome."""

    def __init__(self, transport, uri: str):
        self.transport = transport
        self.uri = uri

    async def fetch(self) -> bytes:
        """Return the payload bytes or raise a ``CheckFailure`` subclass."""
        try:
            response = await self.transport.perform_request(self.uri)
        except TransportError as e:
            logger.warning("Configuration fetch failed: %s", e)
            raise
        except Exception as e:
            logger.warning("Configuration fetch failed: %s", e)
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if response is None:
            logger.warning("Configuration fetch returned no response: %s", self.uri)
            raise EmptyResponse(f"no response from {self.uri}")

        if not response.body:
            logger.warning("Configuration response was empty: %s", self.uri)
            raise EmptyBody(f"empty body from {self.uri} (status {response.status_code})")

        logger.debug("Fetched %d bytes (%s) from %s", len(response.body),
                     response.content_type or "no content type", self.uri)
        return response.body
