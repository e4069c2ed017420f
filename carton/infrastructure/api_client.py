"""Requests API Client — fetches request records from the remote request authority.

Invariants:
    - One call → one GET /requests/{id}; no retry, no fallback
    - Transport failures map to RemoteFetchError with stage "connect" or "read"
    - Non-2xx responses map to RemoteFetchError with stage "status"
    - Returns the raw body; decoding is the resolver's job

Design Decisions:
    - Wrapper over httpx.AsyncClient: isolates error mapping from the resolver
    - Client may be injected (tests pass httpx.MockTransport-backed clients)
"""

import logging

import httpx

from carton.core.errors import ErrorContext, RemoteFetchError

logger = logging.getLogger(__name__)


class RequestsApiClient:
    """Reads /requests/{id} from the request authority."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = client is None

    async def get_request(self, request_id: str) -> bytes:
        url = f"{self.base_url}/requests/{request_id}"
        context = ErrorContext(payload_id=request_id)
        logger.info(f"get requests {request_id}", extra={"payload_id": request_id})
        try:
            response = await self._client.get(url)
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise RemoteFetchError(str(e) or type(e).__name__, "connect", context) from e
        except httpx.HTTPError as e:
            raise RemoteFetchError(str(e) or type(e).__name__, "read", context) from e

        if response.is_error:
            raise RemoteFetchError(
                f"{response.status_code} from {url}", "status", context,
            )
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
