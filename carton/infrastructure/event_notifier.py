"""Event Notifiers — deliver component status events.

Invariants:
    - notify() raises EventNotifyError on any delivery failure; the caller
      decides whether to swallow it
    - LoggingEventNotifier never fails

Design Decisions:
    - HTTP POST of the event JSON: the events endpoint is owned by another service
"""

import logging

import httpx

from carton.core.errors import ErrorContext, EventNotifyError
from carton.core.repository_protocols import StatusEvent

logger = logging.getLogger(__name__)


class HttpEventNotifier:
    """POSTs status events to a configured events URL."""

    def __init__(
        self,
        events_url: str,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.events_url = events_url
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = client is None

    async def notify(self, event: StatusEvent) -> None:
        context = ErrorContext(component_id=event.component_id)
        try:
            response = await self._client.post(self.events_url, json=event.to_dict())
        except httpx.HTTPError as e:
            raise EventNotifyError(str(e) or type(e).__name__, context) from e
        if response.is_error:
            raise EventNotifyError(
                f"{response.status_code} from {self.events_url}", context,
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class LoggingEventNotifier:
    """Fallback when no events URL is configured."""

    async def notify(self, event: StatusEvent) -> None:
        logger.info(
            f"Component {event.component_id} status → {event.status}",
            extra={"component_id": event.component_id, "status": event.status},
        )
