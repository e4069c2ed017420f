"""Route Dependencies — wires services to their collaborators per request.

Invariants:
    - HTTP clients are process-wide singletons created in the lifespan
    - Component services get a fresh DB session per request (get_db)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carton.config import Settings
from carton.infrastructure.api_client import RequestsApiClient
from carton.infrastructure.database import get_db
from carton.infrastructure.event_notifier import HttpEventNotifier, LoggingEventNotifier
from carton.services.component_lifecycle import ComponentLifecycle
from carton.services.component_store import SqlComponentStore
from carton.services.payload_resolver import PayloadResolver

# Singletons (initialized on startup)
requests_client: RequestsApiClient | None = None
event_notifier: HttpEventNotifier | LoggingEventNotifier | None = None


def init_clients(settings: Settings) -> None:
    global requests_client, event_notifier
    requests_client = RequestsApiClient(
        settings.api_url, timeout_seconds=settings.api_timeout_seconds,
    )
    if settings.events_url:
        event_notifier = HttpEventNotifier(settings.events_url)
    else:
        event_notifier = LoggingEventNotifier()


async def close_clients() -> None:
    global requests_client, event_notifier
    if requests_client:
        await requests_client.aclose()
    if isinstance(event_notifier, HttpEventNotifier):
        await event_notifier.aclose()
    requests_client = None
    event_notifier = None


def get_resolver() -> PayloadResolver:
    if not requests_client:
        raise RuntimeError("Requests API client not initialized")
    return PayloadResolver(requests_client)


def get_lifecycle(db: AsyncSession = Depends(get_db)) -> ComponentLifecycle:
    return ComponentLifecycle(
        SqlComponentStore(db), event_notifier or LoggingEventNotifier(),
    )
