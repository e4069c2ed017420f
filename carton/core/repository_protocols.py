"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions never await; the shell orchestrates the calls
"""

from dataclasses import dataclass
from typing import Any, Protocol

from carton.core.domain_types import ComponentId


class ComponentRowLike(Protocol):
    """Structural contract for persisted component rows.

    Lets core decode ORM rows (and plain test doubles) without importing models/.
    """
    id: str
    name: str
    tosca_type: str
    inputs: list[str] | None
    outputs: list[str] | None
    envs: list[str] | None
    repo: str | None
    artifacts: str | None
    related_components: list[str] | None
    operations: list[str] | None
    status: str
    state: str
    created_at: str


class ComponentStore(Protocol):
    """Keyed access to the components table, implemented by shell."""
    async def fetch_row(self, component_id: ComponentId) -> ComponentRowLike | None: ...
    async def update_row(
        self, component_id: ComponentId, fields: dict[str, Any],
    ) -> None: ...
    async def delete_row(self, component_id: ComponentId) -> None: ...


@dataclass(frozen=True)
class StatusEvent:
    """Emitted after a component status is persisted."""
    component_id: str
    status: str
    updated_at: str

    def to_dict(self) -> dict:
        return {
            "component_id": self.component_id,
            "status": self.status,
            "updated_at": self.updated_at,
        }


class EventNotifier(Protocol):
    """Contract for status event delivery, implemented by shell."""
    async def notify(self, event: StatusEvent) -> None: ...


class RequestSource(Protocol):
    """Contract for the remote request authority, implemented by shell."""
    async def get_request(self, request_id: str) -> bytes: ...
