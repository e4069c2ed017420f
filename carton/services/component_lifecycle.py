"""Component Lifecycle — fetch by id and the status/state/operations mutators.

Invariants:
    - fetch_by_id() raises ComponentNotFoundError for a missing row; storage
      errors surface as DatabaseError; nothing is retried here
    - set_status() nukes and re-sets the "status" and "lastsuccessstatusupdate"
      input pairs, so repeated calls never duplicate them
    - set_status() notifies only after a successful persist; a notifier failure
      is logged and returned in MutationResult.side_effect_error, never raised
    - set_state() writes only the state column and emits nothing
    - record_operations_run() replaces the operations column with the raw
      descriptor of each ran operation, in run order
    - delete() is best-effort: any store failure is logged and returned in
      MutationResult.error (wrapped in DatabaseError if foreign), never raised

Design Decisions:
    - Mutators write columns straight to the store; the in-memory Component is
      updated only after the write succeeds (set_status works on a copy of inputs)
    - Clock injected so the status timestamp is testable
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from carton.core.codec import encode_operation
from carton.core.component import Component, DecodedComponent, component_from_row
from carton.core.descriptors import OperationRan
from carton.core.domain_types import (
    LAST_STATUS_UPDATE_KEY, STATUS_KEY, ComponentId, ComponentState, ComponentStatus,
)
from carton.core.errors import (
    CartonError, ComponentNotFoundError, DatabaseError, EventNotifyError,
)
from carton.core.pairs import PairList
from carton.core.repository_protocols import (
    ComponentStore, EventNotifier, StatusEvent,
)

logger = logging.getLogger(__name__)

# RFC 822 layout: "02 Jan 06 15:04 MST"
STATUS_TIMESTAMP_FORMAT = "%d %b %y %H:%M %Z"


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class MutationResult:
    """Outcome of a mutator, keeping the primary write apart from side effects."""
    persisted: bool
    error: CartonError | None = None
    side_effect_error: CartonError | None = None

    @property
    def ok(self) -> bool:
        return self.persisted and self.side_effect_error is None


class ComponentLifecycle:
    """Reads components and writes their lifecycle columns."""

    def __init__(
        self,
        store: ComponentStore,
        notifier: EventNotifier,
        clock: Callable[[], datetime] = _local_now,
    ):
        self.store = store
        self.notifier = notifier
        self.clock = clock

    async def fetch_decoded(self, component_id: ComponentId) -> DecodedComponent:
        """Fetch and decode, keeping the decode report."""
        row = await self.store.fetch_row(component_id)
        if row is None:
            raise ComponentNotFoundError(component_id)
        decoded = component_from_row(row)
        if not decoded.report.clean:
            logger.warning(
                f"Component {component_id} decoded with "
                f"{len(decoded.report.skipped)} skipped element(s)",
                extra={
                    "component_id": component_id,
                    "field": ",".join(decoded.report.fields()),
                    "skipped": len(decoded.report.skipped),
                },
            )
        return decoded

    async def fetch_by_id(self, component_id: ComponentId) -> Component:
        return (await self.fetch_decoded(component_id)).component

    async def set_status(
        self, component: Component, status: ComponentStatus,
    ) -> MutationResult:
        last_update = self.clock().strftime(STATUS_TIMESTAMP_FORMAT)
        inputs = PairList(component.inputs)
        inputs.replace_matching({
            LAST_STATUS_UPDATE_KEY: [last_update],
            STATUS_KEY: [status],
        })
        await self.store.update_row(ComponentId(component.id), {
            "inputs": inputs.to_encoded_strings(),
            "status": status,
        })
        component.inputs = inputs
        component.status = status
        logger.info(
            f"Component {component.id} status → {status}",
            extra={"component_id": component.id, "status": status},
        )

        event = StatusEvent(component.id, status, last_update)
        try:
            await self.notifier.notify(event)
        except Exception as e:
            err = e if isinstance(e, CartonError) else EventNotifyError(str(e))
            logger.warning(
                f"Status event for {component.id} not delivered: {e}",
                extra={"component_id": component.id, "error_code": err.code},
            )
            return MutationResult(persisted=True, side_effect_error=err)
        return MutationResult(persisted=True)

    async def set_state(
        self, component: Component, state: ComponentState,
    ) -> MutationResult:
        await self.store.update_row(ComponentId(component.id), {"state": state})
        component.state = state
        logger.debug(
            f"Component {component.id} state → {state}",
            extra={"component_id": component.id, "state": state},
        )
        return MutationResult(persisted=True)

    async def record_operations_run(
        self, component: Component, ran: Sequence[OperationRan],
    ) -> MutationResult:
        raw = [o.raw for o in ran]
        await self.store.update_row(ComponentId(component.id), {
            "operations": [encode_operation(op) for op in raw],
        })
        component.operations = raw
        return MutationResult(persisted=True)

    async def delete(self, component_id: ComponentId) -> MutationResult:
        """Best-effort delete; failures are reported, not raised."""
        try:
            await self.store.delete_row(component_id)
        except Exception as e:
            err = e if isinstance(e, CartonError) else DatabaseError(str(e), "delete")
            logger.warning(
                f"Delete of component {component_id} failed: {err.message}",
                extra={"component_id": component_id, "error_code": err.code},
            )
            return MutationResult(persisted=False, error=err)
        return MutationResult(persisted=True)
