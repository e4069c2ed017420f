"""Component Routes — read-only inspection of decoded components and their Box.

Invariants:
    - Routes never decode or derive themselves (delegate to lifecycle/core)
    - Missing component → 404 via the global CartonError handler
"""

import logging

from fastapi import APIRouter, Depends

from carton.api.dependencies import get_lifecycle
from carton.core.box import build_box
from carton.core.domain_types import ComponentId
from carton.services.component_lifecycle import ComponentLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/components", tags=["components"])


@router.get("/{component_id}")
async def get_component(
    component_id: str, lifecycle: ComponentLifecycle = Depends(get_lifecycle),
):
    """Decoded component plus the list of elements skipped while decoding."""
    decoded = await lifecycle.fetch_decoded(ComponentId(component_id))
    return {
        "component": decoded.component.to_dict(),
        "skipped": [
            {"field": s.field, "index": s.index, "reason": s.reason}
            for s in decoded.report.skipped
        ],
    }


@router.get("/{component_id}/box")
async def get_component_box(
    component_id: str, lifecycle: ComponentLifecycle = Depends(get_lifecycle),
):
    component = await lifecycle.fetch_by_id(ComponentId(component_id))
    return build_box(component).to_dict()
