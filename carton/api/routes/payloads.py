"""Payload Routes — resolve an inbound event payload into a Request.

Invariants:
    - Body is read raw and decoded by core (malformed → 400 PAYLOAD_DECODE_ERROR)
    - Remote failures surface as 502 REMOTE_FETCH_ERROR; nothing is retried
"""

from fastapi import APIRouter, Depends, Request

from carton.api.dependencies import get_resolver
from carton.services.payload_resolver import PayloadResolver

router = APIRouter(prefix="/api/v1/payloads", tags=["payloads"])


@router.post("/resolve")
async def resolve_payload(
    request: Request, resolver: PayloadResolver = Depends(get_resolver),
):
    body = await request.body()
    resolved = await resolver.resolve_bytes(body)
    return resolved.model_dump(mode="json")
