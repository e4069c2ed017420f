"""Payload Resolver — turns an inbound Payload into an actionable Request.

Invariants:
    - Exactly one path per payload, chosen by Payload.needs_remote_lookup()
    - LocalResolve never does IO
    - RemoteResolve makes exactly one GET /requests/{id}; connect/read/status/decode
      failures propagate unchanged; there is no fallback to local construction

Design Decisions:
    - Two strategy classes instead of an if/else in one method: each branch is
      testable on its own and the remote path's no-fallback policy lives in one place
"""

import logging

from carton.core.domain_types import ResolvePath
from carton.core.errors import PayloadDecodeError
from carton.core.payload import (
    Payload, Request, decode_payload, decode_request_envelope, request_from_payload,
)
from carton.core.repository_protocols import RequestSource

logger = logging.getLogger(__name__)


class LocalResolve:
    path = ResolvePath.LOCAL

    async def resolve(self, payload: Payload) -> Request:
        return request_from_payload(payload)


class RemoteResolve:
    path = ResolvePath.REMOTE

    def __init__(self, source: RequestSource):
        self.source = source

    async def resolve(self, payload: Payload) -> Request:
        body = await self.source.get_request(payload.id)
        return decode_request_envelope(body)


class PayloadResolver:
    """Selects local or remote resolution for each payload."""

    def __init__(self, source: RequestSource):
        self.local = LocalResolve()
        self.remote = RemoteResolve(source)

    def select_strategy(self, payload: Payload) -> LocalResolve | RemoteResolve:
        return self.remote if payload.needs_remote_lookup() else self.local

    async def resolve(self, payload: Payload) -> Request:
        strategy = self.select_strategy(payload)
        request = await strategy.resolve(payload)
        logger.debug(
            f"Requests {request.id} resolved via {strategy.path.value}",
            extra={"payload_id": payload.id, "resolve_path": strategy.path.value},
        )
        return request

    async def resolve_bytes(self, data: bytes | str) -> Request:
        """Decode raw payload bytes, then resolve."""
        try:
            payload = decode_payload(data)
        except PayloadDecodeError as e:
            logger.error(e.message, extra={"error_code": e.code})
            raise
        return await self.resolve(payload)
