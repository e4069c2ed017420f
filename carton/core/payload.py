"""Payload & Request — inbound event envelope and its resolved, actionable form.

Invariants:
    - decode_payload() raises PayloadDecodeError on malformed input (fatal, never partial)
    - Payload.account_id travels as "email" on the wire and is never persisted
    - A payload with a non-empty cat_id can be resolved without any IO
    - The remote envelope carries the Request under "results" (also accepted as "Results")

Design Decisions:
    - Wire names kept via aliases so Python attributes stay descriptive
    - needs_remote_lookup() is the single predicate choosing the resolution path
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from carton.core.errors import PayloadDecodeError


class Payload(BaseModel):
    """Inbound event identifying a category/action to act upon."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    action: str = ""
    cat_id: str = ""
    account_id: str = Field("", alias="email")
    cat_type: str = Field("", alias="cattype")
    category: str = ""
    created_at: datetime | None = None

    def needs_remote_lookup(self) -> bool:
        return not self.cat_id


class Request(BaseModel):
    """Actionable request resolved from a Payload."""
    id: str = ""
    name: str = ""
    cat_id: str = ""
    action: str = ""
    category: str = ""
    created_at: datetime | None = None


class RequestEnvelope(BaseModel):
    """Body of GET /requests/{id}."""
    json_claz: str = ""
    results: Request = Field(
        validation_alias=AliasChoices("results", "Results"),
    )


def decode_payload(data: bytes | str) -> Payload:
    try:
        return Payload.model_validate_json(data)
    except ValidationError as e:
        raise PayloadDecodeError(_describe(e)) from e


def payload_as_bytes(
    payload: Payload,
    id: str,
    cat_id: str,
    action: str,
    category: str,
    created_at: datetime,
) -> bytes:
    """Stamp identity/category fields onto the payload and serialize it."""
    payload.id = id
    payload.cat_id = cat_id
    payload.action = action
    payload.category = category
    payload.created_at = created_at
    return payload.model_dump_json(by_alias=True).encode()


def request_from_payload(payload: Payload) -> Request:
    return Request(
        id=payload.id,
        cat_id=payload.cat_id,
        action=payload.action,
        category=payload.category,
        created_at=payload.created_at,
    )


def decode_request_envelope(body: bytes | str) -> Request:
    try:
        return RequestEnvelope.model_validate_json(body).results
    except ValidationError as e:
        raise PayloadDecodeError(_describe(e)) from e


def _describe(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]
