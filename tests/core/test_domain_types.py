"""Domain Types & Errors — identity wrappers, enum values, error envelopes."""

from carton.core.domain_types import (
    ComponentId, ComponentStatus, BoxLevel, ResolvePath, CI_HOOK,
)
from carton.core.errors import (
    ComponentNotFoundError, DatabaseError, ErrorCategory, FieldDecodeError,
    PayloadDecodeError, RemoteFetchError,
)


def test_identity_types_wrap_str():
    assert ComponentId("COM001") == "COM001"
    assert ComponentStatus("running") == "running"


def test_enums_serialize_to_string_values():
    assert BoxLevel.SOME.value == "some"
    assert ResolvePath.LOCAL.value == "local"
    assert ResolvePath.REMOTE.value == "remote"
    assert CI_HOOK == "continuous-integration-hook"


def test_not_found_envelope_carries_component_id():
    err = ComponentNotFoundError("COM001")
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "COMPONENT_NOT_FOUND"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["context"]["component_id"] == "COM001"


def test_error_status_codes():
    assert PayloadDecodeError("bad").http_status == 400
    assert DatabaseError("down", "update").http_status == 503
    assert RemoteFetchError("refused", "connect").http_status == 502


def test_field_decode_error_from_plain_exception():
    err = FieldDecodeError.from_validation(ValueError("nope"), "repo")
    assert err.shape == "repo"
    assert "nope" in err.message
