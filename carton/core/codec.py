"""Column Codec — typed encode/decode boundary for JSON-string columns.

Invariants:
    - List decoders never raise: each element is decoded on its own, malformed
      elements are skipped and reported in Decoded.skipped with their index
    - Successfully decoded elements keep their original order
    - Single-value decoders return None for an empty column or a blank descriptor,
      and raise FieldDecodeError for a malformed one (the caller decides to skip)
    - encode_* output decodes back to an equal value

Design Decisions:
    - Skips are returned, not logged here: core stays free of IO; the caller
      logs with the component id attached
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from carton.core.descriptors import Artifacts, Operation, Repo
from carton.core.errors import FieldDecodeError
from carton.core.pairs import PairList, decode_pair

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class SkippedField:
    """A column element that could not be decoded."""
    field: str
    index: int | None
    reason: str


@dataclass
class Decoded(Generic[T]):
    items: T
    skipped: list[SkippedField] = field(default_factory=list)


def decode_pairs(column: str, strings: list[str] | None) -> Decoded[PairList]:
    """Decode an inputs/outputs/envs column into a PairList."""
    pairs = []
    skipped = []
    for index, text in enumerate(strings or []):
        try:
            pairs.append(decode_pair(text))
        except FieldDecodeError as e:
            skipped.append(SkippedField(column, index, e.message))
    return Decoded(PairList(pairs), skipped)


def decode_operations(strings: list[str] | None) -> Decoded[list[Operation]]:
    ops = []
    skipped = []
    for index, text in enumerate(strings or []):
        try:
            ops.append(_decode_model(text, Operation, "operation"))
        except FieldDecodeError as e:
            skipped.append(SkippedField("operations", index, e.message))
    return Decoded(ops, skipped)


def decode_repo(text: str | None) -> Repo | None:
    if not text or not text.strip():
        return None
    repo = _decode_model(text, Repo, "repo")
    return None if repo.is_blank() else repo


def decode_artifacts(text: str | None) -> Artifacts | None:
    if not text or not text.strip():
        return None
    artifacts = _decode_model(text, Artifacts, "artifacts")
    return None if artifacts.is_blank() else artifacts


def encode_operation(op: Operation) -> str:
    return op.model_dump_json()


def encode_repo(repo: Repo | None) -> str:
    return repo.model_dump_json() if repo is not None else ""


def encode_artifacts(artifacts: Artifacts | None) -> str:
    return artifacts.model_dump_json() if artifacts is not None else ""


def _decode_model(text: str, model: type[M], shape: str) -> M:
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        raise FieldDecodeError.from_validation(e, shape) from e
