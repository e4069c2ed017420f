"""Component — the decoded, strongly-typed domain record and its row decoder.

Invariants:
    - component_from_row() is pure and total: a malformed element in any
      composite column is skipped and reported, never raised
    - Each composite column is decoded independently; one bad column never
      affects another
    - repo/artifacts are None when unset or undecodable ("no repo" is a state)
    - Component owns its decoded sub-structures (nothing shared with the row)

Design Decisions:
    - DecodeReport returned alongside the record: callers log or surface skips
      with their own context (core has no logger)
    - Mutators do not go through this object: they write columns directly
      (services/component_lifecycle.py); the record is a transient read view
"""

from dataclasses import dataclass, field

import yaml

from carton.core.codec import (
    SkippedField, decode_artifacts, decode_operations, decode_pairs, decode_repo,
)
from carton.core.descriptors import Artifacts, Operation, Repo
from carton.core.errors import FieldDecodeError
from carton.core.pairs import PairList
from carton.core.repository_protocols import ComponentRowLike


@dataclass
class Component:
    """Domain record assembled from one components row."""
    id: str
    name: str = ""
    tosca_type: str = ""
    inputs: PairList = field(default_factory=PairList)
    outputs: PairList = field(default_factory=PairList)
    envs: PairList = field(default_factory=PairList)
    repo: Repo | None = None
    artifacts: Artifacts | None = None
    related_components: list[str] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    status: str = ""
    state: str = ""
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "tosca_type": self.tosca_type,
            "inputs": self.inputs.to_list(),
            "outputs": self.outputs.to_list(),
            "envs": self.envs.to_list(),
            "repo": self.repo.model_dump() if self.repo else None,
            "artifacts": self.artifacts.model_dump() if self.artifacts else None,
            "related_components": list(self.related_components),
            "operations": [op.model_dump() for op in self.operations],
            "status": self.status,
            "state": self.state,
            "created_at": self.created_at,
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


@dataclass
class DecodeReport:
    """Every column element dropped while decoding one row."""
    skipped: list[SkippedField] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.skipped

    def fields(self) -> list[str]:
        return sorted({s.field for s in self.skipped})


@dataclass
class DecodedComponent:
    component: Component
    report: DecodeReport


def component_from_row(row: ComponentRowLike) -> DecodedComponent:
    """Decode a persisted row. Pure, no IO, never raises on bad columns."""
    report = DecodeReport()

    inputs = decode_pairs("inputs", row.inputs)
    outputs = decode_pairs("outputs", row.outputs)
    envs = decode_pairs("envs", row.envs)
    operations = decode_operations(row.operations)
    for decoded in (inputs, outputs, envs, operations):
        report.skipped.extend(decoded.skipped)

    repo = _optional(decode_repo, row.repo, "repo", report)
    artifacts = _optional(decode_artifacts, row.artifacts, "artifacts", report)

    component = Component(
        id=row.id,
        name=row.name or "",
        tosca_type=row.tosca_type or "",
        inputs=inputs.items,
        outputs=outputs.items,
        envs=envs.items,
        repo=repo,
        artifacts=artifacts,
        related_components=list(row.related_components or []),
        operations=operations.items,
        status=row.status or "",
        state=row.state or "",
        created_at=row.created_at or "",
    )
    return DecodedComponent(component, report)


def _optional(decoder, text, column: str, report: DecodeReport):
    try:
        return decoder(text)
    except FieldDecodeError as e:
        report.skipped.append(SkippedField(column, None, e.message))
        return None
