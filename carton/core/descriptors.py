"""Descriptors — shapes of the composite columns stored as JSON strings.

Invariants:
    - JSON field names are fixed: rows written by other services must decode unchanged
      (Repo: rtype/source/oneclick/url, Artifacts: artifact_type/content/requirements,
      Operation: operation_type/description/properties)
    - Unknown JSON fields are ignored; a wrongly typed field fails the whole descriptor
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from carton.core.pairs import Pair, PairList


class Repo(BaseModel):
    """Source repository a component is built from."""
    rtype: str = ""
    source: str = ""
    oneclick: str = ""
    url: str = ""

    def is_blank(self) -> bool:
        return not (self.rtype or self.source or self.oneclick or self.url)


class Artifacts(BaseModel):
    """Deployable artifact: kind, content blob, and requirement pairs."""
    artifact_type: str = ""
    content: str = ""
    requirements: list[Pair] = Field(default_factory=list)

    def requirement_pairs(self) -> PairList:
        return PairList(self.requirements)

    def is_blank(self) -> bool:
        return not (self.artifact_type or self.content or self.requirements)


class Operation(BaseModel):
    """One upgrade/hook operation attached to a component."""
    operation_type: str = ""
    description: str = ""
    properties: list[Pair] = Field(default_factory=list)

    def property_pairs(self) -> PairList:
        return PairList(self.properties)


@dataclass
class OperationRan:
    """Outcome of an operation executed by the upgrade engine."""
    name: str
    raw: Operation
    success: bool = True
