"""Hook Builder — selects the operations a repo hook should run."""

from dataclasses import dataclass, field

from carton.core.descriptors import Operation


@dataclass
class Hook:
    """Ordered operations of one category, in the order they were stored."""
    category: str
    operations: list[Operation] = field(default_factory=list)

    @property
    def enabled(self) -> bool:
        return bool(self.operations)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "enabled": self.enabled,
            "operations": [op.model_dump() for op in self.operations],
        }


def build_hook(operations: list[Operation], category: str) -> Hook:
    return Hook(
        category=category,
        operations=[op for op in operations if op.operation_type == category],
    )
