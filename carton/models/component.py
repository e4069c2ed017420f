"""Component ORM — the flat, storage-native row for a provisioned component.

Invariants:
    - id is the primary key; every read and write is a point operation on it
    - inputs/outputs/envs/operations hold one JSON-encoded string per element
    - repo/artifacts hold a single JSON-encoded string ("" when unset)
    - No decoding happens here: rows are decoded by core/component.py

Design Decisions:
    - JSON list columns stand in for the list<text> columns of the original
      wide-column table; element strings are stored verbatim
    - created_at is a string column: the value is written by the API service
      in its own format and only passed through
"""

from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from carton.db.base import Base


class ComponentRow(Base):
    """Persisted component; composite fields stored as encoded strings."""
    __tablename__ = "components"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    tosca_type: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    inputs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    outputs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    envs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    repo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    artifacts: Mapped[str] = mapped_column(Text, nullable=False, default="")
    related_components: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    operations: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    status: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    created_at: Mapped[str] = mapped_column(
        String(64), nullable=False, default="",
    )
