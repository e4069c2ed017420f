"""Initial schema — components.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "components",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("tosca_type", sa.String(255), nullable=False, server_default=""),
        sa.Column("inputs", sa.JSON, nullable=False),
        sa.Column("outputs", sa.JSON, nullable=False),
        sa.Column("envs", sa.JSON, nullable=False),
        sa.Column("repo", sa.Text, nullable=False, server_default=""),
        sa.Column("artifacts", sa.Text, nullable=False, server_default=""),
        sa.Column("related_components", sa.JSON, nullable=False),
        sa.Column("operations", sa.JSON, nullable=False),
        sa.Column("status", sa.String(64), nullable=False, server_default=""),
        sa.Column("state", sa.String(64), nullable=False, server_default=""),
        sa.Column("created_at", sa.String(64), nullable=False, server_default=""),
    )


def downgrade() -> None:
    op.drop_table("components")
