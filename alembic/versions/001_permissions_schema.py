"""Organizations, users and the permission log.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "organization",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("permissions", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "organization_id",
            sa.String(128),
            sa.ForeignKey("organization.id"),
            nullable=False,
        ),
        sa.Column("role", sa.String(50), nullable=False, server_default="User"),
        sa.Column("permissions", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_app_user_organization_id", "app_user", ["organization_id"])
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)

    # Append-only: no foreign keys so history survives deleted targets.
    op.create_table(
        "permission_log",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("org_id", sa.String(128), nullable=False),
        sa.Column("org_name", sa.String(255), nullable=True),
        sa.Column("user_id", sa.String(128), nullable=True),
        sa.Column("user_email", sa.String(255), nullable=True),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("actor_id", sa.String(128), nullable=False),
        sa.Column("actor_email", sa.String(255), nullable=True),
        sa.Column("changed", postgresql.JSONB(), nullable=False),
        sa.Column("keys", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("scope IN ('organization', 'user')", name="ck_permission_log_scope"),
        sa.CheckConstraint("action IN ('set', 'update', 'reset')", name="ck_permission_log_action"),
    )
    op.create_index(
        "ix_permission_log_created",
        "permission_log",
        [sa.text("created_at DESC"), sa.text("id DESC")],
    )
    op.create_index("ix_permission_log_org_id", "permission_log", ["org_id"])
    op.create_index("ix_permission_log_user_id", "permission_log", ["user_id"])
    op.create_index(
        "ix_permission_log_keys",
        "permission_log",
        ["keys"],
        postgresql_using="gin",
    )

    op.execute("""
        INSERT INTO organization (id, name, permissions, created_at, updated_at) VALUES
        ('LOCAL_FOCUS_ORG_ID', 'Local Focus', NULL, NOW(), NOW())
    """)


def downgrade() -> None:
    op.drop_table("permission_log")
    op.drop_table("app_user")
    op.drop_table("organization")
