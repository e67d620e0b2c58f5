"""initial moderation schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-09-28 10:12:44

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _status(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, length=16)


def upgrade() -> None:
    op.create_table(
        "profile",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("role", sa.String(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_profile"),
    )
    op.create_table(
        "provider",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("zip", sa.String(), nullable=True),
        sa.Column("service", sa.String(), nullable=True),
        sa.Column("identity_key", sa.String(), nullable=False),
        sa.Column("claimed", sa.Boolean(), nullable=False),
        sa.Column("owner", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_provider"),
        sa.UniqueConstraint("identity_key", name="uq_provider_identity_key"),
    )
    op.create_table(
        "claim",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status", _status("claim_status", "pending", "approved", "rejected"), nullable=False
        ),
        sa.Column("business_email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("claimant", sa.Uuid(), nullable=False),
        sa.Column("claimant_email", sa.String(), nullable=True),
        sa.Column("provider", sa.Uuid(), nullable=False),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_by", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(
            ["provider"], ["provider.id"], name="fk_claim_provider_provider"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_claim"),
    )
    op.create_index("ix_claim_status_created_at", "claim", ["status", "created_at"])
    op.create_table(
        "review",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("provider", sa.Uuid(), nullable=False),
        sa.Column("author", sa.Uuid(), nullable=False),
        sa.Column("pricing_score", sa.Integer(), nullable=False),
        sa.Column("service_score", sa.Integer(), nullable=False),
        sa.Column("cleanliness_score", sa.Integer(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("anonymous", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["provider"], ["provider.id"], name="fk_review_provider_provider"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_review"),
    )
    op.create_index("ix_review_author_created_at", "review", ["author", "created_at"])
    op.create_table(
        "contact_message",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("from", sa.Uuid(), nullable=True),
        sa.Column(
            "status",
            _status("message_status", "new", "read", "escalated", "closed", "archived"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_contact_message"),
    )
    op.create_index(
        "ix_contact_message_status_created_at", "contact_message", ["status", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_contact_message_status_created_at", table_name="contact_message")
    op.drop_table("contact_message")
    op.drop_index("ix_review_author_created_at", table_name="review")
    op.drop_table("review")
    op.drop_index("ix_claim_status_created_at", table_name="claim")
    op.drop_table("claim")
    op.drop_table("provider")
    op.drop_table("profile")
