"""initial_schema_account_approval_record

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "account",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(length=32), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("company_name", sa.String(length=200), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("plan", sa.String(length=50), nullable=True),
        sa.Column(
            "advisory_used_count", sa.Integer(), nullable=False, server_default=sa.text("0")
        ),
        sa.Column(
            "phone_used_count", sa.Integer(), nullable=False, server_default=sa.text("0")
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_account_tenant_id", "account", ["tenant_id"])
    op.create_index("ix_account_role", "account", ["role"])
    op.create_index("ix_account_email", "account", ["email"])
    op.create_index("ix_account_company_name", "account", ["company_name"])

    op.create_table(
        "approval_request",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(length=32), nullable=True),
        sa.Column("requester_id", sa.String(), nullable=False),
        sa.Column("request_type", sa.String(length=64), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column(
            "status", sa.String(length=16), nullable=False, server_default="Pending"
        ),
        sa.Column("approver_id", sa.String(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["requester_id"], ["account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["approver_id"], ["account.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "status IN ('Pending', 'Approved', 'Rejected')",
            name="ck_approval_request_status",
        ),
    )
    op.create_index("ix_approval_request_tenant_id", "approval_request", ["tenant_id"])
    op.create_index(
        "ix_approval_request_requester_id", "approval_request", ["requester_id"]
    )
    op.create_index(
        "ix_approval_request_tenant_status", "approval_request", ["tenant_id", "status"]
    )
    op.create_index("ix_approval_request_created_at", "approval_request", ["created_at"])

    op.create_table(
        "record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(length=32), nullable=True),
        sa.Column("author_id", sa.String(), nullable=False),
        sa.Column("company_name", sa.String(length=200), nullable=True),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("file_urls", sa.JSON(), nullable=True),
        sa.Column("answer", sa.Text(), nullable=True),
        sa.Column("answered_by", sa.String(length=100), nullable=True),
        sa.Column("answered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("quoted_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("quoted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reject_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["account.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_record_tenant_id", "record", ["tenant_id"])
    op.create_index("ix_record_author_id", "record", ["author_id"])
    op.create_index("ix_record_category", "record", ["category"])
    op.create_index("ix_record_tenant_category", "record", ["tenant_id", "category"])
    op.create_index("ix_record_created_at", "record", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("record")
    op.drop_table("approval_request")
    op.drop_table("account")
