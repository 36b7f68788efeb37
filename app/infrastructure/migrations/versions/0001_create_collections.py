"""create users, documents and structures

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_users_name", "users", ["name"], unique=True)

    op.create_table(
        "documents",
        *_base_columns(),
        sa.Column("owner", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("sub_type", sa.Integer(), nullable=False),
        sa.Column("content", sa.JSON(), nullable=True),
    )
    op.create_index("ix_documents_owner", "documents", ["owner"])

    op.create_table(
        "structures",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("reference", sa.JSON(), nullable=True),
        sa.Column("fields", sa.JSON(), nullable=False),
    )
    op.create_index("ix_structures_name", "structures", ["name"], unique=True)


def downgrade():
    op.drop_index("ix_structures_name", table_name="structures")
    op.drop_table("structures")
    op.drop_index("ix_documents_owner", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_users_name", table_name="users")
    op.drop_table("users")
