"""create_tenants_and_pages

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates the `tenants` table and the `pages` table holding each page's
section/block document as JSON, unique per (tenant_id, slug).
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    # 1. Create tenants table
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("subdomain", sa.String(63), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("custom_domain", sa.String(253), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("custom_domain"),
    )
    op.create_index(op.f("ix_tenants_subdomain"), "tenants", ["subdomain"], unique=True)
    op.create_index(op.f("ix_tenants_email"), "tenants", ["email"], unique=False)
    op.create_index("idx_tenant_status_created", "tenants", ["status", "created_at"], unique=False)

    # 2. Create pages table
    op.create_table(
        "pages",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("tenant_id", sa.String(32), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, server_default=""),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("meta_keywords", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("content", sa.JSON(), nullable=False),
        sa.Column("seo_settings", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "slug", name="uq_page_tenant_slug"),
    )
    op.create_index(op.f("ix_pages_tenant_id"), "pages", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_pages_slug"), "pages", ["slug"], unique=False)
    op.create_index("idx_page_tenant_status", "pages", ["tenant_id", "status"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_page_tenant_status", table_name="pages")
    op.drop_index(op.f("ix_pages_slug"), table_name="pages")
    op.drop_index(op.f("ix_pages_tenant_id"), table_name="pages")
    op.drop_table("pages")

    op.drop_index("idx_tenant_status_created", table_name="tenants")
    op.drop_index(op.f("ix_tenants_email"), table_name="tenants")
    op.drop_index(op.f("ix_tenants_subdomain"), table_name="tenants")
    op.drop_table("tenants")
