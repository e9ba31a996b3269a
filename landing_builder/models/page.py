import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Text, UniqueConstraint

from landing_builder.database import Base
from landing_builder.schemas.page import PageStatus


class Page(Base):
    """
    A landing page document.

    ``content`` and ``seo_settings`` hold the JSON tree produced by the
    editor (see ``landing_builder.schemas.page``). The unique constraint on
    ``(tenant_id, slug)`` is what actually guarantees slug uniqueness; the
    service-level availability check only gives early feedback.
    """

    __tablename__ = "pages"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    tenant_id = Column(String(32), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    slug = Column(String(255), nullable=False, default="", index=True)
    title = Column(String(500), nullable=False)
    meta_description = Column(Text, nullable=True)
    meta_keywords = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=PageStatus.DRAFT.value)
    content = Column(JSON, nullable=False, default=dict)
    seo_settings = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    published_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "slug", name="uq_page_tenant_slug"),
        Index("idx_page_tenant_status", "tenant_id", "status"),
    )
