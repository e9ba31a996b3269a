"""
Tenant model.

Each Tenant is an organisation with its own subdomain and set of pages.
The renderer only reads ``subdomain`` and ``custom_domain`` to build the
site's canonical base URL.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, String

from landing_builder.database import Base


class TenantStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_ACTIVATION = "PENDING_ACTIVATION"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    subdomain = Column(String(63), nullable=False, unique=True, index=True)  # e.g. "acme" -> acme.<platform domain>
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=TenantStatus.ACTIVE.value)
    custom_domain = Column(String(253), nullable=True, unique=True)  # optional, e.g. "www.acme.com"
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (Index("idx_tenant_status_created", "status", "created_at"),)
