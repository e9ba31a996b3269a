"""
Tenant Service

Async lookups and registration for Tenant entities.
All functions accept an injected AsyncSession.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.exceptions import TenantAlreadyExistsError, TenantNotFoundError
from landing_builder.models.tenant import Tenant, TenantStatus

logger = logging.getLogger(__name__)


async def create_tenant(
    subdomain: str,
    name: str,
    email: str,
    db: AsyncSession,
    custom_domain: str | None = None,
) -> Tenant:
    """
    Register a new tenant.

    Raises:
        TenantAlreadyExistsError: The subdomain or custom domain is taken
    """
    subdomain = subdomain.strip().lower()
    if await get_tenant_by_subdomain(subdomain, db) is not None:
        raise TenantAlreadyExistsError("subdomain", subdomain)
    if custom_domain and await get_tenant_by_domain(custom_domain, db) is not None:
        raise TenantAlreadyExistsError("custom_domain", custom_domain)

    tenant = Tenant(
        subdomain=subdomain,
        name=name,
        email=email,
        custom_domain=custom_domain,
        status=TenantStatus.ACTIVE.value,
    )
    db.add(tenant)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise TenantAlreadyExistsError("subdomain", subdomain) from e
    await db.refresh(tenant)
    logger.info("Tenant created: id=%s subdomain=%s", tenant.id, tenant.subdomain)
    return tenant


async def get_tenant_by_id(tenant_id: str, db: AsyncSession) -> Tenant | None:
    """Return a Tenant by primary key, or None if not found."""
    return await db.get(Tenant, tenant_id)


async def get_tenant_by_subdomain(subdomain: str, db: AsyncSession) -> Tenant | None:
    """Return a Tenant by subdomain, or None if not found."""
    result = await db.execute(select(Tenant).where(Tenant.subdomain == subdomain.lower()))
    return result.scalars().first()


async def get_tenant_by_domain(domain: str, db: AsyncSession) -> Tenant | None:
    """Return a Tenant by custom domain, or None if not found."""
    result = await db.execute(select(Tenant).where(Tenant.custom_domain == domain))
    return result.scalars().first()


async def require_tenant_by_subdomain(subdomain: str, db: AsyncSession) -> Tenant:
    """
    Return the tenant serving ``subdomain``.

    Raises:
        TenantNotFoundError: No tenant is registered under this subdomain
    """
    tenant = await get_tenant_by_subdomain(subdomain, db)
    if tenant is None:
        raise TenantNotFoundError(message=f"Tenant not found with subdomain: {subdomain}")
    return tenant
