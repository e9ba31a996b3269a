"""
Public page resolution.

Decides which stored page answers a public request for a tenant's site.
An exact slug match on a published page wins; a request for one of the
homepage aliases (``""``, ``"home"``, ``"index"``) that has no exact match
falls back to the tenant's homepage, so ``/``, ``/home`` and ``/index`` are
interchangeable entry points.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.exceptions import PageNotFoundError
from landing_builder.models.page import Page
from landing_builder.schemas.page import PageStatus
from landing_builder.utils.slugify import HOMEPAGE_SLUGS, is_homepage_slug, normalize_slug

logger = logging.getLogger(__name__)


async def get_published_page(tenant_id: str, slug: str, db: AsyncSession) -> Page | None:
    """Return the PUBLISHED page with exactly this (already normalized) slug."""
    result = await db.execute(
        select(Page).where(
            Page.tenant_id == tenant_id,
            Page.slug == slug,
            Page.status == PageStatus.PUBLISHED.value,
        )
    )
    return result.scalars().first()


async def resolve_homepage(tenant_id: str, db: AsyncSession) -> Page | None:
    """
    Return the tenant's homepage, or None if it has no published alias page.

    Priority is ``home`` > ``index`` > ``""``. Candidates are loaded oldest
    first so that the choice stays deterministic.
    """
    result = await db.execute(
        select(Page)
        .where(
            Page.tenant_id == tenant_id,
            Page.slug.in_(HOMEPAGE_SLUGS),
            Page.status == PageStatus.PUBLISHED.value,
        )
        .order_by(Page.created_at.asc(), Page.id.asc())
    )
    candidates = list(result.scalars().all())

    for alias in HOMEPAGE_SLUGS:
        for page in candidates:
            if page.slug == alias:
                return page
    return candidates[0] if candidates else None


async def resolve_public(tenant_id: str, requested_slug: str | None, db: AsyncSession) -> Page:
    """
    Resolve a public request to a published page.

    Raises:
        PageNotFoundError: No published page satisfies the request
    """
    slug = normalize_slug(requested_slug)

    page = await get_published_page(tenant_id, slug, db)
    if page is None and is_homepage_slug(slug):
        logger.debug("No exact match for homepage alias '%s'; resolving homepage for tenant %s", slug, tenant_id)
        page = await resolve_homepage(tenant_id, db)

    if page is None:
        raise PageNotFoundError(
            message=f"Published page not found with slug: {requested_slug} for tenant: {tenant_id}"
        )
    return page
