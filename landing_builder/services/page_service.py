"""
Page Service

Async lifecycle operations for landing pages: create, full-document update,
publish/unpublish, delete and slug availability, plus the tenant-scoped
queries the authoring and public layers need.
All functions accept an injected AsyncSession.

Slugs are normalized on every write. The availability check before a write
only gives early feedback: the ``(tenant_id, slug)`` unique constraint is
the real guarantee, and losing that race is reported as the same
``SlugConflictError``.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.exceptions import PageNotFoundError, SlugConflictError, ValidationError
from landing_builder.models.page import Page
from landing_builder.schemas.page import PageCreate, PageStatus, PageUpdate
from landing_builder.utils.slugify import normalize_slug

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Queries
# ============================================================================


async def get_page(page_id: str, db: AsyncSession) -> Page:
    """Return a page by id (any status)."""
    page = await db.get(Page, page_id)
    if page is None:
        raise PageNotFoundError(message=f"Page not found with ID: {page_id}")
    return page


async def get_page_by_slug(tenant_id: str, slug: str, db: AsyncSession) -> Page:
    """Return a tenant's page by slug (any status)."""
    normalized = normalize_slug(slug)
    result = await db.execute(select(Page).where(Page.tenant_id == tenant_id, Page.slug == normalized))
    page = result.scalars().first()
    if page is None:
        raise PageNotFoundError(message=f"Page not found with slug: {slug} for tenant: {tenant_id}")
    return page


async def list_pages(tenant_id: str, db: AsyncSession, status: PageStatus | None = None) -> list[Page]:
    """Return a tenant's pages, newest first, optionally filtered by status."""
    query = select(Page).where(Page.tenant_id == tenant_id)
    if status is not None:
        query = query.where(Page.status == status.value)
    result = await db.execute(query.order_by(Page.created_at.desc(), Page.id.desc()))
    return list(result.scalars().all())


async def list_published_pages(tenant_id: str, db: AsyncSession) -> list[Page]:
    return await list_pages(tenant_id, db, status=PageStatus.PUBLISHED)


async def count_pages(tenant_id: str, status: PageStatus, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Page).where(Page.tenant_id == tenant_id, Page.status == status.value)
    )
    return result.scalar_one()


async def is_slug_available(tenant_id: str, slug: str, db: AsyncSession) -> bool:
    """Check whether a slug is free within a tenant, after normalization."""
    normalized = normalize_slug(slug)
    result = await db.execute(
        select(Page.id).where(Page.tenant_id == tenant_id, Page.slug == normalized).limit(1)
    )
    return result.first() is None


# ============================================================================
# Lifecycle
# ============================================================================


async def create_page(tenant_id: str, data: PageCreate, db: AsyncSession) -> Page:
    """
    Create a page for a tenant.

    Raises:
        ValidationError: The title is blank
        SlugConflictError: The normalized slug is already used by the tenant
    """
    _require_title(data.title)
    slug = normalize_slug(data.slug)
    if not await is_slug_available(tenant_id, slug, db):
        raise SlugConflictError(slug, tenant_id)

    now = _now()
    page = Page(
        tenant_id=tenant_id,
        slug=slug,
        title=data.title,
        meta_description=data.meta_description,
        meta_keywords=data.meta_keywords,
        status=data.status.value,
        content=data.content.model_dump(mode="json", by_alias=True),
        seo_settings=data.seo_settings.model_dump(mode="json", by_alias=True),
        created_at=now,
        updated_at=now,
        published_at=now if data.status == PageStatus.PUBLISHED else None,
    )
    db.add(page)
    await _commit_or_conflict(db, slug, tenant_id)
    await db.refresh(page)
    logger.info("Page created: id=%s tenant=%s slug=%s", page.id, page.tenant_id, page.slug)
    return page


async def update_page(page_id: str, data: PageUpdate, db: AsyncSession) -> Page:
    """
    Replace a page document wholesale.

    ``id``, ``tenant_id`` and ``created_at`` are preserved; every other field
    is taken from ``data``, including the full section/block tree.

    Raises:
        ValidationError: The title is blank
        PageNotFoundError: No page with this id
        SlugConflictError: The new slug is already used by the tenant
    """
    _require_title(data.title)
    page = await get_page(page_id, db)
    slug = normalize_slug(data.slug)
    if slug != page.slug and not await is_slug_available(page.tenant_id, slug, db):
        raise SlugConflictError(slug, page.tenant_id)

    now = _now()
    was_published = page.status == PageStatus.PUBLISHED.value

    page.slug = slug
    page.title = data.title
    page.meta_description = data.meta_description
    page.meta_keywords = data.meta_keywords
    page.status = data.status.value
    page.content = data.content.model_dump(mode="json", by_alias=True)
    page.seo_settings = data.seo_settings.model_dump(mode="json", by_alias=True)
    page.updated_at = now
    if data.status != PageStatus.PUBLISHED:
        page.published_at = None
    elif not was_published:
        page.published_at = now

    await _commit_or_conflict(db, slug, page.tenant_id)
    await db.refresh(page)
    logger.info("Page updated: id=%s tenant=%s slug=%s", page.id, page.tenant_id, page.slug)
    return page


async def publish_page(page_id: str, db: AsyncSession) -> Page:
    """Set a page PUBLISHED and stamp ``published_at``."""
    page = await get_page(page_id, db)
    now = _now()
    page.status = PageStatus.PUBLISHED.value
    page.published_at = now
    page.updated_at = now
    await db.commit()
    await db.refresh(page)
    logger.info("Page published: id=%s tenant=%s slug=%s", page.id, page.tenant_id, page.slug)
    return page


async def unpublish_page(page_id: str, db: AsyncSession) -> Page:
    """Revert a page to DRAFT and clear ``published_at``."""
    page = await get_page(page_id, db)
    page.status = PageStatus.DRAFT.value
    page.published_at = None
    page.updated_at = _now()
    await db.commit()
    await db.refresh(page)
    logger.info("Page unpublished: id=%s tenant=%s slug=%s", page.id, page.tenant_id, page.slug)
    return page


async def delete_page(page_id: str, db: AsyncSession) -> None:
    """Hard-delete a page."""
    page = await get_page(page_id, db)
    tenant_id, slug = page.tenant_id, page.slug
    await db.delete(page)
    await db.commit()
    logger.info("Page deleted: id=%s tenant=%s slug=%s", page_id, tenant_id, slug)


def _require_title(title: str) -> None:
    if not title.strip():
        raise ValidationError("Page title must not be blank", field="title")


async def _commit_or_conflict(db: AsyncSession, slug: str, tenant_id: str) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Slug uniqueness violated at commit: tenant=%s slug=%s", tenant_id, slug)
        raise SlugConflictError(slug, tenant_id) from e
