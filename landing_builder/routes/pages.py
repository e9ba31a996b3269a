"""
Page Authoring Routes

GET    /api/v1/pages                            → list the tenant's pages
GET    /api/v1/pages/{page_id}                  → get one page
POST   /api/v1/pages                            → create page
PUT    /api/v1/pages/{page_id}                  → replace page document
DELETE /api/v1/pages/{page_id}                  → delete page (owner/admin)
PATCH  /api/v1/pages/{page_id}/publish          → publish
PATCH  /api/v1/pages/{page_id}/unpublish        → revert to draft
GET    /api/v1/pages/count?status=...           → number of pages in a status
GET    /api/v1/pages/slug/{slug}                → get one page by slug (any status)
GET    /api/v1/pages/slug/{slug}/availability   → slug availability check

Every route takes the caller's Principal and scopes tenant-level queries
and new pages to ``principal.tenant_id``.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.auth import Principal, require_role
from landing_builder.constants.roles import PAGE_DELETE_ROLES, PAGE_READ_ROLES, PAGE_WRITE_ROLES
from landing_builder.database import get_db
from landing_builder.schemas.page import PageCount, PageCreate, PageRead, PageStatus, PageUpdate, SlugAvailability
from landing_builder.services import page_service

router = APIRouter(tags=["Pages"])


@router.get("/", response_model=list[PageRead])
async def list_pages_route(
    status_filter: PageStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role(PAGE_READ_ROLES)),
) -> list[PageRead]:
    """List the caller's tenant pages, newest first."""
    pages = await page_service.list_pages(principal.tenant_id, db, status=status_filter)
    return [PageRead.model_validate(page) for page in pages]


@router.get("/count", response_model=PageCount)
async def count_pages_route(
    status_filter: PageStatus = Query(PageStatus.PUBLISHED, alias="status"),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role(PAGE_READ_ROLES)),
) -> PageCount:
    """Count the caller's tenant pages in one status (published by default)."""
    count = await page_service.count_pages(principal.tenant_id, status_filter, db)
    return PageCount(status=status_filter, count=count)


@router.get("/slug/{slug}", response_model=PageRead)
async def get_page_by_slug_route(
    slug: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role(PAGE_READ_ROLES)),
) -> PageRead:
    page = await page_service.get_page_by_slug(principal.tenant_id, slug, db)
    return PageRead.model_validate(page)


@router.get("/slug/{slug}/availability", response_model=SlugAvailability)
async def slug_availability_route(
    slug: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role(PAGE_READ_ROLES)),
) -> SlugAvailability:
    available = await page_service.is_slug_available(principal.tenant_id, slug, db)
    return SlugAvailability(available=available)


@router.get("/{page_id}", response_model=PageRead)
async def get_page_route(
    page_id: str,
    db: AsyncSession = Depends(get_db),
    _principal: Principal = Depends(require_role(PAGE_READ_ROLES)),
) -> PageRead:
    page = await page_service.get_page(page_id, db)
    return PageRead.model_validate(page)


@router.post("/", response_model=PageRead, status_code=status.HTTP_201_CREATED)
async def create_page_route(
    payload: PageCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role(PAGE_WRITE_ROLES)),
) -> PageRead:
    """Create a page under the caller's tenant."""
    page = await page_service.create_page(principal.tenant_id, payload, db)
    return PageRead.model_validate(page)


@router.put("/{page_id}", response_model=PageRead)
async def update_page_route(
    page_id: str,
    payload: PageUpdate,
    db: AsyncSession = Depends(get_db),
    _principal: Principal = Depends(require_role(PAGE_WRITE_ROLES)),
) -> PageRead:
    """Replace the whole page document; omitted fields fall back to their defaults."""
    page = await page_service.update_page(page_id, payload, db)
    return PageRead.model_validate(page)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page_route(
    page_id: str,
    db: AsyncSession = Depends(get_db),
    _principal: Principal = Depends(require_role(PAGE_DELETE_ROLES)),
) -> Response:
    await page_service.delete_page(page_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{page_id}/publish", response_model=PageRead)
async def publish_page_route(
    page_id: str,
    db: AsyncSession = Depends(get_db),
    _principal: Principal = Depends(require_role(PAGE_WRITE_ROLES)),
) -> PageRead:
    page = await page_service.publish_page(page_id, db)
    return PageRead.model_validate(page)


@router.patch("/{page_id}/unpublish", response_model=PageRead)
async def unpublish_page_route(
    page_id: str,
    db: AsyncSession = Depends(get_db),
    _principal: Principal = Depends(require_role(PAGE_WRITE_ROLES)),
) -> PageRead:
    page = await page_service.unpublish_page(page_id, db)
    return PageRead.model_validate(page)
