"""
Public Site Routes

Serves tenants' published pages as HTML, with no authentication.

GET /public/sites/{subdomain}                   → homepage
GET /public/sites/{subdomain}/sitemap.xml       → sitemap of published pages
GET /public/sites/{subdomain}/robots.txt        → robots.txt
GET /public/sites/{subdomain}/{slug}            → page by slug
GET /public/sites/{subdomain}/{path1}/{path2}   → page by combined slug "path1-path2"

Unknown sites and pages answer with the rendered HTML 404 page, never with
the JSON error envelope used by the authoring API.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.config import settings
from landing_builder.database import get_db
from landing_builder.exceptions import PageNotFoundError, ResourceNotFoundError
from landing_builder.schemas.page import PageRead
from landing_builder.services import page_service, seo_service, tenant_service
from landing_builder.services.page_resolver import resolve_homepage, resolve_public
from landing_builder.services.render_service import get_base_url, render_not_found, render_page

router = APIRouter(tags=["Public"])
logger = logging.getLogger(__name__)

PAGE_CACHE_CONTROL = "max-age=900"
NOT_FOUND_CACHE_CONTROL = "max-age=300"
SEO_CACHE_CONTROL = "max-age=86400"

SITE_NOT_FOUND_MESSAGE = "The site you're looking for doesn't exist."
PAGE_NOT_FOUND_MESSAGE = "The page you're looking for doesn't exist."


def not_found_response(message: str = PAGE_NOT_FOUND_MESSAGE) -> HTMLResponse:
    return HTMLResponse(
        content=render_not_found(message),
        status_code=status.HTTP_404_NOT_FOUND,
        headers={"Cache-Control": NOT_FOUND_CACHE_CONTROL},
    )


async def serve_page(
    subdomain: str, slug: str | None, db: AsyncSession, page_headers: bool = True
) -> HTMLResponse:
    """
    Resolve and render a tenant page, answering with the 404 page on any failure.

    A ``slug`` of None asks for the homepage (``home`` > ``index`` > ``""``);
    any other value goes through exact-slug resolution.
    """
    try:
        tenant = await tenant_service.get_tenant_by_subdomain(subdomain, db)
        if tenant is None:
            logger.info("Public request for unknown site: %s", subdomain)
            return not_found_response(SITE_NOT_FOUND_MESSAGE)

        if slug is None:
            page = await resolve_homepage(tenant.id, db)
            if page is None:
                raise PageNotFoundError(message=f"No published homepage for tenant: {tenant.id}")
        else:
            page = await resolve_public(tenant.id, slug, db)
        html = render_page(PageRead.model_validate(page), tenant, settings.platform_domain)
    except ResourceNotFoundError as e:
        logger.info("Public page not found: site=%s slug=%s (%s)", subdomain, slug, e.message)
        return not_found_response()
    except Exception:
        logger.exception("Failed to serve public page: site=%s slug=%s", subdomain, slug)
        return not_found_response()

    headers = {"Cache-Control": PAGE_CACHE_CONTROL, "Vary": "Accept-Encoding"}
    if page_headers:
        headers["X-Page-ID"] = page.id
        headers["X-Tenant-ID"] = tenant.id
    return HTMLResponse(content=html, headers=headers)


@router.get("/{subdomain}", response_class=HTMLResponse)
async def get_homepage(subdomain: str, db: AsyncSession = Depends(get_db)) -> HTMLResponse:
    """Serve a tenant's homepage."""
    return await serve_page(subdomain, None, db, page_headers=False)


@router.get("/{subdomain}/sitemap.xml")
async def get_sitemap(subdomain: str, db: AsyncSession = Depends(get_db)) -> Response:
    """XML sitemap of the tenant's published pages."""
    tenant = await tenant_service.get_tenant_by_subdomain(subdomain, db)
    if tenant is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    pages = await page_service.list_published_pages(tenant.id, db)
    sitemap_xml = seo_service.generate_sitemap(pages, get_base_url(tenant, settings.platform_domain))
    return Response(
        content=sitemap_xml,
        media_type="application/xml",
        headers={"Cache-Control": SEO_CACHE_CONTROL},
    )


@router.get("/{subdomain}/robots.txt")
async def get_robots_txt(subdomain: str, db: AsyncSession = Depends(get_db)) -> Response:
    tenant = await tenant_service.get_tenant_by_subdomain(subdomain, db)
    if tenant is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    robots_txt = seo_service.generate_robots_txt(get_base_url(tenant, settings.platform_domain))
    return Response(
        content=robots_txt,
        media_type="text/plain",
        headers={"Cache-Control": SEO_CACHE_CONTROL},
    )


@router.get("/{subdomain}/{slug}", response_class=HTMLResponse)
async def get_page_by_slug(subdomain: str, slug: str, db: AsyncSession = Depends(get_db)) -> HTMLResponse:
    """Serve a published page by slug; homepage aliases fall back to the homepage."""
    return await serve_page(subdomain, slug, db)


@router.get("/{subdomain}/{path1}/{path2}", response_class=HTMLResponse)
async def get_nested_page(
    subdomain: str, path1: str, path2: str, db: AsyncSession = Depends(get_db)
) -> HTMLResponse:
    """Serve a two-segment path as the page whose slug joins the segments with a hyphen."""
    return await serve_page(subdomain, f"{path1}-{path2}", db)
