"""
SEO Service

Provides sitemap.xml and robots.txt generation for tenant sites.
"""

import logging
from collections.abc import Iterable
from xml.etree.ElementTree import Element, SubElement, tostring  # nosec B405

from landing_builder.models.page import Page

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def generate_sitemap(pages: Iterable[Page], base_url: str) -> str:
    """
    Generate an XML sitemap listing the given published pages.

    Args:
        pages: Published pages of one tenant
        base_url: Site base URL, without a trailing slash

    Returns:
        XML string in sitemap format
    """
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NAMESPACE)

    count = 0
    for page in pages:
        lastmod = page.published_at.date().isoformat() if page.published_at else None
        _add_url(urlset, page_url(base_url, page.slug), lastmod=lastmod)
        count += 1

    xml_declaration = '<?xml version="1.0" encoding="UTF-8"?>\n'
    xml_content = tostring(urlset, encoding="unicode")

    logger.info("Generated sitemap for %s with %d pages", base_url, count)
    return xml_declaration + xml_content


def generate_robots_txt(base_url: str) -> str:
    """robots.txt content allowing every crawler and pointing at the sitemap."""
    lines = [
        "User-agent: *",
        "Allow: /",
        "",
        f"Sitemap: {base_url}/sitemap.xml",
        "",
    ]
    return "\n".join(lines)


def page_url(base_url: str, slug: str) -> str:
    """Public URL of a page; the empty slug maps to the site root."""
    return f"{base_url}/{slug}" if slug else base_url


def _add_url(
    parent: Element,
    loc: str,
    lastmod: str | None = None,
    changefreq: str = "weekly",
    priority: str = "0.8",
) -> None:
    """Add a URL entry to the sitemap."""
    url = SubElement(parent, "url")

    loc_elem = SubElement(url, "loc")
    loc_elem.text = loc

    if lastmod:
        lastmod_elem = SubElement(url, "lastmod")
        lastmod_elem.text = lastmod

    changefreq_elem = SubElement(url, "changefreq")
    changefreq_elem.text = changefreq

    priority_elem = SubElement(url, "priority")
    priority_elem.text = priority
