"""
HTML Render Service

Compiles a page document (sections → blocks → styling) into a complete,
self-contained HTML document with an inline stylesheet. Rendering is a pure
function of the page and its tenant: no I/O, and identical input always
yields byte-identical output.

Every key read from a block's ``content`` map has a type-appropriate
default, so incomplete documents render instead of failing. All tenant text
placed into markup is escaped; the stylesheet values from the design
settings are trusted and emitted verbatim.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from landing_builder.config import settings
from landing_builder.models.tenant import Tenant
from landing_builder.schemas.page import (
    BlockStyling,
    BlockType,
    ContentBlock,
    ContentSection,
    DesignSettings,
    PageRead,
    SectionSettings,
    SectionType,
    Spacing,
    TextAlign,
)
from landing_builder.utils.sanitize import escape_html, safe

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

SECTION_INDENT = "    "
BLOCK_INDENT = SECTION_INDENT * 2
NESTED_BLOCK_INDENT = SECTION_INDENT * 4


def render_page(page: PageRead, tenant: Tenant, platform_domain: str | None = None) -> str:
    """
    Render a page as a full HTML document.

    Args:
        page: The page document to render
        tenant: Owner of the page; only ``subdomain`` and ``custom_domain`` are read
        platform_domain: Domain hosting tenant subdomains (defaults to settings)

    Returns:
        The HTML document as a string
    """
    base_url = get_base_url(tenant, platform_domain)
    design = page.content.design_settings

    html = _env.get_template("page.html").render(
        page=page,
        seo=build_seo_context(page, base_url),
        css=safe(generate_css(design)),
        sections=[safe(render_section(section)) for section in page.content.sections],
    )
    logger.debug("Rendered page id=%s slug=%s (%d bytes)", page.id, page.slug, len(html))
    return html


def render_not_found(message: str) -> str:
    """Render the human-readable 404 page served for unknown sites and pages."""
    return _env.get_template("not_found.html").render(message=message)


def get_base_url(tenant: Tenant, platform_domain: str | None = None) -> str:
    """Canonical base URL of a tenant's site, preferring its custom domain."""
    if tenant.custom_domain:
        return f"https://{tenant.custom_domain}"
    return f"https://{tenant.subdomain}.{platform_domain or settings.platform_domain}"


# ============================================================================
# SEO
# ============================================================================


def build_seo_context(page: PageRead, base_url: str) -> dict[str, str | None]:
    """
    Resolve the Open Graph, Twitter Card, canonical and robots values.

    A value of ``None`` means the tag is left out.
    """
    seo = page.seo_settings
    page_url = f"{base_url}/{page.slug}"

    robots_flags = []
    if seo.no_index:
        robots_flags.append("noindex")
    if seo.no_follow:
        robots_flags.append("nofollow")

    return {
        "og_title": seo.og_title if seo.og_title is not None else page.title,
        "og_description": seo.og_description if seo.og_description is not None else page.meta_description,
        "og_image": seo.og_image,
        "og_url": page_url,
        "twitter_card": seo.twitter_card,
        "twitter_title": seo.og_title,
        "twitter_description": seo.og_description,
        "twitter_image": seo.og_image,
        "canonical_url": seo.canonical_url if seo.canonical_url is not None else page_url,
        "robots": ", ".join(robots_flags) if robots_flags else None,
    }


# ============================================================================
# CSS
# ============================================================================


def generate_css(design: DesignSettings) -> str:
    """Build the page stylesheet from the design settings."""
    lines = [
        "* { box-sizing: border-box; }",
        "body {",
        "    margin: 0;",
        "    padding: 0;",
        f"    font-family: {design.font_family};",
        "    line-height: 1.6;",
        "    color: #333;",
        "}",
        ".container {",
        f"    max-width: {design.container_width};",
        "    margin: 0 auto;",
        "    padding: 0 20px;",
        "}",
        ".section {",
        "    width: 100%;",
        "}",
        ".section-content {",
        "    padding: 40px 0;",
        "}",
        ".block {",
        "    margin-bottom: 20px;",
        "}",
        ".block:last-child {",
        "    margin-bottom: 0;",
        "}",
        "@media (max-width: 768px) {",
        "    .container {",
        "        padding: 0 15px;",
        "    }",
        "    .section-content {",
        "        padding: 20px 0;",
        "    }",
        "}",
    ]
    if design.custom_css is not None:
        lines.append("/* Custom CSS */")
        lines.append(design.custom_css)

    return "\n".join(f"{BLOCK_INDENT}{line}" for line in lines)


def format_spacing(spacing: Spacing) -> str:
    """
    Shorthand CSS value for a spacing, or ``""`` when every side is ``"0"``.

    Equal sides collapse to one value, matching vertical and horizontal
    pairs to two values; anything else is written as four values.
    """
    if spacing.is_zero():
        return ""
    if spacing.top == spacing.right == spacing.bottom == spacing.left:
        return spacing.top
    if spacing.top == spacing.bottom and spacing.left == spacing.right:
        return f"{spacing.top} {spacing.right}"
    return f"{spacing.top} {spacing.right} {spacing.bottom} {spacing.left}"


def section_declarations(section_settings: SectionSettings) -> list[str]:
    declarations = []
    if section_settings.background_color is not None:
        declarations.append(f"background-color: {section_settings.background_color}")
    _append_spacing(declarations, section_settings.padding, section_settings.margin)
    return declarations


def block_declarations(styling: BlockStyling) -> list[str]:
    declarations = []
    if styling.color is not None:
        declarations.append(f"color: {styling.color}")
    if styling.background_color is not None:
        declarations.append(f"background-color: {styling.background_color}")
    if styling.font_size is not None:
        declarations.append(f"font-size: {styling.font_size}")
    if styling.font_weight is not None:
        declarations.append(f"font-weight: {styling.font_weight}")
    if styling.text_align != TextAlign.LEFT:
        declarations.append(f"text-align: {styling.text_align.value.lower()}")
    _append_spacing(declarations, styling.padding, styling.margin)
    if styling.border_radius is not None:
        declarations.append(f"border-radius: {styling.border_radius}")
    return declarations


def _append_spacing(declarations: list[str], padding: Spacing, margin: Spacing) -> None:
    formatted_padding = format_spacing(padding)
    if formatted_padding:
        declarations.append(f"padding: {formatted_padding}")
    formatted_margin = format_spacing(margin)
    if formatted_margin:
        declarations.append(f"margin: {formatted_margin}")


def style_attribute(declarations: list[str]) -> str:
    """Escaped `` style="..."`` attribute, or ``""`` when there is nothing to apply."""
    if not declarations:
        return ""
    return f' style="{escape_html("; ".join(declarations))}"'


# ============================================================================
# Markup
# ============================================================================


def section_class(section_type: SectionType) -> str:
    return section_type.value.lower().replace("_", "-")


def render_section(section: ContentSection) -> str:
    """
    Render one ``<section>``.

    Full-width sections hold their blocks directly; the others wrap them in
    ``.container > .section-content`` so they follow the container width.
    """
    opening = (
        f'{SECTION_INDENT}<section class="section {section_class(section.type)}"'
        f"{style_attribute(section_declarations(section.settings))}>"
    )
    lines = [opening]

    if section.settings.full_width:
        lines.extend(f"{BLOCK_INDENT}{render_block(block)}" for block in section.blocks)
    else:
        lines.append(f'{BLOCK_INDENT}<div class="container">')
        lines.append(f'{BLOCK_INDENT}{SECTION_INDENT}<div class="section-content">')
        lines.extend(f"{NESTED_BLOCK_INDENT}{render_block(block)}" for block in section.blocks)
        lines.append(f"{BLOCK_INDENT}{SECTION_INDENT}</div>")
        lines.append(f"{BLOCK_INDENT}</div>")

    lines.append(f"{SECTION_INDENT}</section>")
    return "\n".join(lines)


def render_block(block: ContentBlock) -> str:
    """Render a single block as one line of markup."""
    content = block.content
    declarations = block_declarations(block.styling)
    style = style_attribute(declarations)
    css_class = f"block {block.type.value.lower()}-block"

    if block.type == BlockType.HEADING:
        level = _heading_level(content.get("level"))
        text = _string(content, "text", "")
        return f'<h{level} class="{css_class}"{style}>{escape_html(text)}</h{level}>'

    if block.type == BlockType.PARAGRAPH:
        text = _string(content, "text", "")
        return f'<p class="{css_class}"{style}>{escape_html(text)}</p>'

    if block.type == BlockType.IMAGE:
        src = _string(content, "src", "")
        alt = _string(content, "alt", "")
        caption = _string(content, "caption", None)
        markup = (
            f'<div class="{css_class}"{style}>'
            f'<img src="{escape_html(src)}" alt="{escape_html(alt)}" style="max-width: 100%; height: auto;">'
        )
        if caption is not None:
            markup += (
                '<p class="image-caption" style="margin-top: 8px; font-size: 0.9em; color: #666;">'
                f"{escape_html(caption)}</p>"
            )
        return markup + "</div>"

    if block.type == BlockType.BUTTON:
        text = _string(content, "text", "Button")
        href = _string(content, "href", "#")
        target = ' target="_blank"' if content.get("newTab") is True else ""
        return f'<a href="{escape_html(href)}" class="{css_class} btn"{target}{style}>{escape_html(text)}</a>'

    if block.type == BlockType.LIST:
        items = content.get("items")
        if not isinstance(items, list):
            items = []
        tag = "ol" if content.get("ordered") is True else "ul"
        list_items = "".join(f"<li>{escape_html(item)}</li>" for item in items)
        return f'<{tag} class="{css_class}"{style}>{list_items}</{tag}>'

    if block.type == BlockType.SPACER:
        height = _string(content, "height", "20px")
        return f'<div class="{css_class}" style="{escape_html(f"height: {height};")}"></div>'

    if block.type == BlockType.DIVIDER:
        color = _string(content, "color", "#e0e0e0")
        thickness = _string(content, "thickness", "1px")
        rule = [f"border: none; border-top: {thickness} solid {color}; margin: 20px 0", *declarations]
        return f'<hr class="{css_class}"{style_attribute(rule)}>'

    # Unreachable while BlockType is a closed enumeration.
    raise ValueError(f"Unsupported block type: {block.type}")


def _string(content: dict[str, Any], key: str, default: str | None) -> str | None:
    value = content.get(key)
    return value if isinstance(value, str) else default


def _heading_level(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 6:
        return value
    return 1
