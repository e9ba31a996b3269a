"""
Page content schema.

The editor sends and receives the whole document tree in camelCase JSON:
a page owns an ordered list of sections, each section an ordered list of
blocks, and every level carries its own styling. Missing fields fall back
to defaults so older documents keep loading as the schema grows.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class SectionType(str, Enum):
    HEADER = "HEADER"
    HERO = "HERO"
    CONTENT = "CONTENT"
    FEATURES = "FEATURES"
    TESTIMONIALS = "TESTIMONIALS"
    CTA = "CTA"
    FOOTER = "FOOTER"


class BlockType(str, Enum):
    HEADING = "HEADING"
    PARAGRAPH = "PARAGRAPH"
    IMAGE = "IMAGE"
    BUTTON = "BUTTON"
    LIST = "LIST"
    SPACER = "SPACER"
    DIVIDER = "DIVIDER"


class TextAlign(str, Enum):
    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"
    JUSTIFY = "JUSTIFY"


class Spacing(CamelModel):
    """Four CSS lengths; ``"0"`` on every side means no spacing at all."""

    top: str = "0"
    right: str = "0"
    bottom: str = "0"
    left: str = "0"

    def is_zero(self) -> bool:
        return self.top == "0" and self.right == "0" and self.bottom == "0" and self.left == "0"


class SectionSettings(CamelModel):
    background_color: str | None = None
    padding: Spacing = Field(default_factory=Spacing)
    margin: Spacing = Field(default_factory=Spacing)
    full_width: bool = False
    custom_css: str | None = None


class BlockStyling(CamelModel):
    text_align: TextAlign = TextAlign.LEFT
    font_size: str | None = None
    font_weight: str | None = None
    color: str | None = None
    background_color: str | None = None
    padding: Spacing = Field(default_factory=Spacing)
    margin: Spacing = Field(default_factory=Spacing)
    border_radius: str | None = None
    custom_css: str | None = None


class ContentBlock(CamelModel):
    id: str = ""
    type: BlockType
    # Open schema: expected keys depend on ``type`` and are defaulted at render time.
    content: dict[str, Any] = Field(default_factory=dict)
    styling: BlockStyling = Field(default_factory=BlockStyling)


class ContentSection(CamelModel):
    id: str = ""
    type: SectionType
    blocks: list[ContentBlock] = Field(default_factory=list)
    settings: SectionSettings = Field(default_factory=SectionSettings)


class DesignSettings(CamelModel):
    theme: str = "default"
    primary_color: str = "#007bff"
    secondary_color: str = "#6c757d"
    font_family: str = "Arial, sans-serif"
    container_width: str = "1200px"
    custom_css: str | None = None


class PageContent(CamelModel):
    sections: list[ContentSection] = Field(default_factory=list)
    design_settings: DesignSettings = Field(default_factory=DesignSettings)


class SeoSettings(CamelModel):
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    twitter_card: str = "summary"
    canonical_url: str | None = None
    no_index: bool = False
    no_follow: bool = False


class PageBase(CamelModel):
    slug: str = Field("", description="URL segment; normalized before storage. Empty addresses the homepage.")
    title: str = Field(..., min_length=1, description="Page title, also the default og:title.")
    meta_description: str | None = Field(None, description="Meta description for SEO")
    meta_keywords: str | None = Field(None, description="Meta keywords for SEO")
    status: PageStatus = Field(PageStatus.DRAFT, description="Publication status")
    content: PageContent = Field(default_factory=PageContent)
    seo_settings: SeoSettings = Field(default_factory=SeoSettings)


class PageCreate(PageBase):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "slug": "home",
                "title": "Welcome to Acme",
                "metaDescription": "Acme builds rockets",
                "status": "DRAFT",
                "content": {
                    "sections": [
                        {
                            "id": "s1",
                            "type": "HERO",
                            "settings": {"fullWidth": True, "backgroundColor": "#f5f5f5"},
                            "blocks": [
                                {"id": "b1", "type": "HEADING", "content": {"text": "Hi", "level": 1}},
                            ],
                        }
                    ],
                    "designSettings": {"fontFamily": "Inter, sans-serif"},
                },
            }
        }
    )


class PageUpdate(PageBase):
    """Full replacement document: the client resends the whole tree on every save."""


class PageRead(PageBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


class SlugAvailability(BaseModel):
    available: bool


class PageCount(BaseModel):
    status: PageStatus
    count: int
