from .page import (
    BlockStyling,
    BlockType,
    ContentBlock,
    ContentSection,
    DesignSettings,
    PageContent,
    PageCreate,
    PageRead,
    PageStatus,
    PageUpdate,
    SectionSettings,
    SectionType,
    SeoSettings,
    SlugAvailability,
    Spacing,
    TextAlign,
)
from .tenant import TenantCreate, TenantResponse

__all__ = [
    "BlockStyling",
    "BlockType",
    "ContentBlock",
    "ContentSection",
    "DesignSettings",
    "PageContent",
    "PageCreate",
    "PageRead",
    "PageStatus",
    "PageUpdate",
    "SectionSettings",
    "SectionType",
    "SeoSettings",
    "SlugAvailability",
    "Spacing",
    "TenantCreate",
    "TenantResponse",
    "TextAlign",
]
