import re

HOMEPAGE_SLUGS = ("home", "index", "")

_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-+")


def normalize_slug(raw: str | None) -> str:
    """
    Canonicalize a page slug for storage and lookup.

    Surrounding whitespace is trimmed, the text is lowercased, anything
    outside ``[a-z0-9-]`` becomes a hyphen, hyphen runs collapse to one and
    leading/trailing hyphens are dropped. The empty string is a valid result
    and addresses the tenant's homepage.
    """
    if raw is None:
        return ""
    slug = _DISALLOWED.sub("-", raw.strip().lower())
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def is_homepage_slug(slug: str | None) -> bool:
    return normalize_slug(slug) in HOMEPAGE_SLUGS
