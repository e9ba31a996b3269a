"""
Tests for the page lifecycle service

Covers slug uniqueness per tenant, full-document updates, publishing and
the tenant-scoped queries.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.exceptions import PageNotFoundError, SlugConflictError
from landing_builder.schemas.page import PageCreate, PageRead, PageStatus, PageUpdate
from landing_builder.services import page_service

HERO_CONTENT = {
    "sections": [
        {
            "id": "s1",
            "type": "HERO",
            "settings": {"fullWidth": True},
            "blocks": [{"id": "b1", "type": "HEADING", "content": {"text": "Hi", "level": 1}}],
        }
    ],
    "designSettings": {"primaryColor": "#ff0000"},
}


# ══════════════════════════════════════════════════════════════════════════════
# 1. Create
# ══════════════════════════════════════════════════════════════════════════════


class TestCreatePage:
    """Test page creation"""

    async def test_create_normalizes_slug(self, test_db: AsyncSession, acme):
        page = await page_service.create_page(acme.id, PageCreate(slug=" About Us! ", title="About"), test_db)
        assert page.slug == "about-us"
        assert page.tenant_id == acme.id
        assert page.status == PageStatus.DRAFT.value
        assert page.published_at is None
        assert page.created_at is not None
        assert page.updated_at is not None

    async def test_create_published_stamps_published_at(self, test_db: AsyncSession, acme):
        page = await page_service.create_page(
            acme.id, PageCreate(slug="launch", title="Launch", status=PageStatus.PUBLISHED), test_db
        )
        assert page.published_at is not None

    async def test_content_stored_as_camel_case_json(self, test_db: AsyncSession, acme):
        page = await page_service.create_page(
            acme.id, PageCreate(slug="home", title="Home", content=HERO_CONTENT), test_db
        )
        assert page.content["designSettings"]["primaryColor"] == "#ff0000"
        assert page.content["sections"][0]["settings"]["fullWidth"] is True
        assert page.seo_settings["twitterCard"] == "summary"

    async def test_content_round_trips_through_read_model(self, test_db: AsyncSession, acme):
        page = await page_service.create_page(
            acme.id, PageCreate(slug="home", title="Home", content=HERO_CONTENT), test_db
        )
        read = PageRead.model_validate(page)
        assert read.content.sections[0].blocks[0].content == {"text": "Hi", "level": 1}
        assert read.content.design_settings.primary_color == "#ff0000"

    async def test_duplicate_slug_same_tenant_conflicts(self, test_db: AsyncSession, acme, make_page):
        await make_page(acme, "about")
        with pytest.raises(SlugConflictError) as exc_info:
            await page_service.create_page(acme.id, PageCreate(slug="About", title="Again"), test_db)
        assert exc_info.value.status_code == 409

    async def test_same_slug_different_tenants(self, test_db: AsyncSession, acme, globex, make_page):
        first = await make_page(acme, "about")
        second = await make_page(globex, "about")
        assert first.id != second.id

    async def test_empty_slug_allowed_once(self, test_db: AsyncSession, acme, make_page):
        await make_page(acme, "")
        with pytest.raises(SlugConflictError):
            await make_page(acme, "!!!")


# ══════════════════════════════════════════════════════════════════════════════
# 2. Update
# ══════════════════════════════════════════════════════════════════════════════


class TestUpdatePage:
    """Test full-document replacement"""

    async def test_update_replaces_document(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.DRAFT, meta_description="old", content=HERO_CONTENT)
        created_at = page.created_at

        updated = await page_service.update_page(page.id, PageUpdate(slug="about", title="New title"), test_db)

        assert updated.id == page.id
        assert updated.tenant_id == acme.id
        assert updated.created_at == created_at
        assert updated.title == "New title"
        assert updated.meta_description is None
        assert updated.content["sections"] == []

    async def test_update_changes_slug(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about")
        updated = await page_service.update_page(page.id, PageUpdate(slug="About Acme", title="About"), test_db)
        assert updated.slug == "about-acme"

    async def test_update_same_slug_after_normalization_is_not_conflict(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about")
        updated = await page_service.update_page(page.id, PageUpdate(slug=" ABOUT ", title="About"), test_db)
        assert updated.slug == "about"

    async def test_update_to_taken_slug_conflicts(self, test_db: AsyncSession, acme, make_page):
        await make_page(acme, "pricing")
        page = await make_page(acme, "about")
        with pytest.raises(SlugConflictError):
            await page_service.update_page(page.id, PageUpdate(slug="pricing", title="About"), test_db)

    async def test_update_to_draft_clears_published_at(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.PUBLISHED)
        updated = await page_service.update_page(
            page.id, PageUpdate(slug="about", title="About", status=PageStatus.DRAFT), test_db
        )
        assert updated.published_at is None

    async def test_update_keeps_published_at_while_published(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.PUBLISHED)
        published_at = page.published_at
        updated = await page_service.update_page(
            page.id, PageUpdate(slug="about", title="Edited", status=PageStatus.PUBLISHED), test_db
        )
        assert updated.published_at == published_at

    async def test_update_to_published_stamps_published_at(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.DRAFT)
        updated = await page_service.update_page(
            page.id, PageUpdate(slug="about", title="About", status=PageStatus.PUBLISHED), test_db
        )
        assert updated.published_at is not None

    async def test_update_missing_page(self, test_db: AsyncSession):
        with pytest.raises(PageNotFoundError):
            await page_service.update_page("missing", PageUpdate(title="x"), test_db)


# ══════════════════════════════════════════════════════════════════════════════
# 3. Publish / unpublish / delete
# ══════════════════════════════════════════════════════════════════════════════


class TestPublishing:
    """Test status transitions"""

    async def test_publish(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.DRAFT)
        published = await page_service.publish_page(page.id, test_db)
        assert published.status == PageStatus.PUBLISHED.value
        assert published.published_at is not None

    async def test_unpublish_clears_published_at(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.PUBLISHED)
        assert page.published_at is not None
        unpublished = await page_service.unpublish_page(page.id, test_db)
        assert unpublished.status == PageStatus.DRAFT.value
        assert unpublished.published_at is None

    async def test_publish_missing_page(self, test_db: AsyncSession):
        with pytest.raises(PageNotFoundError):
            await page_service.publish_page("missing", test_db)

    async def test_delete(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about")
        await page_service.delete_page(page.id, test_db)
        with pytest.raises(PageNotFoundError):
            await page_service.get_page(page.id, test_db)

    async def test_deleted_slug_can_be_reused(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about")
        await page_service.delete_page(page.id, test_db)
        assert await page_service.is_slug_available(acme.id, "about", test_db)


class TestSlugUniqueIndex:
    """The unique index decides when the availability check is passed concurrently"""

    @pytest.fixture
    def stale_availability(self, monkeypatch):
        async def _always_available(tenant_id, slug, db):
            return True

        monkeypatch.setattr(page_service, "is_slug_available", _always_available)

    async def test_create_conflict_at_commit(self, test_db: AsyncSession, acme, make_page, stale_availability):
        await make_page(acme, "about")
        with pytest.raises(SlugConflictError) as exc_info:
            await page_service.create_page(acme.id, PageCreate(slug="About", title="Dup"), test_db)
        assert exc_info.value.status_code == 409

        # The session is rolled back and stays usable
        other = await page_service.create_page(acme.id, PageCreate(slug="pricing", title="Pricing"), test_db)
        pages = await page_service.list_pages(acme.id, test_db)
        assert sorted(p.slug for p in pages) == ["about", "pricing"]
        assert other.slug == "pricing"

    async def test_update_conflict_at_commit(self, test_db: AsyncSession, acme, make_page, stale_availability):
        await make_page(acme, "a")
        b = await make_page(acme, "b")
        b_id = b.id
        with pytest.raises(SlugConflictError):
            await page_service.update_page(b_id, PageUpdate(slug="a", title="B"), test_db)

        pages = await page_service.list_pages(acme.id, test_db)
        assert sorted(p.slug for p in pages) == ["a", "b"]
        renamed = await page_service.update_page(b_id, PageUpdate(slug="c", title="B"), test_db)
        assert renamed.slug == "c"


# ══════════════════════════════════════════════════════════════════════════════
# 4. Queries
# ══════════════════════════════════════════════════════════════════════════════


class TestQueries:
    """Test tenant-scoped lookups"""

    async def test_get_page_by_slug_any_status(self, test_db: AsyncSession, acme, make_page):
        page = await make_page(acme, "about", status=PageStatus.DRAFT)
        found = await page_service.get_page_by_slug(acme.id, "About", test_db)
        assert found.id == page.id

    async def test_get_page_by_slug_missing(self, test_db: AsyncSession, acme):
        with pytest.raises(PageNotFoundError):
            await page_service.get_page_by_slug(acme.id, "nope", test_db)

    async def test_list_pages_scoped_to_tenant(self, test_db: AsyncSession, acme, globex, make_page):
        await make_page(acme, "a")
        await make_page(acme, "b", status=PageStatus.DRAFT)
        await make_page(globex, "c")
        pages = await page_service.list_pages(acme.id, test_db)
        assert {p.slug for p in pages} == {"a", "b"}

    async def test_list_pages_by_status(self, test_db: AsyncSession, acme, make_page):
        await make_page(acme, "a")
        await make_page(acme, "b", status=PageStatus.DRAFT)
        drafts = await page_service.list_pages(acme.id, test_db, status=PageStatus.DRAFT)
        assert [p.slug for p in drafts] == ["b"]
        published = await page_service.list_published_pages(acme.id, test_db)
        assert [p.slug for p in published] == ["a"]

    async def test_count_pages(self, test_db: AsyncSession, acme, make_page):
        await make_page(acme, "a")
        await make_page(acme, "b")
        await make_page(acme, "c", status=PageStatus.DRAFT)
        assert await page_service.count_pages(acme.id, PageStatus.PUBLISHED, test_db) == 2
        assert await page_service.count_pages(acme.id, PageStatus.ARCHIVED, test_db) == 0

    async def test_slug_availability(self, test_db: AsyncSession, acme, globex, make_page):
        await make_page(acme, "about")
        assert not await page_service.is_slug_available(acme.id, " ABOUT ", test_db)
        assert await page_service.is_slug_available(acme.id, "pricing", test_db)
        assert await page_service.is_slug_available(globex.id, "about", test_db)
