"""Tests for the public content repository."""

import httpx
import pytest

from src.site_content.config import SiteConfig
from src.site_content.models import Document
from src.site_content.repository import ContentRepository
from src.site_content.sources import DocumentSource
from src.site_content.unified import ContentUnifier


@pytest.fixture
def site_config(data_dir):
    return SiteConfig(
        content_dir=data_dir / "content",
        editor_content_dir=data_dir / "outstatic" / "content",
        enable_editor=True,
        enable_catalog=True,
        catalog_url="https://cms.example.com",
    )


@pytest.fixture
def repository(site_config, make_http_client, catalog_payload):
    return ContentRepository.from_config(site_config, http_client=make_http_client(catalog_payload))


@pytest.fixture
def local_repository(data_dir):
    return ContentRepository.from_config(SiteConfig(content_dir=data_dir / "content"))


def test_all_reviews_merge_three_sources(repository):
    reviews = repository.get_all_reviews()

    assert [r.slug for r in reviews] == ["lens-y", "b0abc123", "cam-x", "b0tripod9"]
    assert [r.source for r in reviews] == ["editor", "catalog", "local", "catalog"]


def test_review_categories_are_sorted_and_distinct(repository):
    assert repository.get_review_categories() == ["Accessories", "Camera Lenses", "Mirrorless Cameras"]


def test_reviews_by_category(repository):
    mirrorless = repository.get_reviews_by_category("Mirrorless Cameras")

    assert [r.slug for r in mirrorless] == ["b0abc123", "cam-x"]
    assert repository.get_reviews_by_category("Drones") == []


def test_all_category_returns_everything(repository):
    assert repository.get_reviews_by_category("all") == repository.get_all_reviews()


def test_guides_from_editor_and_local(repository):
    guides = repository.get_all_guides()

    assert [g.slug for g in guides] == ["editor-guide", "march-guide", "feb-guide"]
    assert repository.get_guide_categories() == ["Buying Guides", "How-To"]
    assert [g.slug for g in repository.get_guides_by_category("Buying Guides")] == ["editor-guide", "march-guide"]


def test_list_defaults_are_filled(local_repository):
    review = local_repository.get_review("lens-y")
    guide = local_repository.get_guide("feb-guide")

    assert review.frontmatter["pros"] == []
    assert review.frontmatter["cons"] == []
    assert guide.frontmatter["tags"] == []
    assert local_repository.get_guide("march-guide").tags == ["travel", "cameras"]
    assert local_repository.get_review("cam-x").frontmatter["pros"] == ["Fast autofocus"]


def test_missing_description_falls_back_to_excerpt(local_repository):
    guide = local_repository.get_guide("feb-guide")

    assert guide.description == "Start with a fast prime and learn to zoom with your feet."


def test_existing_description_is_kept(local_repository):
    assert local_repository.get_guide("march-guide").description == "Our travel camera picks."


def test_pages_have_no_list_defaults(local_repository):
    pages = local_repository.get_all_pages()

    assert [p.slug for p in pages] == ["about"]
    assert "tags" not in pages[0].frontmatter
    assert local_repository.get_page("about").title == "About Us"
    assert local_repository.get_page("contact") is None


def test_catalog_review_by_slug(repository):
    review = repository.get_review("b0abc123")

    assert review is not None
    assert review.source == "catalog"
    assert review.frontmatter["brand"] == "Sony"
    assert review.frontmatter["pros"] == []


def test_list_slugs(local_repository):
    assert local_repository.list_slugs("reviews") == ["lens-y", "cam-x"]
    assert local_repository.list_slugs("pages") == ["about"]


def test_unknown_collection_is_empty(local_repository):
    assert local_repository.list_all_documents("videos") == []
    assert local_repository.get_document("videos", "anything") is None
    assert local_repository.list_categories("videos") == []


def test_from_config_only_local_by_default(local_repository):
    assert local_repository.unifier.source_names == ["local"]


def test_catalog_outage_degrades_to_files(site_config, make_http_client):
    repository = ContentRepository.from_config(
        site_config, http_client=make_http_client(httpx.ConnectError("down"))
    )

    assert [r.slug for r in repository.get_all_reviews()] == ["lens-y", "cam-x"]
    assert repository.get_review("b0abc123") is None


def test_documents_are_not_mutated():
    original = Document(slug="x", frontmatter={"title": "X"}, content="Body text.", source="local")

    class Single(DocumentSource):
        name = "local"

        def list_documents(self, collection):
            return [original]

        def get_document(self, collection, slug):
            return original if slug == "x" else None

    repository = ContentRepository(ContentUnifier([Single()]))
    prepared = repository.get_guide("x")

    assert prepared.frontmatter["tags"] == []
    assert prepared.description == "Body text."
    assert "tags" not in original.frontmatter
