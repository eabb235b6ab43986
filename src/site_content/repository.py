"""Public read API used by the static site build."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .catalog import HttpGetter
from .config import SiteConfig
from .logging_config import get_logger
from .models import Collection, Document
from .parser_utils import make_excerpt
from .sources import build_sources
from .unified import ContentUnifier

logger = get_logger("repository")

ALL_CATEGORIES = "all"

LIST_DEFAULTS: Dict[str, Dict[str, Any]] = {
    Collection.GUIDES: {"tags": []},
    Collection.REVIEWS: {"pros": [], "cons": []},
    Collection.PAGES: {},
}


class ContentRepository:
    """Reviews, guides and pages as the site sees them."""

    def __init__(self, unifier: ContentUnifier) -> None:
        self.unifier = unifier

    @classmethod
    def from_config(
        cls,
        config: Optional[SiteConfig] = None,
        *,
        http_client: Optional[HttpGetter] = None,
    ) -> "ContentRepository":
        config = config or SiteConfig.from_env()
        return cls(ContentUnifier(build_sources(config, http_client=http_client)))

    # Generic access

    def list_all_documents(self, collection: str) -> List[Document]:
        if collection not in Collection.ALL:
            logger.warning(f"Unknown collection requested: {collection}")
            return []
        return [self._prepare(collection, doc) for doc in self.unifier.get_all(collection)]

    def get_document(self, collection: str, slug: str) -> Optional[Document]:
        if collection not in Collection.ALL:
            logger.warning(f"Unknown collection requested: {collection}")
            return None
        document = self.unifier.get_by_slug(collection, slug)
        if document is None:
            return None
        return self._prepare(collection, document)

    def list_slugs(self, collection: str) -> List[str]:
        """Slugs for static path generation."""
        return [document.slug for document in self.list_all_documents(collection)]

    def list_categories(self, collection: str) -> List[str]:
        """Distinct categories in ``collection``, sorted."""
        categories = {doc.category for doc in self.list_all_documents(collection) if doc.category}
        return sorted(categories)

    def list_by_category(self, collection: str, category: str) -> List[Document]:
        documents = self.list_all_documents(collection)
        if category == ALL_CATEGORIES:
            return documents
        return [doc for doc in documents if doc.category == category]

    # Reviews

    def get_all_reviews(self) -> List[Document]:
        return self.list_all_documents(Collection.REVIEWS)

    def get_review(self, slug: str) -> Optional[Document]:
        return self.get_document(Collection.REVIEWS, slug)

    def get_reviews_by_category(self, category: str) -> List[Document]:
        return self.list_by_category(Collection.REVIEWS, category)

    def get_review_categories(self) -> List[str]:
        return self.list_categories(Collection.REVIEWS)

    # Guides

    def get_all_guides(self) -> List[Document]:
        return self.list_all_documents(Collection.GUIDES)

    def get_guide(self, slug: str) -> Optional[Document]:
        return self.get_document(Collection.GUIDES, slug)

    def get_guides_by_category(self, category: str) -> List[Document]:
        return self.list_by_category(Collection.GUIDES, category)

    def get_guide_categories(self) -> List[str]:
        return self.list_categories(Collection.GUIDES)

    # Pages

    def get_all_pages(self) -> List[Document]:
        return self.list_all_documents(Collection.PAGES)

    def get_page(self, slug: str) -> Optional[Document]:
        return self.get_document(Collection.PAGES, slug)

    def _prepare(self, collection: str, document: Document) -> Document:
        updates: Dict[str, Any] = {}
        for key, default in LIST_DEFAULTS.get(collection, {}).items():
            if document.frontmatter.get(key) is None:
                updates[key] = list(default)
        if not document.description and document.content:
            excerpt = make_excerpt(document.content)
            if excerpt:
                updates["description"] = excerpt
        if not updates:
            return document
        return document.with_frontmatter(**updates)
