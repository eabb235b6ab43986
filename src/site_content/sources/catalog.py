"""Content source backed by the external product catalog."""

from __future__ import annotations

from typing import List, Optional

from ..adapters import DEFAULT_AFFILIATE_TAG, ProductCategoryClassifier, product_to_review
from ..catalog import CatalogClient
from ..exceptions import CatalogUnavailableError
from ..logging_config import get_logger
from ..models import Collection, ContentSource, Document, ExternalProductRecord, normalize_external_id
from .base import DocumentSource

logger = get_logger("sources.catalog")


class CatalogSource(DocumentSource):
    """Turns catalog products into (body-less) reviews.

    Only the reviews collection is served. Listing reads one page of
    ``list_limit`` products, or every page when ``all_pages`` is set. Catalog
    faults are logged and the source contributes nothing.
    """

    name = ContentSource.CATALOG
    collections = frozenset({Collection.REVIEWS})

    def __init__(
        self,
        client: CatalogClient,
        *,
        list_limit: int = 100,
        all_pages: bool = False,
        classifier: Optional[ProductCategoryClassifier] = None,
        affiliate_tag: str = DEFAULT_AFFILIATE_TAG,
    ) -> None:
        self.client = client
        self.list_limit = list_limit
        self.all_pages = all_pages
        self.classifier = classifier or ProductCategoryClassifier()
        self.affiliate_tag = affiliate_tag

    def list_documents(self, collection: str) -> List[Document]:
        if not self.serves(collection):
            return []

        try:
            if self.all_pages:
                records = list(self.client.iter_products(page_size=self.list_limit))
            else:
                records = self.client.list_products(limit=self.list_limit)
        except CatalogUnavailableError as exc:
            logger.error(f"Failed to fetch catalog products for {collection}: {exc}")
            return []

        documents = []
        for record in records:
            document = self._to_document(record)
            if document is not None:
                documents.append(document)

        logger.info(f"Read {len(documents)} {collection} from catalog")
        return documents

    def get_document(self, collection: str, slug: str) -> Optional[Document]:
        # Catalog review slugs are lower-cased external ids.
        if not self.serves(collection):
            return None
        external_id = normalize_external_id(slug)
        if external_id is None:
            return None

        try:
            record = self.client.get_product_by_external_id(external_id)
        except CatalogUnavailableError as exc:
            logger.error(f"Failed to fetch catalog product {external_id}: {exc}")
            return None

        if record is None:
            return None
        document = self._to_document(record)
        if document is None or document.slug != slug:
            return None
        return document

    def _to_document(self, record: ExternalProductRecord) -> Optional[Document]:
        try:
            return product_to_review(record, classifier=self.classifier, affiliate_tag=self.affiliate_tag)
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning(f"Skipping catalog product {record.asin}: {exc}")
            return None
