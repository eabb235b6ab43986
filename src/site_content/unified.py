"""Multi-source content unification.

Sources are consulted in priority order (editor, local, catalog). A document
is kept only if neither its slug nor its external id was already claimed by a
document from an earlier position, and the merged list is then sorted by
date, newest first. Documents without a parsable date go last, in merge order.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Set, Tuple

from .logging_config import get_logger
from .models import Document
from .parser_utils import parse_date
from .sources.base import DocumentSource

logger = get_logger("unified")


def date_sort_key(document: Document) -> Tuple[bool, float]:
    parsed = parse_date(document.date)
    if parsed is None:
        return (False, 0.0)
    return (True, parsed.timestamp())


def sort_by_date(documents: Sequence[Document]) -> List[Document]:
    """Stable sort, newest first; undated documents keep their order at the end."""
    # reverse=True keeps equal keys in their original order.
    return sorted(documents, key=date_sort_key, reverse=True)


class ContentUnifier:
    """Merges documents from prioritised sources into one view per collection."""

    def __init__(self, sources: Sequence[DocumentSource]) -> None:
        self.sources = list(sources)

    @property
    def source_names(self) -> List[str]:
        return [source.name for source in self.sources]

    def get_all(self, collection: str) -> List[Document]:
        """Return the deduplicated, date-sorted documents of ``collection``."""
        merged = [document for _, document in self._merge(collection, self.sources)]
        logger.info(
            f"Unified {len(merged)} {collection} from {len(self.sources)} sources"
        )
        return sort_by_date(merged)

    def get_by_slug(self, collection: str, slug: str) -> Optional[Document]:
        """Return the highest-priority document for ``slug``, or None.

        A hit whose external id is already claimed by an earlier document is
        skipped and lower-priority sources are probed, matching what
        :meth:`get_all` would serve.
        """
        for index, source in enumerate(self.sources):
            document = self._safe_get(source, collection, slug)
            if document is None:
                continue
            if document.external_id is None:
                return document
            for owner, accepted in self._merge(collection, self.sources[: index + 1]):
                if owner is source and accepted.slug == slug:
                    return document
            logger.debug(
                f"{collection}/{slug} from {source.name} is shadowed by external id {document.external_id}"
            )
        return None

    def _merge(
        self,
        collection: str,
        sources: Sequence[DocumentSource],
    ) -> Iterator[Tuple[DocumentSource, Document]]:
        seen_slugs: Set[str] = set()
        seen_external_ids: Set[str] = set()

        for source in sources:
            for document in self._safe_list(source, collection):
                external_id = document.external_id
                if document.slug in seen_slugs:
                    continue
                if external_id is not None and external_id in seen_external_ids:
                    continue
                seen_slugs.add(document.slug)
                if external_id is not None:
                    seen_external_ids.add(external_id)
                yield source, document

    def _safe_list(self, source: DocumentSource, collection: str) -> List[Document]:
        if not source.serves(collection):
            return []
        try:
            return list(source.list_documents(collection))
        except Exception as exc:
            logger.exception(f"Source {source.name} failed listing {collection}: {exc}")
            return []

    def _safe_get(self, source: DocumentSource, collection: str, slug: str) -> Optional[Document]:
        if not source.serves(collection):
            return None
        try:
            return source.get_document(collection, slug)
        except Exception as exc:
            logger.exception(f"Source {source.name} failed reading {collection}/{slug}: {exc}")
            return None
