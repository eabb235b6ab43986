"""Content sources and their priority-ordered assembly."""

from __future__ import annotations

from typing import List, Optional

from ..adapters import ProductCategoryClassifier
from ..catalog import CatalogClient, HttpGetter
from ..config import SiteConfig
from ..logging_config import get_logger
from .base import DocumentSource
from .catalog import CatalogSource
from .files import EditorFileSource, FileSystemSource, LocalFileSource

logger = get_logger("sources")

__all__ = [
    "CatalogSource",
    "DocumentSource",
    "EditorFileSource",
    "FileSystemSource",
    "LocalFileSource",
    "build_sources",
]


def build_sources(
    config: SiteConfig,
    *,
    http_client: Optional[HttpGetter] = None,
) -> List[DocumentSource]:
    """Build the enabled sources in priority order: editor, local, catalog."""
    sources: List[DocumentSource] = []

    if config.enable_editor:
        sources.append(EditorFileSource(config.editor_content_dir))

    sources.append(LocalFileSource(config.content_dir))

    if config.enable_catalog:
        client = CatalogClient.from_config(config, http_client=http_client)
        classifier = ProductCategoryClassifier(
            custom_groups=config.category_keywords,
            default_category=config.default_product_category,
        )
        sources.append(
            CatalogSource(
                client,
                list_limit=config.catalog_list_limit,
                all_pages=config.catalog_all_pages,
                classifier=classifier,
                affiliate_tag=config.affiliate_tag,
            )
        )

    logger.debug(f"Active sources: {[source.name for source in sources]}")
    return sources
