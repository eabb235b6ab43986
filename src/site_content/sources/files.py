"""File-backed content sources (local MDX tree and editor-managed tree)."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..exceptions import FrontmatterError
from ..frontmatter import parse_frontmatter
from ..logging_config import get_logger
from ..models import Collection, ContentSource, Document
from .base import DocumentSource

logger = get_logger("sources.files")


class FileSystemSource(DocumentSource):
    """Reads ``<root>/<collection>/<slug><ext>`` documents.

    ``extensions`` is the preference order used when a slug exists with more
    than one extension.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        extensions: Sequence[str],
        name: str,
        collections: Sequence[str] = Collection.ALL,
        encoding: str = "utf-8",
    ) -> None:
        self.root = Path(root)
        self.extensions = tuple(extensions)
        self.name = name
        self.collections = frozenset(collections)
        self.encoding = encoding

    def collection_dir(self, collection: str) -> Path:
        return self.root / collection

    def list_documents(self, collection: str) -> List[Document]:
        if not self.serves(collection):
            return []

        directory = self.collection_dir(collection)
        if not directory.is_dir():
            return []

        try:
            paths = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix in self.extensions)
        except OSError as exc:
            logger.error(f"Failed to read {self.name} {collection} from {directory}: {exc}")
            return []

        by_slug: Dict[str, Path] = {}
        for path in paths:
            current = by_slug.get(path.stem)
            if current is None or self._rank(path) < self._rank(current):
                by_slug[path.stem] = path

        documents: List[Document] = []
        for slug in sorted(by_slug):
            document = self._read_document(by_slug[slug], slug)
            if document is not None:
                documents.append(document)

        logger.debug(f"Read {len(documents)} {collection} from {self.name} source")
        return documents

    def get_document(self, collection: str, slug: str) -> Optional[Document]:
        if not self.serves(collection) or not self._is_safe_slug(slug):
            return None

        directory = self.collection_dir(collection)
        for extension in self.extensions:
            path = directory / f"{slug}{extension}"
            if path.is_file():
                return self._read_document(path, slug)
        return None

    def _read_document(self, path: Path, slug: str) -> Optional[Document]:
        try:
            text = path.read_text(encoding=self.encoding)
            frontmatter, body = parse_frontmatter(text)
        except (OSError, UnicodeDecodeError, FrontmatterError) as exc:
            logger.warning(f"Skipping unreadable document {path}: {exc}")
            return None

        return Document(slug=slug, frontmatter=frontmatter, content=body, source=self.name)

    def _rank(self, path: Path) -> int:
        return self.extensions.index(path.suffix)

    @staticmethod
    def _is_safe_slug(slug: str) -> bool:
        if not slug or slug in (".", ".."):
            return False
        return "/" not in slug and "\\" not in slug and "\x00" not in slug


class LocalFileSource(FileSystemSource):
    """The site's own MDX content tree."""

    EXTENSIONS = (".mdx",)

    def __init__(self, root: Path | str = "content", **kwargs) -> None:
        super().__init__(root, extensions=self.EXTENSIONS, name=ContentSource.LOCAL, **kwargs)


class EditorFileSource(FileSystemSource):
    """Documents written by the headless CMS editor."""

    EXTENSIONS = (".md", ".mdx")

    def __init__(self, root: Path | str = "outstatic/content", **kwargs) -> None:
        super().__init__(root, extensions=self.EXTENSIONS, name=ContentSource.EDITOR, **kwargs)
