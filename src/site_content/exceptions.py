"""Exception types raised by the content layer."""

from __future__ import annotations

from typing import Optional


class ContentError(Exception):
    """Base class for content layer errors."""


class FrontmatterError(ContentError):
    """Raised when a document's frontmatter block cannot be parsed."""


class CatalogUnavailableError(ContentError):
    """Raised when the external product catalog cannot be read."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
