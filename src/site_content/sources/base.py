"""Base classes for content sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, List, Optional

from ..models import Collection, Document


class DocumentSource(ABC):
    """A prioritisable provider of documents, keyed by collection.

    Implementations never raise from ``list_documents`` or ``get_document``;
    a faulty source contributes nothing.
    """

    name: str = ""
    collections: FrozenSet[str] = frozenset(Collection.ALL)

    def serves(self, collection: str) -> bool:
        """Return whether this source holds documents for ``collection``."""
        return collection in self.collections

    @abstractmethod
    def list_documents(self, collection: str) -> List[Document]:
        """Return every document in ``collection`` from this source."""
        pass

    @abstractmethod
    def get_document(self, collection: str, slug: str) -> Optional[Document]:
        """Return the document with ``slug`` in ``collection``, or None."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
