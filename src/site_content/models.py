"""Data models for the site content layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .parser_utils import ensure_list


class ContentSource:
    """Source tags, listed in priority order."""

    EDITOR = "editor"
    LOCAL = "local"
    CATALOG = "catalog"

    PRIORITY = (EDITOR, LOCAL, CATALOG)


class Collection:
    """Known content collections."""

    GUIDES = "guides"
    REVIEWS = "reviews"
    PAGES = "pages"

    ALL = (GUIDES, REVIEWS, PAGES)


EXTERNAL_ID_FIELD = "asin"


def normalize_external_id(value: Any) -> Optional[str]:
    """Return the comparable form of an external identifier, or None."""
    if value is None:
        return None
    text = str(value).strip()
    return text.upper() or None


@dataclass(frozen=True)
class Document:
    """A single guide, review or page as served to the site.

    ``frontmatter`` is an open mapping: the core fields (title, date,
    description, category, tags, asin) have accessors below and everything
    else passes through untouched.
    """

    # The frontmatter mapping is unhashable, so documents are too.
    __hash__ = None  # type: ignore[assignment]

    slug: str
    frontmatter: Mapping[str, Any] = field(default_factory=dict)
    content: str = ""
    source: str = ContentSource.LOCAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "frontmatter", MappingProxyType(dict(self.frontmatter)))
        if self.content is None:
            object.__setattr__(self, "content", "")

    @property
    def title(self) -> Optional[str]:
        return self.frontmatter.get("title")

    @property
    def date(self) -> Any:
        return self.frontmatter.get("date")

    @property
    def description(self) -> Optional[str]:
        return self.frontmatter.get("description")

    @property
    def category(self) -> Optional[str]:
        return self.frontmatter.get("category")

    @property
    def tags(self) -> List[str]:
        return ensure_list(self.frontmatter.get("tags"))

    @property
    def external_id(self) -> Optional[str]:
        return normalize_external_id(self.frontmatter.get(EXTERNAL_ID_FIELD))

    def with_frontmatter(self, **updates: Any) -> "Document":
        """Return a copy with frontmatter keys added or replaced."""
        merged = dict(self.frontmatter)
        merged.update(updates)
        return Document(slug=self.slug, frontmatter=merged, content=self.content, source=self.source)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "slug": self.slug,
            "frontmatter": dict(self.frontmatter),
            "content": self.content,
            "source": self.source,
        }


@dataclass
class ProductImages:
    """Image URL set attached to a catalog product."""

    small: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["ProductImages"]:
        if not isinstance(data, Mapping):
            return None
        return cls(small=data.get("small"), medium=data.get("medium"), large=data.get("large"))


@dataclass
class ExternalProductRecord:
    """A product entry returned by the external catalog API.

    The canonical fields may be sparse; ``raw_payload`` keeps the provider
    response so brand, price, rating and description can be extracted from it.
    """

    STATUS_NEW = "new"
    STATUS_FETCHED = "fetched"
    STATUS_FAILED = "failed"

    id: int
    asin: str
    title: str
    category: Optional[str] = None
    features: List[str] = field(default_factory=list)
    images: Optional[ProductImages] = None
    marketplace: Optional[str] = None
    site: Optional[str] = None
    site_id: Optional[int] = None
    parent_asin: Optional[str] = None
    browse_nodes: Optional[List[Any]] = None
    status: str = STATUS_FETCHED
    availability: Optional[str] = None
    date_created: Optional[str] = None
    date_updated: Optional[str] = None
    raw_payload: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExternalProductRecord":
        """Build a record from one item of the API ``data`` array."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Catalog item must be an object, got {type(data).__name__}")
        asin = data.get("asin")
        if not asin or not str(asin).strip():
            raise ValueError(f"Catalog item {data.get('id')!r} has no asin")

        return cls(
            id=data.get("id"),
            asin=str(asin).strip(),
            title=data.get("title") or "",
            category=data.get("category"),
            features=list(data.get("features") or []),
            images=ProductImages.from_dict(data.get("images")),
            marketplace=data.get("marketplace"),
            site=data.get("site"),
            site_id=data.get("site_id"),
            parent_asin=data.get("parent_asin"),
            browse_nodes=data.get("browse_nodes"),
            status=data.get("status") or cls.STATUS_FETCHED,
            availability=data.get("availability"),
            date_created=data.get("date_created"),
            date_updated=data.get("date_updated"),
            raw_payload=data.get("raw_paapi"),
        )


@dataclass
class InternalProduct:
    """The site's reviewable product shape."""

    asin: str
    title: str
    brand: str
    features: List[str]
    amazon_url: str
    image_url: str
    rating: float
    category: str
    short_title: str
    summary: str
    slug: str
    price: Optional[float] = None
    currency: str = "USD"
    review_count: Optional[int] = None
