"""Adapters from catalog records to the site's product and review shapes.

The catalog's canonical fields are sparse, so brand, price, rating and
description are pulled out of the provider payload (``raw_paapi``) with a
fixed chain of optional lookups. Categories are inferred from title keywords
when the catalog does not supply one.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .models import ContentSource, Document, ExternalProductRecord, InternalProduct
from .parser_utils import html_to_text

DEFAULT_RATING = 4.5
DEFAULT_CURRENCY = "USD"
DEFAULT_AFFILIATE_TAG = "smartymode-20"
SHORT_TITLE_LENGTH = 50
SUMMARY_LENGTH = 150


def _dig(data: Any, *path: Any) -> Any:
    """Follow a path of mapping keys / list indexes, returning None on any miss."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return None
            if not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        if current is None:
            return None
    return current


def extract_from_raw_payload(raw: Any) -> Dict[str, Any]:
    """Pull the optional commercial fields out of a provider payload."""
    features = _dig(raw, "ItemInfo", "Features", "DisplayValues")
    if isinstance(features, (list, tuple)):
        description = " ".join(str(item) for item in features if item is not None)
    else:
        description = ""

    return {
        "brand": _dig(raw, "ItemInfo", "ByLineInfo", "Brand", "DisplayValue") or "",
        "price": _dig(raw, "Offers", "Listings", 0, "Price", "Amount") or None,
        "currency": _dig(raw, "Offers", "Listings", 0, "Price", "Currency") or DEFAULT_CURRENCY,
        "review_rating": _dig(raw, "CustomerReviews", "StarRating", "Value") or None,
        "review_count": _dig(raw, "CustomerReviews", "Count") or None,
        "description": description,
    }


class ProductCategoryClassifier:
    """Maps product titles to review categories by keyword groups.

    Groups are checked in order and the first group with a keyword contained
    in the title wins, so specific groups must come before generic ones.
    """

    CATEGORY_DSLR = "DSLR Cameras"
    CATEGORY_MIRRORLESS = "Mirrorless Cameras"
    CATEGORY_LENSES = "Camera Lenses"
    CATEGORY_ACCESSORIES = "Accessories"

    DEFAULT_KEYWORD_GROUPS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
        (CATEGORY_DSLR, ("dslr", "d850", "d750", "canon eos", "nikon d")),
        (CATEGORY_MIRRORLESS, ("mirrorless", "sony a7", "fujifilm x", "olympus om-d")),
        (CATEGORY_LENSES, ("lens", "mm f/", "telephoto", "wide angle", "prime")),
    )

    def __init__(
        self,
        custom_groups: Optional[Mapping[str, Sequence[str]]] = None,
        default_category: str = CATEGORY_ACCESSORIES,
    ) -> None:
        self.default_category = default_category
        self.keyword_groups: List[Tuple[str, Tuple[str, ...]]] = []
        for category, keywords in (custom_groups or {}).items():
            self.keyword_groups.append((category, tuple(k.lower() for k in keywords if k)))
        self.keyword_groups.extend(self.DEFAULT_KEYWORD_GROUPS)

    def categorize(self, title: Optional[str], explicit_category: Optional[str] = None) -> str:
        if explicit_category:
            return explicit_category

        title_lower = (title or "").lower()
        for category, keywords in self.keyword_groups:
            if any(keyword in title_lower for keyword in keywords):
                return category
        return self.default_category


_default_classifier = ProductCategoryClassifier()


def infer_category(title: Optional[str], explicit_category: Optional[str] = None) -> str:
    """Return the catalog category if given, else infer one from the title."""
    return _default_classifier.categorize(title, explicit_category)


def to_internal_product(
    record: ExternalProductRecord,
    category: str = ProductCategoryClassifier.CATEGORY_ACCESSORIES,
    *,
    affiliate_tag: str = DEFAULT_AFFILIATE_TAG,
) -> InternalProduct:
    """Convert a catalog record into the site's product shape."""
    extracted = extract_from_raw_payload(record.raw_payload)
    description = html_to_text(extracted["description"])

    image_url = ""
    if record.images is not None:
        image_url = record.images.large or record.images.medium or ""

    return InternalProduct(
        asin=record.asin,
        title=record.title,
        brand=extracted["brand"],
        features=list(record.features or []),
        amazon_url=f"https://www.amazon.com/dp/{record.asin}?tag={affiliate_tag}",
        image_url=image_url,
        rating=extracted["review_rating"] or DEFAULT_RATING,
        category=category,
        short_title=record.title[:SHORT_TITLE_LENGTH],
        summary=description[:SUMMARY_LENGTH],
        slug=record.asin.lower(),
        price=extracted["price"],
        currency=extracted["currency"],
        review_count=extracted["review_count"],
    )


def product_to_review(
    record: ExternalProductRecord,
    *,
    classifier: Optional[ProductCategoryClassifier] = None,
    affiliate_tag: str = DEFAULT_AFFILIATE_TAG,
) -> Document:
    """Build the review document that stands in for a catalog product."""
    classifier = classifier or _default_classifier
    category = classifier.categorize(record.title, record.category)
    product = to_internal_product(record, category, affiliate_tag=affiliate_tag)

    frontmatter: Dict[str, Any] = {
        "title": product.title,
        "date": record.date_created,
        "description": product.summary or f"Review of {product.title}",
        "asin": product.asin,
        "brand": product.brand,
        "category": category,
        "rating": product.rating,
        "image": product.image_url,
        "amazonUrl": product.amazon_url,
    }
    if product.price is not None:
        frontmatter["price"] = product.price
        frontmatter["currency"] = product.currency

    return Document(
        slug=product.slug,
        frontmatter=frontmatter,
        content="",
        source=ContentSource.CATALOG,
    )
