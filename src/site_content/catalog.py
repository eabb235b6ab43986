"""Client for the external product catalog API.

The catalog is a Directus-style REST service exposing ``/items/products``.
Results feed a build-time generation step, so every request asks for fresh
data and any fault surfaces as :class:`CatalogUnavailableError` for the
caller to degrade on.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple, Union

import httpx

from .config import SiteConfig
from .exceptions import CatalogUnavailableError
from .http_client import HttpConfig, HTTPClient
from .logging_config import get_logger
from .models import ExternalProductRecord

logger = get_logger("catalog")

PRODUCTS_ENDPOINT = "/items/products"
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}

SiteId = Union[int, str, None]


class HttpGetter(Protocol):
    """Anything with an httpx-like ``get``."""

    def get(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Any] = None,
    ) -> httpx.Response:
        ...


class CatalogClient:
    """Reads product records from the external catalog."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        *,
        site_id: SiteId = None,
        http_client: Optional[HttpGetter] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.site_id = site_id
        self.http_client = http_client or HTTPClient()

    @classmethod
    def from_config(cls, config: SiteConfig, http_client: Optional[HttpGetter] = None) -> "CatalogClient":
        if http_client is None:
            http_client = HTTPClient(
                HttpConfig(
                    timeout_seconds=config.http_timeout_seconds,
                    max_retries=config.http_max_retries,
                )
            )
        return cls(
            config.catalog_url,
            config.catalog_token,
            site_id=config.site_id,
            http_client=http_client,
        )

    def resolve_site_id(self, site_id: SiteId = None) -> Optional[str]:
        """Pick the site scope: explicit argument, else the client setting."""
        for candidate in (site_id, self.site_id):
            if candidate is not None and str(candidate).strip():
                return str(candidate).strip()
        return None

    def list_products(
        self,
        *,
        status: str = ExternalProductRecord.STATUS_FETCHED,
        site_id: SiteId = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ExternalProductRecord]:
        """List catalog products, newest first.

        Args:
            status: Only products in this processing state (default ``fetched``)
            site_id: Tenant scope; falls back to the configured site id
            limit: Page size
            offset: Number of products to skip

        Raises:
            CatalogUnavailableError: on network, HTTP or payload errors
        """
        params: List[Tuple[str, str]] = [("filter[status][_eq]", status or ExternalProductRecord.STATUS_FETCHED)]

        resolved_site = self.resolve_site_id(site_id)
        if resolved_site:
            params.append(("filter[site_id][_eq]", resolved_site))
        if limit:
            params.append(("limit", str(limit)))
        if offset:
            params.append(("offset", str(offset)))
        params.append(("sort", "-date_created"))

        return self._parse_records(self._fetch(PRODUCTS_ENDPOINT, params))

    def iter_products(
        self,
        *,
        status: str = ExternalProductRecord.STATUS_FETCHED,
        site_id: SiteId = None,
        page_size: int = 100,
        max_pages: Optional[int] = None,
    ) -> Iterator[ExternalProductRecord]:
        """Page through all matching products using limit/offset."""
        page = 0
        while max_pages is None or page < max_pages:
            records = self.list_products(
                status=status,
                site_id=site_id,
                limit=page_size,
                offset=page * page_size,
            )
            yield from records
            if len(records) < page_size:
                return
            page += 1

    def get_product_by_external_id(
        self,
        asin: str,
        *,
        site_id: SiteId = None,
    ) -> Optional[ExternalProductRecord]:
        """Fetch a single product by its external identifier.

        Returns None when the catalog has no such product.

        Raises:
            CatalogUnavailableError: on network, HTTP or payload errors
        """
        params: List[Tuple[str, str]] = [("filter[asin][_eq]", asin)]
        resolved_site = self.resolve_site_id(site_id)
        if resolved_site:
            params.append(("filter[site_id][_eq]", resolved_site))
        params.append(("limit", "1"))

        records = self._parse_records(self._fetch(PRODUCTS_ENDPOINT, params))
        return records[0] if records else None

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            **NO_CACHE_HEADERS,
        }

    def _fetch(self, endpoint: str, params: List[Tuple[str, str]]) -> List[Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.http_client.get(url, headers=self._headers(), params=params)
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise CatalogUnavailableError(
                f"Catalog API error: {status_code} {exc.response.reason_phrase}",
                status_code=status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise CatalogUnavailableError(f"Catalog API unreachable: {exc}") from exc

        if not response.is_success:
            raise CatalogUnavailableError(
                f"Catalog API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogUnavailableError(f"Catalog API returned invalid JSON: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise CatalogUnavailableError("Catalog API response has no data array")
        return payload["data"]

    def _parse_records(self, items: List[Any]) -> List[ExternalProductRecord]:
        records: List[ExternalProductRecord] = []
        for item in items:
            try:
                records.append(ExternalProductRecord.from_dict(item))
            except ValueError as exc:
                logger.warning(f"Skipping malformed catalog item: {exc}")
        return records
