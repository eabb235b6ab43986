"""Shared fixtures for site content tests."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

import httpx
import pytest

DATA_DIR = Path(__file__).parent.parent / "data"


class MockHttpClient:
    """Mock HTTP client returning canned catalog responses."""

    def __init__(self, responses: List[Union[httpx.Response, Exception, Dict[str, Any]]]) -> None:
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    def get(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Any] = None,
    ) -> httpx.Response:
        self.requests.append({"url": url, "headers": dict(headers or {}), "params": list(params or [])})
        request = httpx.Request("GET", url)

        if not self.responses:
            return httpx.Response(200, json={"data": []}, request=request)

        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return httpx.Response(200, json=response, request=request)
        return response


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def catalog_payload() -> Dict[str, Any]:
    return json.loads((DATA_DIR / "catalog" / "products.json").read_text(encoding="utf-8"))


@pytest.fixture
def make_http_client() -> Callable[..., MockHttpClient]:
    def factory(*responses: Union[httpx.Response, Exception, Dict[str, Any]]) -> MockHttpClient:
        return MockHttpClient(list(responses))

    return factory


@pytest.fixture
def site_tree(tmp_path: Path) -> Path:
    """A writable copy of the sample content and editor trees."""
    shutil.copytree(DATA_DIR / "content", tmp_path / "content")
    shutil.copytree(DATA_DIR / "outstatic", tmp_path / "outstatic")
    return tmp_path


@pytest.fixture(autouse=True)
def clear_site_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NEXT_PUBLIC_SITE_ID",
        "DIRECTUS_SITE_ID",
        "SITE_ID",
        "NEXT_PUBLIC_ENABLE_OUTSTATIC",
        "NEXT_PUBLIC_ENABLE_DIRECTUS",
        "DIRECTUS_API_URL",
        "DIRECTUS_API_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_site_logger() -> Iterator[None]:
    """Drop handlers that ``setup_logging`` bound to a captured stream."""
    yield
    logger = logging.getLogger("site_content")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
