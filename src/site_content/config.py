"""Configuration loader for the site content layer.

Settings come from an optional YAML file (``config/site.yaml``) and are then
overridden by environment variables, so the static build can toggle sources
without editing files. The resulting :class:`SiteConfig` is passed explicitly
into the sources and the unifier.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

DEFAULT_CONFIG_PATH = Path("config/site.yaml")
DEFAULT_CATALOG_URL = "https://data.beginos.org"

ENV_ENABLE_EDITOR = "NEXT_PUBLIC_ENABLE_OUTSTATIC"
ENV_ENABLE_CATALOG = "NEXT_PUBLIC_ENABLE_DIRECTUS"
ENV_CATALOG_URL = "DIRECTUS_API_URL"
ENV_CATALOG_TOKEN = "DIRECTUS_API_TOKEN"
SITE_ID_ENV_CHAIN = ("NEXT_PUBLIC_SITE_ID", "DIRECTUS_SITE_ID", "SITE_ID")

TRUTHY = {"1", "true", "yes", "on"}


def parse_bool(value: Any, default: bool = False) -> bool:
    """Interpret a config or environment value as a boolean flag."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def resolve_site_id(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the first non-blank site id from the environment fallback chain."""
    environ = os.environ if environ is None else environ
    for name in SITE_ID_ENV_CHAIN:
        raw = environ.get(name)
        if raw is None:
            continue
        trimmed = str(raw).strip()
        if trimmed:
            return trimmed
    return None


@dataclass
class SiteConfig:
    """Central configuration container for the content layer."""

    content_dir: Path = Path("content")
    editor_content_dir: Path = Path("outstatic/content")
    enable_editor: bool = False
    enable_catalog: bool = False
    catalog_url: str = DEFAULT_CATALOG_URL
    catalog_token: str = ""
    site_id: Optional[str] = None
    catalog_list_limit: int = 100
    catalog_all_pages: bool = False
    affiliate_tag: str = "smartymode-20"
    default_product_category: str = "Accessories"
    http_timeout_seconds: float = 20.0
    http_max_retries: int = 2
    category_keywords: Dict[str, List[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.content_dir = Path(self.content_dir)
        self.editor_content_dir = Path(self.editor_content_dir)
        self.enable_editor = parse_bool(self.enable_editor)
        self.enable_catalog = parse_bool(self.enable_catalog)
        self.catalog_url = str(self.catalog_url).rstrip("/")
        self.catalog_list_limit = int(self.catalog_list_limit)
        self.catalog_all_pages = parse_bool(self.catalog_all_pages)
        self.http_timeout_seconds = float(self.http_timeout_seconds)
        self.http_max_retries = int(self.http_max_retries)
        if self.site_id is not None:
            self.site_id = str(self.site_id).strip() or None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SiteConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_file(cls, path: Optional[Path | str] = None) -> "SiteConfig":
        """Load settings from a YAML file; a missing file yields defaults."""
        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return cls()
        with open(config_path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        return cls.from_dict(data.get("site", data))

    @classmethod
    def from_env(
        cls,
        path: Optional[Path | str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "SiteConfig":
        """Load the YAML settings, then apply environment overrides."""
        environ = os.environ if environ is None else environ
        config = cls.from_file(path)

        if ENV_ENABLE_EDITOR in environ:
            config.enable_editor = parse_bool(environ[ENV_ENABLE_EDITOR])
        if ENV_ENABLE_CATALOG in environ:
            config.enable_catalog = parse_bool(environ[ENV_ENABLE_CATALOG])
        if environ.get(ENV_CATALOG_URL):
            config.catalog_url = environ[ENV_CATALOG_URL].rstrip("/")
        if environ.get(ENV_CATALOG_TOKEN):
            config.catalog_token = environ[ENV_CATALOG_TOKEN]

        site_id = resolve_site_id(environ)
        if site_id:
            config.site_id = site_id

        return config
