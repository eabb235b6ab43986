"""Tests for configuration loading."""

from pathlib import Path

from src.site_content.config import SiteConfig, parse_bool, resolve_site_id


def test_defaults_when_config_file_missing(tmp_path):
    config = SiteConfig.from_file(tmp_path / "missing.yaml")

    assert config.content_dir == Path("content")
    assert config.editor_content_dir == Path("outstatic/content")
    assert config.enable_editor is False
    assert config.enable_catalog is False
    assert config.catalog_url == "https://data.beginos.org"
    assert config.catalog_list_limit == 100


def test_repository_config_file_loads():
    config_path = Path(__file__).parent.parent.parent / "config" / "site.yaml"

    config = SiteConfig.from_file(config_path)

    assert config.affiliate_tag == "smartymode-20"
    assert config.default_product_category == "Accessories"
    assert "Action Cameras" in config.category_keywords
    assert config.catalog_all_pages is False


def test_from_file_ignores_unknown_keys(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text(
        "site:\n  content_dir: /srv/content\n  enable_catalog: 'yes'\n  unknown_key: 1\n",
        encoding="utf-8",
    )

    config = SiteConfig.from_file(path)

    assert config.content_dir == Path("/srv/content")
    assert config.enable_catalog is True


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("site:\n  enable_editor: true\n  catalog_url: https://a.example.com/\n", encoding="utf-8")
    environ = {
        "NEXT_PUBLIC_ENABLE_OUTSTATIC": "false",
        "NEXT_PUBLIC_ENABLE_DIRECTUS": "true",
        "DIRECTUS_API_URL": "https://b.example.com/",
        "DIRECTUS_API_TOKEN": "secret",
        "SITE_ID": "7",
    }

    config = SiteConfig.from_env(path, environ=environ)

    assert config.enable_editor is False
    assert config.enable_catalog is True
    assert config.catalog_url == "https://b.example.com"
    assert config.catalog_token == "secret"
    assert config.site_id == "7"


def test_catalog_flag_must_be_truthy():
    config = SiteConfig.from_env(Path("missing.yaml"), environ={"NEXT_PUBLIC_ENABLE_DIRECTUS": "nope"})

    assert config.enable_catalog is False


def test_site_id_fallback_chain_order():
    assert resolve_site_id({"SITE_ID": "3", "DIRECTUS_SITE_ID": "2", "NEXT_PUBLIC_SITE_ID": "1"}) == "1"
    assert resolve_site_id({"SITE_ID": "3", "DIRECTUS_SITE_ID": "2"}) == "2"
    assert resolve_site_id({"SITE_ID": " 3 "}) == "3"
    assert resolve_site_id({"NEXT_PUBLIC_SITE_ID": "   ", "SITE_ID": "3"}) == "3"
    assert resolve_site_id({}) is None


def test_parse_bool():
    assert parse_bool("TRUE") is True
    assert parse_bool("1") is True
    assert parse_bool("off") is False
    assert parse_bool(None, default=True) is True
