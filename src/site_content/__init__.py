"""Site content package namespace."""

from importlib import import_module
from typing import Any

__all__ = [
    "CatalogClient",
    "CatalogUnavailableError",
    "ContentRepository",
    "ContentUnifier",
    "Document",
    "SiteConfig",
    "build_sources",
]


def __getattr__(name: str) -> Any:
    if name == "CatalogClient":
        module = import_module(f"{__name__}.catalog")
        return getattr(module, name)
    elif name == "CatalogUnavailableError":
        module = import_module(f"{__name__}.exceptions")
        return getattr(module, name)
    elif name == "ContentRepository":
        module = import_module(f"{__name__}.repository")
        return getattr(module, name)
    elif name == "ContentUnifier":
        module = import_module(f"{__name__}.unified")
        return getattr(module, name)
    elif name == "Document":
        module = import_module(f"{__name__}.models")
        return getattr(module, name)
    elif name == "SiteConfig":
        module = import_module(f"{__name__}.config")
        return getattr(module, name)
    elif name == "build_sources":
        module = import_module(f"{__name__}.sources")
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(__all__)
