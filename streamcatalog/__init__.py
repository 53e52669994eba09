"""In-memory streaming catalog: plans, viewers, movies and series."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["CatalogService", "Movie", "Plan", "Series", "User", "parse_content"]


def __getattr__(name: str) -> Any:
    if name == "CatalogService":
        module = import_module("streamcatalog.services.catalog")
        return getattr(module, name)
    if name in __all__:
        module = import_module("streamcatalog.models")
        return getattr(module, name)
    raise AttributeError(f"module 'streamcatalog' has no attribute {name}")
