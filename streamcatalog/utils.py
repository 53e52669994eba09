"""Utility helpers for the catalog service."""

from __future__ import annotations

import unicodedata
from typing import Callable, Iterable, TypeVar


T = TypeVar("T")


def normalise_genre(value: str | None) -> str:
    """Return a genre label suitable for case-insensitive comparison."""

    if not value:
        return ""
    value = unicodedata.normalize("NFKC", value)
    return value.strip().casefold()


def rank_by(
    items: Iterable[T],
    key: Callable[[T], float],
    limit: int,
) -> list[T]:
    """Return up to ``limit`` items ordered by descending ``key``.

    Python's sort is stable, so items with equal keys keep the order in
    which ``items`` yielded them.
    """

    if limit <= 0:
        return []
    return sorted(items, key=key, reverse=True)[:limit]
