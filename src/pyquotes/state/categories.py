"""Category derivation and active filter tracking."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from pyquotes._constants import FILTER_ALL
from pyquotes.models.quote import Quote


def categories(collection: Iterable[Quote]) -> set[str]:
    """Distinct category values of *collection*."""
    return {quote.category for quote in collection}


def category_options(collection: Iterable[Quote]) -> list[str]:
    """Filter options: the ``"all"`` sentinel first, then sorted categories."""
    return [FILTER_ALL, *sorted(categories(collection), key=str.casefold)]


def resolve_filter(persisted: str | None, available: Collection[str]) -> str:
    """Return *persisted* if it is ``"all"`` or a known category, else ``"all"``."""
    if persisted == FILTER_ALL:
        return FILTER_ALL
    if persisted is not None and persisted in available:
        return persisted
    return FILTER_ALL


class CategoryIndex:
    """Available categories plus the currently selected filter."""

    def __init__(self, active: str = FILTER_ALL) -> None:
        self._available: set[str] = set()
        self._active = active

    @property
    def available(self) -> set[str]:
        return set(self._available)

    @property
    def active(self) -> str:
        return self._active

    def options(self) -> list[str]:
        return [FILTER_ALL, *sorted(self._available, key=str.casefold)]

    def refresh(self, collection: Iterable[Quote]) -> str:
        """Recompute categories and re-resolve the active filter against them."""
        self._available = categories(collection)
        self._active = resolve_filter(self._active, self._available)
        return self._active

    def select(self, category: str | None) -> str:
        """Make *category* the active filter (falling back to ``"all"``)."""
        self._active = resolve_filter(category, self._available)
        return self._active
