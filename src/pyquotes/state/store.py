"""In-memory quote collection.

This is the single owner of the quote list.  Other components receive a
reference to a :class:`QuoteStore` instead of sharing a module-level list.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from pyquotes._constants import FILTER_ALL
from pyquotes.exceptions import QuoteValidationError
from pyquotes.models.quote import Quote
from pyquotes.models.sync import MergeResult
from pyquotes.state.reconcile import merge as reconcile


class QuoteStore:
    """Ordered, append/merge-only collection of quotes.

    Insertion order is preserved but carries no meaning.  Every mutation
    sets :attr:`dirty` so the owner knows the collection must be persisted.
    """

    def __init__(self, quotes: Iterable[Quote] = ()) -> None:
        self._quotes: list[Quote] = list(quotes)
        self.dirty = False

    def __len__(self) -> int:
        return len(self._quotes)

    def all(self) -> list[Quote]:
        """Return a copy of the collection in insertion order."""
        return list(self._quotes)

    def add(self, text: str, category: str) -> Quote:
        """Create a local quote from user input.

        Both fields are trimmed; an empty field raises
        :class:`QuoteValidationError` and leaves the collection untouched.
        """
        clean_text = text.strip()
        clean_category = category.strip()
        if not clean_text:
            raise QuoteValidationError("Quote text must not be empty", field="text")
        if not clean_category:
            raise QuoteValidationError("Quote category must not be empty", field="category")

        quote = Quote(id=None, text=clean_text, category=clean_category)
        self._quotes.append(quote)
        self.dirty = True
        return quote

    def extend(self, quotes: Iterable[Quote]) -> int:
        """Append already-validated quotes; return how many were added."""
        before = len(self._quotes)
        self._quotes.extend(quotes)
        added = len(self._quotes) - before
        if added:
            self.dirty = True
        return added

    def find_by_id(self, quote_id: int | None) -> Quote | None:
        """Return the first quote carrying *quote_id*.  ``None`` never matches."""
        if quote_id is None:
            return None
        for quote in self._quotes:
            if quote.id == quote_id:
                return quote
        return None

    def replace(self, index: int, quote: Quote) -> None:
        """Replace the quote at *index*.

        Raises :class:`IndexError` when *index* is out of range.
        """
        if not 0 <= index < len(self._quotes):
            raise IndexError(f"quote index {index} out of range")
        self._quotes[index] = quote
        self.dirty = True

    def merge(self, remote: Sequence[Quote]) -> MergeResult:
        """Reconcile *remote* into the collection (server precedence)."""
        result = reconcile(self._quotes, remote)
        if result.added or result.conflicts:
            self._quotes = list(result.merged)
            self.dirty = True
        return result

    def filtered(self, category: str = FILTER_ALL) -> list[Quote]:
        """Quotes in *category*, or every quote for the ``"all"`` sentinel."""
        if category == FILTER_ALL:
            return self.all()
        return [quote for quote in self._quotes if quote.category == category]

    def random_quote(self, category: str = FILTER_ALL, rng: random.Random | None = None) -> Quote | None:
        """Pick a quote uniformly among :meth:`filtered`; ``None`` when empty."""
        candidates = self.filtered(category)
        if not candidates:
            return None
        chooser = rng if rng is not None else random
        return chooser.choice(candidates)

    def mark_clean(self) -> None:
        self.dirty = False
