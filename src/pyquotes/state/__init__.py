"""State layer.

Owns the in-memory quote collection, the category filter, and the only
code allowed to merge remote records into local state.
"""

from pyquotes.state.categories import CategoryIndex, categories, category_options, resolve_filter
from pyquotes.state.reconcile import merge
from pyquotes.state.store import QuoteStore

__all__ = [
    "CategoryIndex",
    "QuoteStore",
    "categories",
    "category_options",
    "merge",
    "resolve_filter",
]
