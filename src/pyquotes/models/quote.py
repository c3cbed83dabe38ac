"""Quote record model and record-level helpers.

Stored, imported and exported quotes all share one JSON shape::

    {"id": 3, "text": "...", "category": "..."}

``id`` is omitted for quotes that were created locally and never
received a remote identity.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """A single quote tagged with a category."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | None = None
    """Remote identity, ``None`` for quotes created locally."""

    text: str = Field(min_length=1)
    category: str = Field(min_length=1)

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-ready record, dropping a ``None`` id."""
        return self.model_dump(exclude_none=True)

    def same_content(self, other: Quote) -> bool:
        """Whether *other* carries the same text and category."""
        return self.text == other.text and self.category == other.category


def is_quote_record(value: Any) -> bool:
    """Return ``True`` when *value* looks like a storable quote record.

    Both ``text`` and ``category`` must be strings with visible content.
    Total and side-effect free: any input is accepted, nothing is raised.
    """
    if not isinstance(value, Mapping):
        return False
    text = value.get("text")
    category = value.get("category")
    return isinstance(text, str) and isinstance(category, str) and bool(text.strip()) and bool(category.strip())


def coerce_quote_id(value: Any) -> int | None:
    """Normalise a stored ``id`` to ``int`` or ``None``.

    Integers, integral floats and all-digit strings are accepted; anything
    else (missing, booleans, free text) becomes ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return None


def quote_from_record(record: Mapping[str, Any]) -> Quote:
    """Build a :class:`Quote` from a record that passed :func:`is_quote_record`."""
    return Quote(
        id=coerce_quote_id(record.get("id")),
        text=record["text"],
        category=record["category"],
    )


def quotes_from_records(items: Iterable[Any]) -> list[Quote]:
    """Keep the well-formed records of *items*, silently dropping the rest."""
    return [quote_from_record(item) for item in items if is_quote_record(item)]
