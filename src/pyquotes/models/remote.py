"""Model for items returned by the remote posts endpoint.

The remote service is a generic mock REST API; only ``id`` and ``title``
matter to us.  Anything else is kept in ``raw`` for debugging.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pyquotes._constants import SERVER_CATEGORY
from pyquotes.models.quote import Quote


class RemotePost(BaseModel):
    """One item of the remote ``/posts`` collection."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: StrictInt
    title: StrictStr
    body: str | None = None
    user_id: int | None = None

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API item."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if isinstance(values, dict) and "raw" not in values:
            return {**values, "raw": dict(values)}
        return values

    @field_validator("title")
    @classmethod
    def _non_empty_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must be non-empty")
        return value

    def to_quote(self) -> Quote:
        """Map the post onto a quote in the synthetic server category."""
        return Quote(id=self.id, text=self.title, category=SERVER_CATEGORY)
