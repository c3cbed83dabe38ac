from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyquotes.exceptions import QuoteNetworkError


@dataclass
class FakeQuoteBackend:
    """In-process stand-in for the remote posts endpoint."""

    items: list[Any] = field(default_factory=list)
    calls: dict[str, int] = field(default_factory=dict)
    posted: list[dict[str, Any]] = field(default_factory=list)
    params: list[dict[str, str]] = field(default_factory=list)
    fail_get: bool = False
    fail_post: bool = False
    gate: asyncio.Event | None = None

    def _record_call(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        self._record_call("get")
        self.params.append(dict(params or {}))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_get:
            raise QuoteNetworkError("connection refused", endpoint=endpoint)
        return copy.deepcopy(self.items)

    async def post_json(self, endpoint: str, payload: Mapping[str, Any]) -> Any:
        self._record_call("post")
        self.posted.append(dict(payload))
        if self.fail_post:
            raise QuoteNetworkError("HTTP 503 from /posts", status_code=503, endpoint=endpoint)
        return {"id": 101, **payload}


@pytest.fixture
def backend() -> FakeQuoteBackend:
    return FakeQuoteBackend(
        items=[
            {"userId": 1, "id": 1, "title": "sunt aut facere", "body": "quia et suscipit"},
            {"userId": 1, "id": 2, "title": "qui est esse", "body": "est rerum tempore"},
        ]
    )
