"""Remote posts endpoint.

Endpoints:
  - GET  {posts_endpoint}?_limit=N   (list remote items)
  - POST {posts_endpoint}            (create an item; response ignored)

The remote service is a fixed third-party contract.  Items are shaped
``{"id": int, "title": str, ...}``; posted bodies are
``{"title", "body", "userId"}``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyquotes._transport import Transport
from pyquotes.config import QuoteConfig
from pyquotes.exceptions import QuoteNetworkError
from pyquotes.models.quote import Quote
from pyquotes.models.remote import RemotePost

_logger = logging.getLogger(__name__)


def build_post_body(config: QuoteConfig, quote: Quote) -> dict[str, Any]:
    """Map a local quote onto the remote create-item body."""
    return {
        "title": quote.text,
        "body": quote.category,
        "userId": config.user_id,
    }


def parse_remote_items(endpoint: str, decoded: Any) -> list[Quote]:
    """Turn the decoded list response into quotes, skipping malformed items."""
    if not isinstance(decoded, list):
        raise QuoteNetworkError(
            f"Expected a JSON array from {endpoint}, got {type(decoded).__name__}",
            endpoint=endpoint,
        )

    quotes: list[Quote] = []
    for item in decoded:
        try:
            post = RemotePost.model_validate(item)
        except ValidationError:
            _logger.debug("Skipping malformed remote item: %r", item)
            continue
        quotes.append(post.to_quote())
    return quotes


async def fetch_posts(config: QuoteConfig, transport: Transport) -> list[Quote]:
    """Fetch up to ``config.fetch_limit`` remote items as server quotes."""
    endpoint = config.posts_endpoint
    decoded = await transport.get_json(endpoint, {"_limit": str(config.fetch_limit)})
    return parse_remote_items(endpoint, decoded)


async def create_post(config: QuoteConfig, transport: Transport, quote: Quote) -> None:
    """Send *quote* to the remote endpoint.  Raises :class:`QuoteNetworkError`."""
    await transport.post_json(config.posts_endpoint, build_post_body(config, quote))
