"""Client for the remote quote source."""

from __future__ import annotations

import logging

from pyquotes._api import posts as _posts_api
from pyquotes._transport import Transport
from pyquotes.config import QuoteConfig
from pyquotes.exceptions import QuoteNetworkError
from pyquotes.models.quote import Quote

_logger = logging.getLogger(__name__)


class RemoteSyncClient:
    """Reads remote records and pushes newly created local quotes."""

    def __init__(self, config: QuoteConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def fetch_remote(self) -> list[Quote]:
        """Fetch the remote snapshot.

        Raises :class:`QuoteNetworkError` on any transport or shape failure;
        no partial result is returned in that case.
        """
        quotes = await _posts_api.fetch_posts(self._config, self._transport)
        _logger.debug("Fetched %d remote quote(s)", len(quotes))
        return quotes

    async def post_local(self, quote: Quote) -> None:
        """Best-effort upload of a local quote.  Failures are logged, never raised."""
        try:
            await _posts_api.create_post(self._config, self._transport, quote)
        except QuoteNetworkError as exc:
            _logger.warning("Posting quote to server failed: %s", exc)
            return
        _logger.debug("Posted quote to server: %r", quote.text[:64])
