"""Deterministic reconciliation of remote records into the local collection.

Policy: server precedence.  A remote record that shares its id with a local
record always replaces it when text or category differ.  There is no
timestamp comparison and no three-way merge.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pyquotes.models.quote import Quote
from pyquotes.models.sync import ConflictRecord, MergeResult, QuoteFields

_logger = logging.getLogger(__name__)


def _index_by_id(quotes: Sequence[Quote]) -> dict[int, int]:
    """Map each non-null id to the position of its first occurrence."""
    index: dict[int, int] = {}
    for position, quote in enumerate(quotes):
        if quote.id is not None and quote.id not in index:
            index[quote.id] = position
    return index


def merge(local: Sequence[Quote], remote: Sequence[Quote]) -> MergeResult:
    """Merge *remote* into *local* and report conflicts.

    Neither input is mutated.  Remote records are processed in order, which
    also fixes the order of the returned conflicts.  Records with a ``None``
    id never match anything and are appended.
    """
    merged = list(local)
    positions = _index_by_id(merged)
    conflicts: list[ConflictRecord] = []
    added = 0

    for incoming in remote:
        position = positions.get(incoming.id) if incoming.id is not None else None

        if position is None:
            merged.append(incoming)
            if incoming.id is not None:
                positions[incoming.id] = len(merged) - 1
            added += 1
            continue

        current = merged[position]
        if current.same_content(incoming):
            continue

        # incoming.id is not None here: only non-null ids are indexed.
        conflicts.append(
            ConflictRecord(
                id=incoming.id,  # type: ignore[arg-type]
                local=QuoteFields.of(current),
                server=QuoteFields.of(incoming),
            )
        )
        merged[position] = incoming

    if conflicts or added:
        _logger.debug("Merged %d remote record(s): added=%d conflicts=%d", len(remote), added, len(conflicts))

    return MergeResult(merged=merged, conflicts=conflicts, added=added)
