"""Append-only, insertion-ordered collection of symptom entries.

The store is the single source of truth for every derived view.  It is owned
by whoever created it (the application instance for the HTTP surface) and
passed explicitly to the aggregation and series functions, which only read it.

Order is insertion order, not calendar order: a day logged late lands at the
end.  There is no update or delete; a correction is a new entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from src.symptoms.entry import SymptomEntry

logger = logging.getLogger("pcos_tracker.symptoms.store")


class EntryStore:
    """In-memory, append-only sequence of SymptomEntry.

    Usage::

        store = EntryStore()
        store.append(normalize_entry(raw))
        store.all()               # every entry, oldest insertion first
        store.trailing_window(14) # the 14 most recent insertions
    """

    def __init__(self) -> None:
        self._entries: list[SymptomEntry] = []

    def append(self, entry: SymptomEntry) -> None:
        """Add an entry at the end.  Never rejects, reorders or deduplicates."""
        self._entries.append(entry)
        logger.debug(
            "Appended entry #%d for %s (%s)",
            len(self._entries),
            entry.entry_date,
            entry.cycle_day or "no cycle day",
        )

    def all(self) -> tuple[SymptomEntry, ...]:
        """Return every entry in insertion order as a read-only tuple."""
        return tuple(self._entries)

    def trailing_window(self, n: int) -> tuple[SymptomEntry, ...]:
        """Return the last ``n`` entries in insertion order.

        Recomputed on every call.  Returns all entries when the store holds
        fewer than ``n``, and nothing when ``n`` is zero or negative.
        """
        if n <= 0:
            return ()
        return tuple(self._entries[-n:])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymptomEntry]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"EntryStore(entries={len(self._entries)})"
