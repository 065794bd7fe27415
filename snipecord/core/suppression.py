"""
Suppression Table
=================

Per-index alert cooldowns for the poll cycle.

Each tick the open sections snapshot is applied to the table:
- An open index with no cooldown alerts and its cooldown is armed
- An open index still cooling down counts down by one tick
- An index that isn't open has its cooldown cleared, so a reopened section
  always alerts straight away instead of waiting out a stale cooldown

The key set is fixed at construction; indexes are never added or removed.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from ..models import SuppressionEntry

logger = logging.getLogger(__name__)


class SuppressionTable:
    """
    Fixed-key table of SuppressionEntry, one per watched index.

    Owned by a single poll cycle; not safe for concurrent writers.
    """

    def __init__(
        self,
        labels: Mapping[str, str],
        cooldown_length: int,
        log: Optional[logging.Logger] = None,
    ):
        """
        Args:
            labels: Watched index -> display label (from resolve_labels)
            cooldown_length: Ticks to suppress repeat alerts after one fires
            log: Logger for tick diagnostics (default: module logger)
        """
        if isinstance(cooldown_length, bool) or not isinstance(cooldown_length, int):
            raise TypeError("cooldown_length must be an int")
        if cooldown_length < 0:
            raise ValueError("cooldown_length must be non-negative")

        self.cooldown_length = cooldown_length
        self._log = log or logger
        self._entries: Dict[str, SuppressionEntry] = {
            index: SuppressionEntry(label=label) for index, label in labels.items()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, index: object) -> bool:
        return index in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def label(self, index: str) -> str:
        return self._entries[index].label

    def cooldown(self, index: str) -> int:
        return self._entries[index].cooldown_remaining

    def snapshot(self) -> Dict[str, Tuple[str, int]]:
        """Copy of the table as {index: (label, cooldown_remaining)}."""
        return {
            index: (entry.label, entry.cooldown_remaining)
            for index, entry in self._entries.items()
        }

    def apply(self, open_indexes: Iterable[str]) -> List[str]:
        """
        Apply one tick's open sections snapshot.

        Args:
            open_indexes: Indexes reported open this tick. Unwatched indexes
                are ignored; repeats are counted once.

        Returns:
            Watched indexes that should alert this tick, in snapshot order
        """
        seen: Set[str] = set()
        fired: List[str] = []

        for index in open_indexes:
            entry = self._entries.get(index)
            if entry is None or index in seen:
                continue
            seen.add(index)

            if entry.eligible:
                fired.append(index)
                entry.cooldown_remaining = self.cooldown_length
            else:
                entry.cooldown_remaining -= 1

        # Closed sections lose any remaining cooldown
        for index, entry in self._entries.items():
            if index not in seen:
                entry.cooldown_remaining = 0

        if fired:
            self._log.debug(f"Tick: {len(seen)} watched open, alerting {fired}")
        return fired
