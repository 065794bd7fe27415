"""
Suppression Models
==================

Per-index alert state tracked by the poll cycle.
"""

from dataclasses import dataclass


@dataclass
class SuppressionEntry:
    """
    Alert state for one watched index.

    cooldown_remaining counts ticks until the index may alert again;
    0 means the next open tick alerts.
    """
    label: str
    cooldown_remaining: int = 0

    @property
    def eligible(self) -> bool:
        """Whether an open tick would alert right now."""
        return self.cooldown_remaining == 0
