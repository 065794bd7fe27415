"""
Core Package
============

Polling and alert-suppression logic.

Components:
- labels.py: resolve_labels (index -> display label, run once at startup)
- suppression.py: SuppressionTable (per-index alert cooldowns)
- poll_cycle.py: PollCycle and FixedRateTicker (the fixed-rate loop)
"""

from .labels import resolve_labels, section_label, unknown_label
from .suppression import SuppressionTable
from .poll_cycle import FixedRateTicker, PollCycle

__all__ = [
    "resolve_labels",
    "section_label",
    "unknown_label",
    "SuppressionTable",
    "FixedRateTicker",
    "PollCycle",
]
