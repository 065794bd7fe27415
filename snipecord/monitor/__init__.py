"""
Monitor Package
===============

Long-running sniper service.

Components:
- service.py: SniperService (startup sequence + poll cycle)
"""

from .service import SniperService

__all__ = [
    "SniperService",
]
