"""
API Package
===========

External API clients.

Components:
- soc.py: SOCClient for the Rutgers Schedule of Classes
"""

from .soc import SOCClient, decode_body

__all__ = [
    "SOCClient",
    "decode_body",
]
