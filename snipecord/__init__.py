"""
SnipeCord
=========

Watches Rutgers course sections and posts to a Discord webhook when a
watched section opens.
"""

__version__ = "0.1.0"
