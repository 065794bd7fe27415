"""
Shared Data Models
==================

This package contains dataclasses used across the project.
"""

from .course import Course, Section
from .suppression import SuppressionEntry

__all__ = [
    "Course",
    "Section",
    "SuppressionEntry",
]
