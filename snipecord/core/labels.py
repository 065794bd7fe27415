"""
Display Labels
==============

Builds the human-readable label for each watched index from course metadata.
Runs once at startup; labels are not refreshed afterwards.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models import Course

logger = logging.getLogger(__name__)


def section_label(title: str, number: str, index: str) -> str:
    """Label for a known section, e.g. "CALCULUS I Section 01 (Index 01234)"."""
    return f"{title} Section {number} (Index {index})"


def unknown_label(index: str) -> str:
    """Label for an index that isn't in the metadata."""
    return f"Unknown Class (Index {index})"


def resolve_labels(
    indexes: Iterable[str],
    courses: List[Course],
    log: Optional[logging.Logger] = None,
) -> Dict[str, str]:
    """
    Map each watched index to a display label.

    If an index shows up in more than one section, the last one wins (course
    listings occasionally duplicate a section). Indexes missing from the
    metadata get a fallback label and are still tracked.

    Args:
        indexes: Watched registration indexes
        courses: Course metadata from SOCClient.get_courses
        log: Logger for data-quality diagnostics (default: module logger)

    Returns:
        Dict mapping index to label, with exactly the watched indexes as keys
    """
    log = log or logger
    found: Dict[str, Optional[str]] = {index: None for index in indexes}

    for course in courses:
        for section in course.sections:
            if section.index not in found:
                continue
            label = section_label(course.title, section.number, section.index)
            previous = found[section.index]
            if previous is not None:
                log.warning(
                    f"Same index found twice in course data; first {previous}, "
                    f"then {label}; using last one"
                )
            found[section.index] = label

    labels = {}
    for index, label in found.items():
        if label is None:
            log.warning(
                f"Class data for index {index} not found; tracking it anyway "
                f"but this index is probably not valid"
            )
            label = unknown_label(index)
        labels[index] = label

    log.debug(f"Section labels: {labels}")
    return labels
