"""
Course Models
=============

Dataclasses for course metadata from the Schedule of Classes API.
Only the fields needed to build display labels are kept.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Section:
    """A section of a course, e.g. number "01" with registration index "01234"."""
    number: str
    index: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        """
        Parse a section record.

        Raises:
            KeyError: If number or index is missing
            TypeError: If either is not a string
        """
        number = data["number"]
        index = data["index"]
        if not isinstance(number, str) or not isinstance(index, str):
            raise TypeError(f"Section number/index must be strings, got {number!r}/{index!r}")
        return cls(number=number, index=index)


@dataclass
class Course:
    """A course record; title is whitespace-trimmed."""
    title: str
    sections: List[Section] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        """
        Parse a course record, ignoring fields we don't use.

        Raises:
            KeyError: If title or sections is missing
            TypeError: If a field has the wrong type
        """
        title = data["title"]
        if not isinstance(title, str):
            raise TypeError(f"Course title must be a string, got {title!r}")
        sections = data["sections"]
        if not isinstance(sections, list):
            raise TypeError(f"Course sections must be a list, got {type(sections).__name__}")
        return cls(
            title=title.strip(),
            sections=[Section.from_dict(s) for s in sections],
        )
