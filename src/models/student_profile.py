"""
Student profile sent to the rating service.

The profile is a fixed, read-only mapping of attribute name to a
descriptive string. The shipped default is a stub payload; callers with
real learner data build their own with `StudentProfile.from_dict`.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator

try:
    from ..utils.validation import StudentProfileValidator
except ImportError:
    from src.utils.validation import StudentProfileValidator


class StudentProfile(Mapping):
    """
    Immutable attribute → description mapping.

    Supports the read-only Mapping protocol; there is no way to mutate a
    profile after construction.
    """

    _validator: StudentProfileValidator | None = None

    def __init__(self, attributes: Mapping[str, str], validate: bool = True):
        """
        Args:
            attributes: Attribute name → descriptive text
            validate: Check against the student profile schema (default True)

        Raises:
            ValueError: If validation is enabled and the attributes are invalid
        """
        data = dict(attributes)
        if validate:
            result = self._get_validator().validate(data, auto_repair=True)
            if not result:
                raise ValueError(f"Invalid student profile: {'; '.join(result.errors)}")
            data = result.data
        self._attributes = MappingProxyType(data)

    @classmethod
    def _get_validator(cls) -> StudentProfileValidator:
        """Get cached validator instance."""
        if cls._validator is None:
            cls._validator = StudentProfileValidator()
        return cls._validator

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "StudentProfile":
        return cls(data)

    def __getitem__(self, key: str) -> str:
        return self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"StudentProfile({dict(self._attributes)!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a mutable copy of the attributes."""
        return dict(self._attributes)

    def to_prompt_text(self) -> str:
        """Render as `attribute: value` lines for an LLM prompt."""
        return "\n".join(
            f"- {key.replace('_', ' ')}: {value}" for key, value in self._attributes.items()
        )


DEFAULT_PROFILE_ATTRIBUTES = {
    "grades": "A+ in Mathematics, A++ in English",
    "hobbies": "VERY GOOD",
    "unique_skills": "VERY GOOD",
    "daily_activity": "VERY GOOD",
    "prof_remarks": "VERY VERY GOOD STUDENT",
    "attendance": "VERY VERY GOOD",
    "participation": "VERY VERY GOOD",
    "assignments": "VERY VERY GOOD",
    "teamwork": "VERY GOOD",
    "punctuality": "ALWAYS ON TIME",
    "focus": "VERY GOOD",
    "communication": "VERY GOOD",
    "progress": "VERY GOOD",
    "problem_solving": "VERY GOOD",
    "behavior": "VERY GOOD",
}


def default_student_profile() -> StudentProfile:
    """The stub profile used until real learner data is wired in."""
    return StudentProfile(DEFAULT_PROFILE_ATTRIBUTES)
