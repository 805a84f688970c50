"""
Data models for quiz setup.

This module contains core data models:
- QuizConfig, Difficulty, TimeLimit, Question, SessionError: quiz selections and prepared questions
- map_rating_to_difficulty: rating → (difficulty, time limit) bands
- StudentProfile: read-only profile sent to the rating service
"""

from .quiz_setup import (
    Difficulty,
    Question,
    QuizConfig,
    SessionError,
    TimeLimit,
    ZERO_TIME_LIMIT,
    map_rating_to_difficulty,
)
from .student_profile import StudentProfile, default_student_profile

__all__ = [
    "Difficulty",
    "Question",
    "QuizConfig",
    "SessionError",
    "TimeLimit",
    "ZERO_TIME_LIMIT",
    "map_rating_to_difficulty",
    "StudentProfile",
    "default_student_profile",
]
