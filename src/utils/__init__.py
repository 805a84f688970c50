"""
Utility modules for TriviaLaunch.

This module contains utility functions:
- validation: JSON Schema validation for profiles and API payloads
- connectivity: Offline detection
- trivia_fetcher: Question-bank client
"""

from .validation import (
    SchemaValidator,
    StudentProfileValidator,
    TriviaResponseValidator,
    ValidationResult,
    validate_student_profile,
    validate_trivia_response,
)
from .connectivity import is_online
from .trivia_fetcher import QuestionFetcher

__all__ = [
    # Validation
    "SchemaValidator",
    "StudentProfileValidator",
    "TriviaResponseValidator",
    "ValidationResult",
    "validate_student_profile",
    "validate_trivia_response",
    # Network
    "is_online",
    "QuestionFetcher",
]
