"""
AI agents for quiz setup.

This module contains LangChain-based agents (AI/LLM-powered decision makers):
- Rating (proficiency score from a student profile)

Note: SessionInitializer is in src/session.py (pure coordination, not an agent)
"""

from .rating_agent import (
    LLMRatingService,
    RatingResolver,
    RatingService,
    parse_rating,
)

__all__ = [
    "LLMRatingService",
    "RatingResolver",
    "RatingService",
    "parse_rating",
]
