"""
Quiz setup data: selections, difficulty, time limit, and prepared questions.

Also holds the rating → (difficulty, time limit) mapping used to pick
question difficulty from a learner's proficiency rating.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

try:
    from ..config import config
except ImportError:
    from src.config import config


class Difficulty(str, Enum):
    """Question difficulty; the value is the API query parameter."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class TimeLimit:
    """Countdown for a whole quiz."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self):
        if min(self.hours, self.minutes, self.seconds) < 0:
            raise ValueError(f"Time limit components cannot be negative: {self}")

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def to_dict(self) -> Dict[str, int]:
        return {"hours": self.hours, "minutes": self.minutes, "seconds": self.seconds}


# Not yet derived from a rating
ZERO_TIME_LIMIT = TimeLimit()


def map_rating_to_difficulty(rating: int) -> tuple[Difficulty, TimeLimit]:
    """
    Map a proficiency rating to a question difficulty and time limit.

    Bands (lower bounds inclusive):
        rating >= 8      → hard, 5 minutes
        5 <= rating < 8  → medium, 10 minutes
        rating < 5       → easy, 20 minutes

    Args:
        rating: Integer proficiency rating

    Returns:
        Tuple of (Difficulty, TimeLimit)
    """
    bands = config.quiz
    if rating >= bands.hard_threshold:
        return Difficulty.HARD, TimeLimit(minutes=bands.hard_minutes)
    if rating >= bands.medium_threshold:
        return Difficulty.MEDIUM, TimeLimit(minutes=bands.medium_minutes)
    return Difficulty.EASY, TimeLimit(minutes=bands.easy_minutes)


@dataclass
class QuizConfig:
    """
    Learner's quiz selections.

    A field counts as populated when it is truthy, so "" and 0 mean unset.
    The id "0" is a valid selection meaning "any".

    Attributes:
        category: Category id (e.g. "9" for General Knowledge)
        question_count: Number of questions to request
        question_type: "0" (any), "multiple" or "boolean"
    """

    category: Optional[str] = None
    question_count: Optional[int] = None
    question_type: Optional[str] = None

    FIELDS = ("category", "question_count", "question_type")

    def is_complete(self) -> bool:
        return all(getattr(self, name) for name in self.FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}


@dataclass
class Question:
    """
    A fetched question with its answer options.

    `options` is shuffled once when the question is built and never
    reshuffled afterwards.
    """

    text: str
    correct_answer: str
    incorrect_answers: List[str]
    options: List[str] = field(default_factory=list)
    category: Optional[str] = None
    difficulty: Optional[str] = None
    question_type: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any], rng) -> "Question":
        """
        Build a Question from one API result, decoding HTML entities.

        Args:
            item: A single entry of the API `results` list
            rng: random.Random-like object used to shuffle the options
        """
        correct = html.unescape(item["correct_answer"])
        incorrect = [html.unescape(answer) for answer in item["incorrect_answers"]]
        options = [correct, *incorrect]
        rng.shuffle(options)
        return cls(
            text=html.unescape(item["question"]),
            correct_answer=correct,
            incorrect_answers=incorrect,
            options=options,
            category=item.get("category"),
            difficulty=item.get("difficulty"),
            question_type=item.get("type"),
        )

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "question": self.text,
            "correct_answer": self.correct_answer,
            "incorrect_answers": list(self.incorrect_answers),
            "options": list(self.options),
            "category": self.category,
            "difficulty": self.difficulty,
            "type": self.question_type,
        }


@dataclass
class SessionError:
    """
    User-facing error banner.

    Attributes:
        display_message: Text shown to the learner
        kind: Short machine-readable category ("rating", "insufficient_questions",
            "network", "unexpected_response")
    """

    display_message: str
    kind: str = "general"
