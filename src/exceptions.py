"""
Exception hierarchy for TriviaLaunch.

Components raise these; SessionInitializer is the boundary that turns them
into user-facing SessionError banners.
"""

from __future__ import annotations


class TriviaLaunchError(Exception):
    """Base class for all TriviaLaunch errors."""


# ==================== Rating ====================


class RatingServiceError(TriviaLaunchError):
    """Failure obtaining a rating from the scoring service."""


class RatingServiceCallError(RatingServiceError):
    """The scoring service call raised or timed out."""


class RatingParseError(RatingServiceError):
    """The scoring service output did not end with a numeric rating."""

    def __init__(self, message: str, output: str | None = None):
        super().__init__(message)
        self.output = output


class RatingAlreadyResolvedError(TriviaLaunchError):
    """A rating was already set for this session."""


# ==================== Question fetch ====================


class QuestionFetchError(TriviaLaunchError):
    """Base class for question-bank failures."""


class InsufficientQuestionsError(QuestionFetchError):
    """The question bank has fewer matching questions than requested (response_code 1)."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or (
                "The API doesn't have enough questions for your query. "
                "(For example, asking for 50 questions in a category that only has 20.) "
                "Please change the No. of Questions, Difficulty Level, or Type of Questions."
            )
        )


class UnexpectedResponseError(QuestionFetchError):
    """The question bank answered with an unknown code or malformed payload."""

    def __init__(self, message: str, response_code: int | None = None):
        super().__init__(message)
        self.response_code = response_code


class QuestionFetchNetworkError(QuestionFetchError):
    """The request never produced a usable HTTP response."""

    def __init__(self, message: str, offline: bool = False):
        super().__init__(message)
        self.offline = offline
