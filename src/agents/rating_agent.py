"""
Rating Agent - proficiency rating from an external scoring service.

The scoring service answers with lines of text whose last line carries the
rating (e.g. "Rating: 9"). RatingResolver extracts that integer;
LLMRatingService is the default service, backed by an OpenAI chat model.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol, Sequence

from langchain_core.prompts import PromptTemplate
from langchain_openai import ChatOpenAI

try:
    from ..config import config
    from ..exceptions import RatingParseError, RatingServiceCallError
    from ..models.student_profile import StudentProfile
except ImportError:
    from src.config import config
    from src.exceptions import RatingParseError, RatingServiceCallError
    from src.models.student_profile import StudentProfile

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")


class RatingService(Protocol):
    """Anything that scores a profile and answers with text lines."""

    def score(self, profile: StudentProfile) -> Sequence[str]:
        ...


class LLMRatingService:
    """
    Scoring service that asks a chat model to rate a student.

    The prompt pins the answer format so the final line is always
    `Rating: <n>` on a 1-10 scale.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        """
        Initialize the rating service.

        Args:
            model_name: LLM model name (default: config.model.model_name)
            temperature: LLM temperature (default: config.model.rating_temperature)
        """
        self.model_name = model_name or config.model.model_name

        self.llm = ChatOpenAI(
            model=self.model_name,
            temperature=(
                temperature if temperature is not None else config.model.rating_temperature
            ),
            max_tokens=config.model.max_tokens,
            timeout=config.model.request_timeout,
            api_key=config.model.api_key,
            base_url=config.model.base_url,
        )

        self.rating_prompt = PromptTemplate(
            input_variables=["profile"],
            template="""You are an experienced teacher assessing a student's overall proficiency.

**Student Profile:**
{profile}

**Instructions:**
1. Weigh grades, engagement and conduct together
2. Give at most three short lines of justification
3. Finish with a final line of exactly this form: Rating: <integer from 1 to 10>

**Assessment:**""",
        )

    def score(self, profile: StudentProfile) -> list[str]:
        """
        Rate a student profile.

        Args:
            profile: Student attributes

        Returns:
            Non-blank lines of the model's answer
        """
        prompt = self.rating_prompt.format(profile=profile.to_prompt_text())
        response = self.llm.invoke(prompt).content
        return [line for line in response.splitlines() if line.strip()]


class RatingResolver:
    """Turns scoring-service output into an integer rating."""

    def __init__(self, service: Optional[RatingService] = None):
        """
        Args:
            service: Scoring service (default: LLMRatingService)
        """
        self.service = service or LLMRatingService()

    def resolve(self, profile: StudentProfile) -> int:
        """
        Obtain the rating for a profile.

        Args:
            profile: Student attributes sent to the service

        Returns:
            First integer found on the last output line

        Raises:
            RatingServiceCallError: If the service call fails
            RatingParseError: If the last line holds no digits
        """
        try:
            lines = list(self.service.score(profile))
        except Exception as e:
            logger.error("Error fetching rating: %s", e)
            raise RatingServiceCallError(f"Rating service call failed: {e}") from e

        return parse_rating(lines)


def parse_rating(lines: Sequence[str]) -> int:
    """
    Parse the first contiguous digit run of the last line.

    Args:
        lines: Service output lines

    Returns:
        Integer rating

    Raises:
        RatingParseError: If there are no lines or the last one has no digits
    """
    if not lines:
        raise RatingParseError("Rating service returned no output")

    last_line = lines[-1]
    match = _DIGITS.search(last_line)
    if match is None:
        raise RatingParseError(f"No rating found in: {last_line!r}", output=last_line)

    rating = int(match.group(0))
    logger.info("Resolved rating %d", rating)
    return rating
