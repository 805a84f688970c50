"""
Question-bank client for the Open Trivia Database.

Issues one GET per quiz, validates the payload, and turns each result
into a Question with its answer options shuffled.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional
from urllib.parse import urlencode

import requests

try:
    from ..config import config
    from ..constants import RESPONSE_CODES
    from ..exceptions import (
        InsufficientQuestionsError,
        QuestionFetchNetworkError,
        UnexpectedResponseError,
    )
    from ..models.quiz_setup import Difficulty, Question, QuizConfig
    from .connectivity import is_online
    from .validation import TriviaResponseValidator
except ImportError:
    from src.config import config
    from src.constants import RESPONSE_CODES
    from src.exceptions import (
        InsufficientQuestionsError,
        QuestionFetchNetworkError,
        UnexpectedResponseError,
    )
    from src.models.quiz_setup import Difficulty, Question, QuizConfig
    from src.utils.connectivity import is_online
    from src.utils.validation import TriviaResponseValidator

logger = logging.getLogger(__name__)

RESPONSE_OK = 0
RESPONSE_NO_RESULTS = 1


class QuestionFetcher:
    """
    Fetch and prepare quiz questions.

    Usage:
        fetcher = QuestionFetcher()
        questions = fetcher.fetch(QuizConfig("9", 5, "0"), Difficulty.HARD)
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        min_loading_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
        online_check: Callable[[], bool] = is_online,
    ):
        """
        Initialize question fetcher.

        Args:
            api_url: Question bank endpoint (default: config.trivia.api_url)
            timeout: Request timeout in seconds
            min_loading_seconds: Deliver outcomes no earlier than this after the
                request starts (0 disables)
            rng: Random source for option shuffling (default: unseeded module RNG)
            online_check: Callable reporting whether the device is online
        """
        self.api_url = api_url or config.trivia.api_url
        self.timeout = timeout if timeout is not None else config.trivia.timeout
        self.min_loading_seconds = (
            min_loading_seconds
            if min_loading_seconds is not None
            else config.trivia.min_loading_seconds
        )
        self.rng = rng or random.Random()
        self.online_check = online_check
        self.validator = TriviaResponseValidator()

    def build_url(self, quiz_config: QuizConfig, difficulty: Difficulty | str) -> str:
        """
        Build the request URL.

        Args:
            quiz_config: Learner selections
            difficulty: Question difficulty

        Returns:
            URL with amount, category, difficulty and type query parameters
        """
        query = urlencode(
            {
                "amount": quiz_config.question_count,
                "category": quiz_config.category,
                "difficulty": Difficulty(difficulty).value,
                "type": quiz_config.question_type,
            }
        )
        return f"{self.api_url}?{query}"

    def fetch(self, quiz_config: QuizConfig, difficulty: Difficulty | str) -> List[Question]:
        """
        Fetch `quiz_config.question_count` questions.

        Args:
            quiz_config: Learner selections (must be complete)
            difficulty: Question difficulty

        Returns:
            List of Question objects with shuffled options

        Raises:
            ValueError: If quiz_config is incomplete
            InsufficientQuestionsError: API response_code 1
            UnexpectedResponseError: Other non-zero codes or malformed payload
            QuestionFetchNetworkError: Transport or HTTP failure
        """
        if not quiz_config.is_complete():
            raise ValueError(f"Quiz config is incomplete: {quiz_config.to_dict()}")
        if int(quiz_config.question_count) <= 0:
            raise ValueError(
                f"question_count must be positive, got {quiz_config.question_count}"
            )

        url = self.build_url(quiz_config, difficulty)
        started = time.monotonic()
        logger.info("Fetching questions: %s", url)

        try:
            data = self._get_json(url)
            return self._prepare_questions(data)
        finally:
            self._hold_until_min_loading(started)

    def _get_json(self, url: str) -> dict:
        """GET the URL and decode its JSON body."""
        headers = {"User-Agent": config.trivia.user_agent}
        try:
            response = requests.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            offline = not self.online_check()
            if offline:
                logger.warning("Question fetch failed while offline: %s", e)
            else:
                logger.error("Question fetch failed: %s", e)
            raise QuestionFetchNetworkError(str(e), offline=offline) from e

        try:
            return response.json()
        except ValueError as e:
            raise UnexpectedResponseError(f"Response is not valid JSON: {e}") from e

    def _prepare_questions(self, data: dict) -> List[Question]:
        """Validate the payload, check response_code, and shuffle options."""
        result = self.validator.validate(data, auto_repair=True)
        if not result:
            raise UnexpectedResponseError(
                "Malformed question bank response: " + "; ".join(result.errors)
            )
        data = result.data

        code = data["response_code"]
        logger.debug("Question bank response_code=%s", code)

        if code == RESPONSE_NO_RESULTS:
            raise InsufficientQuestionsError()
        if code != RESPONSE_OK:
            meaning = RESPONSE_CODES.get(code, "Unknown response code")
            raise UnexpectedResponseError(f"{meaning} (code {code})", response_code=code)

        questions = [Question.from_api(item, self.rng) for item in data.get("results", [])]
        logger.info("Prepared %d questions", len(questions))
        return questions

    def _hold_until_min_loading(self, started: float) -> None:
        remaining = self.min_loading_seconds - (time.monotonic() - started)
        if remaining > 0:
            time.sleep(remaining)
