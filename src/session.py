"""
Quiz session initializer.

Coordinates the launch workflow:
    rating resolution → difficulty/time derivation → question fetch → handoff

The controller watches the learner's selections, the rating, the derived
time limit and the in-flight flag, and starts a fetch exactly once each
time they become ready. At most one fetch is in flight; a selection change
during a fetch makes that fetch stale, so its outcome is discarded and a
fresh fetch starts with the newer selections once it returns.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from enum import Enum
from typing import Callable, List, Optional

try:
    from .agents.rating_agent import RatingResolver
    from .config import config
    from .exceptions import (
        InsufficientQuestionsError,
        QuestionFetchError,
        QuestionFetchNetworkError,
        RatingAlreadyResolvedError,
        RatingServiceError,
    )
    from .models.quiz_setup import (
        ZERO_TIME_LIMIT,
        Difficulty,
        Question,
        QuizConfig,
        SessionError,
        TimeLimit,
        map_rating_to_difficulty,
    )
    from .models.student_profile import StudentProfile, default_student_profile
    from .utils.trivia_fetcher import QuestionFetcher
except ImportError:
    from src.agents.rating_agent import RatingResolver
    from src.config import config
    from src.exceptions import (
        InsufficientQuestionsError,
        QuestionFetchError,
        QuestionFetchNetworkError,
        RatingAlreadyResolvedError,
        RatingServiceError,
    )
    from src.models.quiz_setup import (
        ZERO_TIME_LIMIT,
        Difficulty,
        Question,
        QuizConfig,
        SessionError,
        TimeLimit,
        map_rating_to_difficulty,
    )
    from src.models.student_profile import StudentProfile, default_student_profile
    from src.utils.trivia_fetcher import QuestionFetcher

logger = logging.getLogger(__name__)

StartQuiz = Callable[[List[Question], int], None]

RATING_ERROR_MESSAGE = "Error fetching rating."
HANDOFF_ERROR_MESSAGE = "Could not start the quiz."


class SessionState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    HANDED_OFF = "handed_off"
    OFFLINE = "offline"


class SessionInitializer:
    """
    Controller for configuring and launching one quiz.

    Usage:
        session = SessionInitializer(start_quiz=quiz_runner.start)
        session.resolve_rating()
        session.update_config(category="9", question_count=5, question_type="0")
        # start_quiz(questions, total_seconds) has now been called, or
        # session.error / session.offline explains why not
    """

    def __init__(
        self,
        start_quiz: StartQuiz,
        fetcher: Optional[QuestionFetcher] = None,
        resolver: Optional[RatingResolver] = None,
        profile: Optional[StudentProfile] = None,
        quiz_config: Optional[QuizConfig] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize the session controller.

        Args:
            start_quiz: Downstream handoff, called with (questions, total_seconds)
            fetcher: Question fetcher (default: QuestionFetcher())
            resolver: Rating resolver (default: created on first resolve_rating())
            profile: Student profile sent for rating (default: stub profile)
            quiz_config: Initial selections (default: config.quiz defaults)
            executor: Run fetches on this executor instead of inline
        """
        self.start_quiz = start_quiz
        self.fetcher = fetcher or QuestionFetcher()
        self._resolver = resolver
        self.profile = profile or default_student_profile()
        self.config = quiz_config or QuizConfig(
            category=config.quiz.category,
            question_count=config.quiz.question_count,
            question_type=config.quiz.question_type,
        )
        self.executor = executor

        self.rating: Optional[int] = None
        self.difficulty: Difficulty = Difficulty.EASY
        self.time_limit: TimeLimit = ZERO_TIME_LIMIT

        self.state = SessionState.IDLE
        self.error: Optional[SessionError] = None
        self.questions: Optional[List[Question]] = None

        self._lock = threading.RLock()
        self._generation = 0
        self._in_flight = False

    # ==================== Read-only status ====================

    @property
    def processing(self) -> bool:
        """True while a fetch is in flight (selection widgets should be disabled)."""
        return self._in_flight

    @property
    def offline(self) -> bool:
        return self.state == SessionState.OFFLINE

    def is_ready(self) -> bool:
        """Whether a fetch would start right now."""
        with self._lock:
            return (
                self.state == SessionState.IDLE
                and not self._in_flight
                and self.config.is_complete()
                and self.rating is not None
                and self.time_limit.total_seconds > 0
            )

    # ==================== Inputs ====================

    def update_config(self, **changes) -> None:
        """
        Change one or more selections.

        Args:
            **changes: Any of category, question_count, question_type

        Raises:
            ValueError: On unknown fields or a non-positive question_count
        """
        unknown = set(changes) - set(QuizConfig.FIELDS)
        if unknown:
            raise ValueError(f"Unknown quiz config fields: {sorted(unknown)}")

        count = changes.get("question_count")
        # 0, None and "" clear the selection
        if count not in (None, 0, "") and (
            isinstance(count, bool) or not isinstance(count, int) or count < 0
        ):
            raise ValueError(f"question_count must be a positive integer, got {count!r}")

        with self._lock:
            changed = {
                name: value
                for name, value in changes.items()
                if getattr(self.config, name) != value
            }
            if not changed:
                return
            for name, value in changed.items():
                setattr(self.config, name, value)
            logger.debug("Quiz config updated: %s", changed)

            if self._in_flight:
                # Outstanding fetch now answers an outdated query
                self._generation += 1
                logger.info("Selections changed during fetch; its result will be discarded")

        self._maybe_fetch()

    def resolve_rating(self) -> Optional[int]:
        """
        Obtain the rating from the scoring service and derive difficulty/time.

        Failures leave the rating unset and set the "Error fetching rating."
        banner; calling again retries.

        Returns:
            The rating, or None on failure

        Raises:
            RatingAlreadyResolvedError: If a rating is already set
        """
        if self.rating is not None:
            raise RatingAlreadyResolvedError(f"Rating already resolved: {self.rating}")

        if self._resolver is None:
            self._resolver = RatingResolver()

        try:
            rating = self._resolver.resolve(self.profile)
        except RatingServiceError as e:
            logger.error("Error fetching rating: %s", e)
            with self._lock:
                self.error = SessionError(RATING_ERROR_MESSAGE, kind="rating")
            return None

        self.set_rating(rating)
        return rating

    def set_rating(self, rating: int) -> None:
        """
        Apply a known rating.

        Raises:
            RatingAlreadyResolvedError: If a rating is already set
        """
        with self._lock:
            if self.rating is not None:
                raise RatingAlreadyResolvedError(f"Rating already resolved: {self.rating}")
            self.rating = int(rating)
            self.difficulty, self.time_limit = map_rating_to_difficulty(self.rating)
            if self.error is not None and self.error.kind == "rating":
                self.error = None
            logger.info(
                "Rating %d → difficulty=%s, time limit=%ss",
                self.rating,
                self.difficulty.value,
                self.time_limit.total_seconds,
            )

        self._maybe_fetch()

    def dismiss_error(self) -> None:
        with self._lock:
            self.error = None

    # ==================== Fetch lifecycle ====================

    def _maybe_fetch(self) -> None:
        """Start a fetch if the readiness condition holds."""
        with self._lock:
            if not self.is_ready():
                return
            self._in_flight = True
            self.state = SessionState.FETCHING
            self.error = None
            self._generation += 1
            generation = self._generation
            snapshot = QuizConfig(**self.config.to_dict())
            difficulty = self.difficulty

        logger.info("Starting fetch #%d with %s", generation, snapshot.to_dict())
        if self.executor is not None:
            future = self.executor.submit(self._run_fetch, generation, snapshot, difficulty)
            future.add_done_callback(self._log_worker_failure)
        else:
            self._run_fetch(generation, snapshot, difficulty)

    def _run_fetch(self, generation: int, snapshot: QuizConfig, difficulty: Difficulty) -> None:
        questions = None
        failure = None
        try:
            questions = self.fetcher.fetch(snapshot, difficulty)
        except QuestionFetchError as e:
            failure = e
        except Exception as e:
            logger.exception("Unexpected error during fetch #%d", generation)
            failure = e
        self._complete(generation, questions, failure)

    def _complete(
        self,
        generation: int,
        questions: Optional[List[Question]],
        failure: Optional[Exception],
    ) -> None:
        """Apply a fetch outcome unless a newer selection superseded it."""
        handoff = False
        with self._lock:
            self._in_flight = False

            if generation != self._generation:
                logger.info("Discarding stale result of fetch #%d", generation)
                self.state = SessionState.IDLE
                stale = True
            else:
                stale = False
                handoff = self._apply_outcome(questions, failure)

        if stale:
            self._maybe_fetch()
            return

        if handoff:
            total_seconds = self.time_limit.total_seconds
            logger.info(
                "Handing off %d questions with %ss on the clock",
                len(self.questions),
                total_seconds,
            )
            try:
                self.start_quiz(self.questions, total_seconds)
            except Exception:
                logger.exception("start_quiz failed; quiz was not started")
                with self._lock:
                    self.questions = None
                    self.state = SessionState.IDLE
                    self.error = SessionError(HANDOFF_ERROR_MESSAGE, kind="handoff")

    @staticmethod
    def _log_worker_failure(future) -> None:
        """Done-callback for executor fetches; reports anything that escaped."""
        if future.cancelled():
            logger.warning("Fetch was cancelled before it ran")
            return
        error = future.exception()
        if error is not None:
            logger.error(
                "Fetch worker failed: %s",
                error,
                exc_info=(type(error), error, error.__traceback__),
            )

    def _apply_outcome(
        self,
        questions: Optional[List[Question]],
        failure: Optional[Exception],
    ) -> bool:
        """Update state for a current outcome; return True to hand off."""
        if failure is None:
            self.questions = questions
            self.state = SessionState.HANDED_OFF
            return True

        if isinstance(failure, QuestionFetchNetworkError) and failure.offline:
            self.state = SessionState.OFFLINE
            return False

        self.state = SessionState.IDLE
        if isinstance(failure, InsufficientQuestionsError):
            self.error = SessionError(str(failure), kind="insufficient_questions")
        elif isinstance(failure, QuestionFetchNetworkError):
            self.error = SessionError(str(failure), kind="network")
        else:
            self.error = SessionError(str(failure), kind="unexpected_response")
        return False
