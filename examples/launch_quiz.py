"""
Launch workflow example: Rating → Difficulty → Fetch → Handoff

Demonstrates the full quiz setup against the live question bank:
1. Resolve a rating (stub scoring service, no API key needed)
2. Derive difficulty and time limit
3. Fetch questions on a background thread
4. Receive the prepared quiz in a start_quiz callback
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.agents.rating_agent import RatingResolver
from src.config import configure_logging
from src.models.quiz_setup import QuizConfig
from src.session import SessionInitializer


class CannedRatingService:
    """Stands in for the LLM scoring service."""

    def score(self, profile):
        return [f"Reviewed {len(profile)} attributes.", "Rating: 7"]


def main():
    configure_logging("INFO")

    def start_quiz(questions, total_seconds):
        print(f"✓ Received {len(questions)} questions, {total_seconds // 60} minutes")
        for question in questions:
            print(f"  - {question.text}")
            print(f"    options: {', '.join(question.options)}")

    with ThreadPoolExecutor(max_workers=1) as pool:
        session = SessionInitializer(
            start_quiz=start_quiz,
            resolver=RatingResolver(service=CannedRatingService()),
            quiz_config=QuizConfig(category="18", question_count=5, question_type="multiple"),
            executor=pool,
        )

        print("=" * 60)
        print("STEP 1: Resolving rating")
        print("=" * 60)
        session.resolve_rating()
        print(f"✓ Rating {session.rating} → {session.difficulty.value}, "
              f"{session.time_limit.total_seconds}s")

        print("=" * 60)
        print("STEP 2: Fetching questions (pool shutdown waits for the fetch)")
        print("=" * 60)

    if session.offline:
        print("⚠ Offline")
    elif session.error is not None:
        print(f"⚠ {session.error.display_message}")


if __name__ == "__main__":
    main()
