"""
TriviaLaunch: terminal launcher.

Resolves the learner's rating, derives difficulty and time limit, fetches
questions, and prints the prepared quiz.

Usage:
    python -m src.run --category 9 --amount 5 --type multiple
    python -m src.run --rating 9          # skip the rating service
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.config import config, configure_logging
from src.constants import CATEGORIES, NUM_OF_QUESTIONS, QUESTIONS_TYPE, option_values
from src.models.quiz_setup import Question, QuizConfig
from src.session import SessionInitializer


def _print_quiz(questions: List[Question], total_seconds: int) -> None:
    """Downstream handoff for the terminal: show what the quiz runner would receive."""
    minutes, seconds = divmod(total_seconds, 60)
    print(f"\n✅ Quiz ready: {len(questions)} questions, {minutes:02d}:{seconds:02d} on the clock\n")
    for number, question in enumerate(questions, start=1):
        print(f"{number}. {question.text}")
        for letter, option in zip("ABCDEFGH", question.options):
            print(f"   {letter}. {option}")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Configure and launch a trivia quiz")
    parser.add_argument(
        "--category",
        default=config.quiz.category,
        choices=option_values(CATEGORIES),
        help="Category id (0 = any)",
    )
    parser.add_argument(
        "--amount",
        type=int,
        default=config.quiz.question_count,
        choices=option_values(NUM_OF_QUESTIONS),
        help="Number of questions",
    )
    parser.add_argument(
        "--type",
        dest="question_type",
        default=config.quiz.question_type,
        choices=option_values(QUESTIONS_TYPE),
        help="Question type (0 = any)",
    )
    parser.add_argument(
        "--rating",
        type=int,
        default=None,
        help="Use this rating instead of calling the rating service",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    session = SessionInitializer(
        start_quiz=_print_quiz,
        quiz_config=QuizConfig(
            category=args.category,
            question_count=args.amount,
            question_type=args.question_type,
        ),
    )

    if args.rating is not None:
        session.set_rating(args.rating)
    else:
        errors = [e for e in config.validate() if "OPENAI_API_KEY" in e]
        if errors:
            print(f"❌ {errors[0]} (or pass --rating)")
            return 2
        print("📊 Fetching student rating...")
        session.resolve_rating()

    if session.offline:
        print("📴 You appear to be offline. Check your connection and try again.")
        return 1
    if session.error is not None:
        print(f"❌ Error! {session.error.display_message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
