"""
Shared pytest fixtures and configuration for TriviaLaunch tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path so `src.` imports resolve for all tests
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_api_result(index: int = 0, question_type: str = "multiple") -> dict:
    """One Open Trivia Database result entry."""
    if question_type == "boolean":
        return {
            "type": "boolean",
            "difficulty": "hard",
            "category": "General Knowledge",
            "question": f"Statement number {index} is true.",
            "correct_answer": "True",
            "incorrect_answers": ["False"],
        }
    return {
        "type": "multiple",
        "difficulty": "hard",
        "category": "General Knowledge",
        "question": f"Question number {index}?",
        "correct_answer": f"Right {index}",
        "incorrect_answers": [f"Wrong {index}a", f"Wrong {index}b", f"Wrong {index}c"],
    }


@pytest.fixture
def api_payload():
    """
    Fixture providing a successful API response body with five questions.

    Returns:
        dict: Decoded JSON body with response_code 0
    """
    return {
        "response_code": 0,
        "results": [make_api_result(i) for i in range(5)],
    }


@pytest.fixture
def insufficient_payload():
    """API response body for 'not enough questions'."""
    return {"response_code": 1, "results": []}


@pytest.fixture
def profile_dict():
    """A small valid student profile mapping."""
    return {
        "grades": "B in Mathematics",
        "attendance": "GOOD",
        "behavior": "VERY GOOD",
    }


class FakeRatingService:
    """Scoring service double returning canned lines."""

    def __init__(self, lines=None, error=None):
        self.lines = lines if lines is not None else ["Strong student.", "Rating: 9"]
        self.error = error
        self.calls = 0

    def score(self, profile):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.lines


@pytest.fixture
def fake_rating_service():
    return FakeRatingService()


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def rating_service_factory():
    """Build FakeRatingService instances with custom lines or errors."""
    return FakeRatingService
