"""
Unit tests for the question-bank client.
"""

import random
from unittest.mock import MagicMock, patch

import pytest
import requests

from src.exceptions import (
    InsufficientQuestionsError,
    QuestionFetchNetworkError,
    UnexpectedResponseError,
)
from src.models.quiz_setup import Difficulty, QuizConfig
from src.utils.trivia_fetcher import QuestionFetcher


def _response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def fetcher():
    return QuestionFetcher(
        api_url="https://opentdb.com/api.php",
        timeout=5,
        min_loading_seconds=0,
        rng=random.Random(1),
        online_check=lambda: True,
    )


@pytest.fixture
def quiz_config():
    return QuizConfig(category="9", question_count=5, question_type="0")


class TestBuildUrl:
    def test_query_parameters(self, fetcher, quiz_config):
        url = fetcher.build_url(quiz_config, Difficulty.HARD)
        assert url == (
            "https://opentdb.com/api.php?amount=5&category=9&difficulty=hard&type=0"
        )

    def test_accepts_string_difficulty(self, fetcher, quiz_config):
        assert "difficulty=easy" in fetcher.build_url(quiz_config, "easy")

    def test_invalid_difficulty(self, fetcher, quiz_config):
        with pytest.raises(ValueError):
            fetcher.build_url(quiz_config, "impossible")


class TestFetch:
    @patch("src.utils.trivia_fetcher.requests.get")
    def test_success(self, mock_get, fetcher, quiz_config, api_payload):
        mock_get.return_value = _response(api_payload)

        questions = fetcher.fetch(quiz_config, Difficulty.HARD)

        assert len(questions) == 5
        for question, item in zip(questions, api_payload["results"]):
            assert len(question.options) == 1 + len(item["incorrect_answers"])
            assert sorted(question.options) == sorted(
                [item["correct_answer"], *item["incorrect_answers"]]
            )
            assert question.correct_answer == item["correct_answer"]

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_single_get_with_timeout(self, mock_get, fetcher, quiz_config, api_payload):
        mock_get.return_value = _response(api_payload)

        fetcher.fetch(quiz_config, Difficulty.HARD)

        mock_get.assert_called_once()
        url = mock_get.call_args[0][0]
        assert "amount=5&category=9&difficulty=hard&type=0" in url
        assert mock_get.call_args.kwargs["timeout"] == 5

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_boolean_questions(self, mock_get, fetcher, quiz_config):
        payload = {
            "response_code": 0,
            "results": [
                {
                    "type": "boolean",
                    "difficulty": "easy",
                    "category": "Animals",
                    "question": "Cats are mammals.",
                    "correct_answer": "True",
                    "incorrect_answers": ["False"],
                }
            ],
        }
        mock_get.return_value = _response(payload)

        questions = fetcher.fetch(quiz_config, Difficulty.EASY)

        assert sorted(questions[0].options) == ["False", "True"]

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_duplicated_correct_answer_still_served(
        self, mock_get, fetcher, quiz_config, api_payload
    ):
        item = api_payload["results"][0]
        item["incorrect_answers"].append(item["correct_answer"])
        mock_get.return_value = _response(api_payload)

        questions = fetcher.fetch(quiz_config, Difficulty.HARD)

        assert len(questions) == 5
        assert len(questions[0].options) == 5
        assert questions[0].options.count(item["correct_answer"]) == 2

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_insufficient_questions(self, mock_get, fetcher, quiz_config, insufficient_payload):
        mock_get.return_value = _response(insufficient_payload)

        with pytest.raises(InsufficientQuestionsError) as exc_info:
            fetcher.fetch(quiz_config, Difficulty.HARD)
        assert "No. of Questions" in str(exc_info.value)

    @pytest.mark.parametrize("code", [2, 3, 4, 5, 99])
    @patch("src.utils.trivia_fetcher.requests.get")
    def test_other_response_codes(self, mock_get, code, fetcher, quiz_config):
        mock_get.return_value = _response({"response_code": code, "results": []})

        with pytest.raises(UnexpectedResponseError) as exc_info:
            fetcher.fetch(quiz_config, Difficulty.HARD)
        assert exc_info.value.response_code == code

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_malformed_payload(self, mock_get, fetcher, quiz_config):
        mock_get.return_value = _response({"results": "nope"})

        with pytest.raises(UnexpectedResponseError, match="Malformed"):
            fetcher.fetch(quiz_config, Difficulty.HARD)

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_invalid_json(self, mock_get, fetcher, quiz_config):
        mock_get.return_value = _response(json_error=ValueError("Expecting value"))

        with pytest.raises(UnexpectedResponseError, match="not valid JSON"):
            fetcher.fetch(quiz_config, Difficulty.HARD)

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_network_error_online(self, mock_get, fetcher, quiz_config):
        mock_get.side_effect = requests.ConnectionError("connection reset")

        with pytest.raises(QuestionFetchNetworkError) as exc_info:
            fetcher.fetch(quiz_config, Difficulty.HARD)
        assert exc_info.value.offline is False
        assert "connection reset" in str(exc_info.value)

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_network_error_offline(self, mock_get, quiz_config):
        mock_get.side_effect = requests.ConnectionError("no route to host")
        fetcher = QuestionFetcher(min_loading_seconds=0, online_check=lambda: False)

        with pytest.raises(QuestionFetchNetworkError) as exc_info:
            fetcher.fetch(quiz_config, Difficulty.HARD)
        assert exc_info.value.offline is True

    @patch("src.utils.trivia_fetcher.requests.get")
    def test_http_error_status(self, mock_get, fetcher, quiz_config):
        mock_get.return_value = _response(
            status_error=requests.HTTPError("503 Server Error")
        )

        with pytest.raises(QuestionFetchNetworkError, match="503"):
            fetcher.fetch(quiz_config, Difficulty.HARD)

    def test_incomplete_config(self, fetcher):
        with pytest.raises(ValueError, match="incomplete"):
            fetcher.fetch(QuizConfig(category="9", question_count=5), Difficulty.HARD)

    def test_negative_count(self, fetcher):
        with pytest.raises(ValueError, match="positive"):
            fetcher.fetch(QuizConfig("9", -5, "0"), Difficulty.HARD)


class TestMinLoadingTime:
    @patch("src.utils.trivia_fetcher.time.sleep")
    @patch("src.utils.trivia_fetcher.requests.get")
    def test_waits_out_remaining_time(self, mock_get, mock_sleep, quiz_config, api_payload):
        mock_get.return_value = _response(api_payload)
        fetcher = QuestionFetcher(min_loading_seconds=1.0, online_check=lambda: True)

        fetcher.fetch(quiz_config, Difficulty.HARD)

        mock_sleep.assert_called_once()
        assert 0 < mock_sleep.call_args[0][0] <= 1.0

    @patch("src.utils.trivia_fetcher.time.sleep")
    @patch("src.utils.trivia_fetcher.requests.get")
    def test_applies_to_failures(self, mock_get, mock_sleep, quiz_config, insufficient_payload):
        mock_get.return_value = _response(insufficient_payload)
        fetcher = QuestionFetcher(min_loading_seconds=1.0, online_check=lambda: True)

        with pytest.raises(InsufficientQuestionsError):
            fetcher.fetch(quiz_config, Difficulty.HARD)
        mock_sleep.assert_called_once()

    @patch("src.utils.trivia_fetcher.time.sleep")
    @patch("src.utils.trivia_fetcher.requests.get")
    def test_disabled(self, mock_get, mock_sleep, fetcher, quiz_config, api_payload):
        mock_get.return_value = _response(api_payload)

        fetcher.fetch(quiz_config, Difficulty.HARD)

        mock_sleep.assert_not_called()
