"""
Configuration management for TriviaLaunch.

This module centralizes all configuration settings following 12-factor app principles:
- Secrets loaded from environment variables
- Sensible defaults for development
- Type hints for IDE support
- Single source of truth for all settings
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class ModelConfig:
    """LLM settings for the rating (scoring) service."""

    api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    model_name: str = field(
        default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    )
    base_url: Optional[str] = field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL")
    )

    # Low temperature keeps ratings stable across reloads
    rating_temperature: float = 0.2
    max_tokens: int = 300
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "60.0"))
    )


@dataclass
class TriviaConfig:
    """Question-bank API and connectivity settings."""

    api_url: str = field(
        default_factory=lambda: os.getenv("TRIVIA_API_URL", "https://opentdb.com/api.php")
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("TRIVIA_TIMEOUT", "10.0"))
    )
    # Outcomes are delivered no sooner than this after the request starts (0 = off)
    min_loading_seconds: float = field(
        default_factory=lambda: float(os.getenv("TRIVIA_MIN_LOADING_SECONDS", "0.0"))
    )
    user_agent: str = "TriviaLaunch/1.0 (Trivia Quiz Launcher)"

    # Offline detection probe
    connectivity_host: str = field(
        default_factory=lambda: os.getenv("CONNECTIVITY_HOST", "1.1.1.1")
    )
    connectivity_port: int = field(
        default_factory=lambda: int(os.getenv("CONNECTIVITY_PORT", "53"))
    )
    connectivity_timeout: float = 2.0


@dataclass
class QuizDefaults:
    """Initial quiz selections and rating → difficulty bands."""

    category: str = "0"
    question_count: int = 5
    question_type: str = "0"

    # Ratings at or above a threshold fall into that band
    hard_threshold: int = 8
    medium_threshold: int = 5

    # Time limits in minutes per band
    hard_minutes: int = 5
    medium_minutes: int = 10
    easy_minutes: int = 20


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)

    schemas_dir: Path = field(init=False)
    student_profile_schema: Path = field(init=False)
    trivia_response_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.schemas_dir = self.project_root / "schemas"
        self.student_profile_schema = self.schemas_dir / "student_profile.schema.json"
        self.trivia_response_schema = self.schemas_dir / "trivia_response.schema.json"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        url = config.trivia.api_url
        threshold = config.quiz.hard_threshold
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.model = ModelConfig()
            cls._instance.trivia = TriviaConfig()
            cls._instance.quiz = QuizDefaults()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.model.api_key:
            errors.append("OPENAI_API_KEY not set in environment")

        if not (0 <= self.model.rating_temperature <= 2):
            errors.append(
                f"rating_temperature must be in [0, 2], got {self.model.rating_temperature}"
            )

        if self.model.request_timeout <= 0:
            errors.append(f"request_timeout must be > 0, got {self.model.request_timeout}")

        if not self.trivia.api_url.startswith(("http://", "https://")):
            errors.append(f"TRIVIA_API_URL must be an http(s) URL, got {self.trivia.api_url!r}")

        if self.trivia.timeout <= 0:
            errors.append(f"TRIVIA_TIMEOUT must be > 0, got {self.trivia.timeout}")

        if self.trivia.min_loading_seconds < 0:
            errors.append(
                f"TRIVIA_MIN_LOADING_SECONDS must be >= 0, got {self.trivia.min_loading_seconds}"
            )

        if self.quiz.medium_threshold >= self.quiz.hard_threshold:
            errors.append(
                f"medium_threshold ({self.quiz.medium_threshold}) must be < "
                f"hard_threshold ({self.quiz.hard_threshold})"
            )

        if self.quiz.question_count <= 0:
            errors.append(f"question_count must be > 0, got {self.quiz.question_count}")

        for schema in (self.paths.student_profile_schema, self.paths.trivia_response_schema):
            if not schema.exists():
                errors.append(f"Schema not found: {schema}")

        if logging.getLevelName(self.logging.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL
        ):
            errors.append(f"LOG_LEVEL not recognised: {self.logging.log_level}")

        return errors


# Global config instance
config = Config()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging once from LoggingConfig.

    Call this from your app entrypoint; library modules only create loggers.
    """
    logging.basicConfig(
        level=(level or config.logging.log_level).upper(),
        format=config.logging.log_format,
    )
