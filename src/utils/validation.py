"""
Payload checks for the two documents TriviaLaunch exchanges with services.

The student profile goes out to the rating service; the question-bank body
comes back from Open Trivia DB. Both are checked against the JSON Schemas in
``schemas/`` before anything reads them. A validator may repair a payload
(on a copy) when the fix is unambiguous, and may attach warnings for
oddities that do not stop the payload from being used.
"""

import json
import logging
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Tuple

from jsonschema import Draft7Validator, ValidationError

try:
    from ..config import config
except ImportError:
    from src.config import config

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """What a validator concluded about one payload. Truthy when usable."""

    valid: bool
    errors: List[str]
    data: Any = None
    repairs: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        if not self.valid:
            lines = [f"payload rejected, {len(self.errors)} problem(s):"]
            lines.extend(f"- {error}" for error in self.errors)
            return "\n".join(lines)

        notes = []
        if self.repairs:
            notes.append(f"{len(self.repairs)} repaired")
        if self.warnings:
            notes.append(f"{len(self.warnings)} warning(s)")
        return "payload accepted" + (f" ({', '.join(notes)})" if notes else "")


class SchemaValidator:
    """
    Checks payloads against one Draft 7 schema file.

    Subclasses bind a schema from ``config.paths`` and may override
    ``_attempt_repair`` (runs only when the schema check fails and
    ``auto_repair`` is on) and ``_review`` (runs on payloads that passed).
    """

    def __init__(self, schema_path: Path | str):
        self.schema_path = Path(schema_path)
        self.schema = json.loads(self.schema_path.read_text(encoding="utf-8"))
        Draft7Validator.check_schema(self.schema)
        self.validator = Draft7Validator(self.schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        errors = self._schema_errors(data)
        repairs: List[str] = []

        if errors and auto_repair:
            repaired, repairs = self._attempt_repair(data)
            if repairs:
                logger.debug("Repaired %s payload: %s", self.schema_path.name, repairs)
                data = repaired
                errors = self._schema_errors(data)

        if errors:
            return ValidationResult(valid=False, errors=errors, data=data, repairs=repairs)

        result = ValidationResult(valid=True, errors=[], data=data, repairs=repairs)
        self._review(result)
        return result

    def _schema_errors(self, data: Any) -> List[str]:
        return [self._describe(error) for error in self.validator.iter_errors(data)]

    @staticmethod
    def _describe(error: ValidationError) -> str:
        # e.g. "$.results[0].type: 3 is not of type 'string' (type)"
        return f"{error.json_path}: {error.message} ({error.validator})"

    def _attempt_repair(self, data: Any) -> Tuple[Any, List[str]]:
        return deepcopy(data), []

    def _review(self, result: ValidationResult) -> None:
        pass


class StudentProfileValidator(SchemaValidator):
    """Validator for the profile payload sent to the rating service."""

    def __init__(self):
        super().__init__(config.paths.student_profile_schema)

    def _attempt_repair(self, data: Any) -> Tuple[Any, List[str]]:
        """Strip surrounding whitespace from profile values."""
        repaired = deepcopy(data)
        repairs = []
        if isinstance(repaired, dict):
            for key, value in repaired.items():
                if isinstance(value, str) and value != value.strip():
                    repaired[key] = value.strip()
                    repairs.append(f"Stripped whitespace from '{key}'")
        return repaired, repairs


class TriviaResponseValidator(SchemaValidator):
    """
    Validator for question-bank API responses.

    A question whose correct answer also appears among its incorrect answers
    is still accepted; its options keep the duplicate. The oddity is logged
    and recorded in ``result.warnings``.
    """

    def __init__(self):
        super().__init__(config.paths.trivia_response_schema)

    def _review(self, result: ValidationResult) -> None:
        for i, item in enumerate(result.data.get("results", [])):
            if item["correct_answer"] in item["incorrect_answers"]:
                note = f"results[{i}]: correct_answer also listed in incorrect_answers"
                logger.warning("Question bank payload: %s", note)
                result.warnings.append(note)

    def _attempt_repair(self, data: Any) -> Tuple[Any, List[str]]:
        """Coerce a numeric-string response_code (e.g. "0") to int."""
        repaired = deepcopy(data)
        repairs = []
        if isinstance(repaired, dict):
            code = repaired.get("response_code")
            if isinstance(code, str) and code.strip().isdigit():
                repaired["response_code"] = int(code)
                repairs.append(f"Coerced response_code: '{code}' → {int(code)}")
        return repaired, repairs


def validate_student_profile(data: dict, auto_repair: bool = False) -> ValidationResult:
    """Check a student profile mapping against its schema."""
    return StudentProfileValidator().validate(data, auto_repair=auto_repair)


def validate_trivia_response(data: dict, auto_repair: bool = True) -> ValidationResult:
    """
    Check a decoded question-bank body.

    Example:
        result = validate_trivia_response(response.json())
        if not result:
            print("Errors:", result.errors)
    """
    return TriviaResponseValidator().validate(data, auto_repair=auto_repair)
