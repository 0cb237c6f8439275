"""Exception types raised by the Insider Risk Index scoring core.

Two families exist:

    AssessmentValidationError: the submitted answer set cannot be scored.
        IncompleteAssessmentError is the expected, user-recoverable case
        (questions left unanswered or answered twice). UnknownQuestionError
        and InvalidAnswerValueError indicate a client/catalog mismatch.

    CatalogError: the static question catalog or pillar registry violates
        one of its invariants. Raised once at import time, never per call.

Benchmark misses and unrecognised industry/size values are not errors.
"""


class AssessmentValidationError(ValueError):
    """Base class for answer-set validation failures.

    Attributes:
        code: Stable machine-readable error code for API responses.
        message: Human-readable description of the failure.
        question_ids: Question identifiers implicated in the failure.
        is_user_recoverable: True when the respondent can fix the problem
            by completing the questionnaire, False for data/version skew.
    """

    code: str = "invalid_assessment"
    is_user_recoverable: bool = False

    def __init__(self, message: str, question_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.question_ids: list[str] = list(question_ids or [])

    def to_dict(self) -> dict[str, object]:
        """Serialise the error for structured API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "question_ids": self.question_ids,
            "recoverable": self.is_user_recoverable,
        }


class IncompleteAssessmentError(AssessmentValidationError):
    """Raised when the answers do not cover every catalog question exactly once."""

    code = "incomplete_assessment"
    is_user_recoverable = True

    def __init__(
        self,
        missing_question_ids: list[str] | None = None,
        duplicate_question_ids: list[str] | None = None,
    ) -> None:
        self.missing_question_ids: list[str] = list(missing_question_ids or [])
        self.duplicate_question_ids: list[str] = list(duplicate_question_ids or [])

        parts: list[str] = []
        if self.duplicate_question_ids:
            parts.append(
                f"duplicate answers for {', '.join(self.duplicate_question_ids)}"
            )
        if self.missing_question_ids:
            parts.append(
                f"{len(self.missing_question_ids)} unanswered question(s): "
                f"{', '.join(self.missing_question_ids)}"
            )
        message = "Incomplete assessment: " + "; ".join(parts or ["no answers supplied"])
        super().__init__(
            message,
            self.duplicate_question_ids + self.missing_question_ids,
        )

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["missing_question_ids"] = self.missing_question_ids
        payload["duplicate_question_ids"] = self.duplicate_question_ids
        return payload


class UnknownQuestionError(AssessmentValidationError):
    """Raised when an answer references a question id absent from the catalog."""

    code = "unknown_question"

    def __init__(self, question_ids: list[str]) -> None:
        super().__init__(
            f"Answers reference unknown question id(s): {', '.join(question_ids)}",
            question_ids,
        )


class InvalidAnswerValueError(AssessmentValidationError):
    """Raised when an answer value is not one of the question's option values."""

    code = "invalid_answer_value"

    def __init__(self, invalid_values: dict[str, float]) -> None:
        self.invalid_values = dict(invalid_values)
        detail = ", ".join(
            f"{question_id}={value!r}" for question_id, value in self.invalid_values.items()
        )
        super().__init__(
            f"Answer values are not valid options: {detail}",
            list(self.invalid_values),
        )


class CatalogError(RuntimeError):
    """Raised when the question catalog or pillar registry is misconfigured."""
