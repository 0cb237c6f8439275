"""Pydantic schemas package for the Insider Risk Index API."""

from insider_risk_index.api.schemas.assessment import (
    AnswerOptionSchema,
    AnswerSchema,
    AssessmentResultResponse,
    BenchmarkLookupResponse,
    BenchmarkSchema,
    PercentileSchema,
    PillarSchema,
    QuestionnaireResponse,
    QuestionSchema,
    ScoreBreakdownSchema,
    SubmitAssessmentRequest,
    ValidationErrorResponse,
)

__all__ = [
    "AnswerOptionSchema",
    "AnswerSchema",
    "AssessmentResultResponse",
    "BenchmarkLookupResponse",
    "BenchmarkSchema",
    "PercentileSchema",
    "PillarSchema",
    "QuestionnaireResponse",
    "QuestionSchema",
    "ScoreBreakdownSchema",
    "SubmitAssessmentRequest",
    "ValidationErrorResponse",
]
