"""Pydantic request/response schemas for the Insider Risk Index API.

All API inputs and outputs are strictly typed Pydantic v2 models.
No raw dicts are returned from any endpoint.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator


# ---------------------------------------------------------------------------
# Questionnaire
# ---------------------------------------------------------------------------


class PillarSchema(BaseModel):
    """A scoring pillar as shown to respondents."""

    pillar_id: str
    name: str
    description: str
    weight: float
    color: str
    order: int


class AnswerOptionSchema(BaseModel):
    """A discrete answer choice and its points."""

    value: float
    label: str


class QuestionSchema(BaseModel):
    """A single assessment question returned to the client.

    Attributes:
        question_id: Unique question identifier.
        pillar_id: Pillar this question belongs to.
        text: Full question text.
        weight: Scoring weight within the pillar.
        options: Allowed answers, lowest maturity first.
    """

    question_id: str
    pillar_id: str
    text: str
    weight: float
    options: list[AnswerOptionSchema]


class QuestionnaireResponse(BaseModel):
    """Complete questionnaire in display order."""

    pillars: list[PillarSchema]
    questions: list[QuestionSchema]
    total_questions: int


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------


class AnswerSchema(BaseModel):
    """A respondent's answer to one question.

    Attributes:
        question_id: Identifier of the question being answered.
        value: Points of the chosen option, 0-100.
        rationale: Optional free-text note. Stored, never scored.
    """

    question_id: str = Field(..., min_length=1, max_length=50)
    value: float = Field(..., ge=0, le=100)
    rationale: str | None = Field(default=None, max_length=2000)


class SubmitAssessmentRequest(BaseModel):
    """Request body to score and store an answer set.

    Attributes:
        answers: One answer per catalog question.
        industry: Free-text industry, e.g. 'financial-services' or 'Healthcare'.
        company_size: Free-text size bracket, e.g. '251-1000'.
        email_opt_in: Whether to send the report by email.
        contact_email: Required when email_opt_in is set.
    """

    answers: list[AnswerSchema]
    industry: str | None = Field(default=None, max_length=100)
    company_size: str | None = Field(default=None, max_length=50)
    email_opt_in: bool = False
    contact_email: EmailStr | None = None

    @model_validator(mode="after")
    def require_email_when_opted_in(self) -> "SubmitAssessmentRequest":
        """Ensure a contact email accompanies an email opt-in.

        Raises:
            ValueError: If email_opt_in is set without contact_email.
        """
        if self.email_opt_in and self.contact_email is None:
            raise ValueError("contact_email is required when email_opt_in is true")
        return self


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ScoreBreakdownSchema(BaseModel):
    """Score and contribution of one pillar."""

    pillar_id: str
    pillar_name: str
    score: float
    max_score: float
    weight: float
    contribution_to_total: float


class BenchmarkSchema(BaseModel):
    """Cohort average IRI values."""

    industry: float
    company_size: float
    overall: float


class PercentileSchema(BaseModel):
    """Approximate percentile position; cohort fields are null when unresolved."""

    overall: int
    industry: int | None = None
    company_size: int | None = None


class AssessmentResultResponse(BaseModel):
    """Full result of a scored assessment.

    Attributes:
        assessment_id: Stored assessment UUID.
        created_at: When the assessment was submitted.
        total_score: Overall Insider Risk Index, 0-100.
        level: Maturity level 1-5.
        level_name: Display name of the level.
        level_description: Interpretation of the level.
        pillar_breakdown: Per-pillar scores in catalog order.
        recommendations: Priority-ordered guidance.
        strengths: Names of high-scoring pillars.
        weaknesses: Names of low-scoring pillars.
        benchmark: Cohort averages for comparison.
        percentile: Estimated percentile position.
        industry: Canonical industry slug, or null.
        company_size: Canonical size slug, or null.
        summary: Plain-text narrative summary.
    """

    assessment_id: uuid.UUID
    created_at: datetime
    total_score: float
    level: int
    level_name: str
    level_description: str
    pillar_breakdown: list[ScoreBreakdownSchema]
    recommendations: list[str]
    strengths: list[str]
    weaknesses: list[str]
    benchmark: BenchmarkSchema
    percentile: PercentileSchema
    industry: str | None = None
    company_size: str | None = None
    summary: str


# ---------------------------------------------------------------------------
# Benchmarks
# ---------------------------------------------------------------------------


class BenchmarkLookupResponse(BaseModel):
    """Cohort averages for an industry/size pair.

    ``industry`` and ``company_size`` are canonical slugs, null when the
    query value was absent or not recognised.
    """

    industry: str | None = None
    industry_label: str | None = None
    company_size: str | None = None
    company_size_label: str | None = None
    benchmark: BenchmarkSchema
    pillar_benchmarks: dict[str, float]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ValidationErrorResponse(BaseModel):
    """Body returned when an answer set cannot be scored."""

    error: str
    message: str
    question_ids: list[str]
    recoverable: bool
    missing_question_ids: list[str] | None = None
    duplicate_question_ids: list[str] | None = None
