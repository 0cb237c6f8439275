"""FastAPI routers for the Insider Risk Index assessment.

All routes are thin: they parse inputs, build dependencies, delegate to
AssessmentService, and serialise responses. No business logic lives here.

API prefixes: /api/v1/assessments, /api/v1/benchmarks
Auth: None. Assessments are anonymous.
"""

import uuid
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from insider_risk_index.adapters.database import get_db_session
from insider_risk_index.adapters.repositories import AssessmentRepository
from insider_risk_index.api.schemas.assessment import (
    AnswerOptionSchema,
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
from insider_risk_index.core.benchmarks import (
    COMPANY_SIZE_LABELS,
    INDUSTRY_LABELS,
    Benchmark,
    calculate_percentile,
    company_size_slug,
    industry_slug,
)
from insider_risk_index.core.errors import (
    IncompleteAssessmentError,
    InvalidAnswerValueError,
    UnknownQuestionError,
)
from insider_risk_index.core.interfaces import RateLimiter
from insider_risk_index.core.scoring import Answer, AssessmentResult
from insider_risk_index.core.services.assessment_service import (
    AssessmentNotFoundError,
    AssessmentService,
)
from insider_risk_index.core.summary import generate_summary_report
from insider_risk_index.observability import get_logger
from insider_risk_index.settings import Settings

logger = get_logger(__name__)

router = APIRouter(prefix="/assessments", tags=["Insider Risk Assessment"])
benchmarks_router = APIRouter(prefix="/benchmarks", tags=["Benchmarks"])

SUBMIT_SCOPE = "submit"
READ_SCOPE = "read"


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------


def _make_rate_limit_dependency(scope: str) -> Callable[[Request], None]:
    """Return a FastAPI dependency enforcing the limiter registered for ``scope``.

    Limiters are read from ``app.state.rate_limiters`` so they can be
    replaced per application (e.g. with a shared-store implementation).

    Args:
        scope: Key into ``app.state.rate_limiters``.

    Returns:
        A synchronous dependency callable that raises HTTP 429 when the
        limit for the requesting IP is exceeded.
    """

    def _check_rate_limit(request: Request) -> None:
        limiters: dict[str, RateLimiter] = getattr(request.app.state, "rate_limiters", {})
        limiter = limiters.get(scope)
        if limiter is None:
            return
        client_ip: str = (request.client.host if request.client else "") or "unknown"
        if not limiter.allow(f"{scope}:{client_ip}"):
            logger.warning("Rate limit exceeded", scope=scope, client_ip=client_ip)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Rate limit exceeded. Please slow down and try again.",
            )

    return _check_rate_limit


# ---------------------------------------------------------------------------
# Dependency factory
# ---------------------------------------------------------------------------


def get_assessment_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> AssessmentService:
    """Build AssessmentService with an injected repository.

    Args:
        request: Incoming request; its app carries the service settings.
        session: Async SQLAlchemy session for this request.

    Returns:
        Configured AssessmentService instance.
    """
    settings: Settings = request.app.state.settings
    return AssessmentService(
        repository=AssessmentRepository(session),
        persist_results=settings.persist_results,
    )


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------


def _benchmark_schema(benchmark: Benchmark) -> BenchmarkSchema:
    return BenchmarkSchema(
        industry=benchmark.industry,
        company_size=benchmark.company_size,
        overall=benchmark.overall,
    )


def _result_response(
    assessment_id: uuid.UUID,
    created_at: datetime,
    result: AssessmentResult,
) -> AssessmentResultResponse:
    percentile = calculate_percentile(result.total_score, result.industry, result.company_size)
    return AssessmentResultResponse(
        assessment_id=assessment_id,
        created_at=created_at,
        total_score=result.total_score,
        level=result.level,
        level_name=result.level_name,
        level_description=result.level_description,
        pillar_breakdown=[
            ScoreBreakdownSchema(
                pillar_id=b.pillar_id,
                pillar_name=b.pillar_name,
                score=b.score,
                max_score=b.max_score,
                weight=b.weight,
                contribution_to_total=b.contribution_to_total,
            )
            for b in result.pillar_breakdown
        ],
        recommendations=result.recommendations,
        strengths=result.strengths,
        weaknesses=result.weaknesses,
        benchmark=_benchmark_schema(result.benchmark),
        percentile=PercentileSchema(
            overall=percentile.overall,
            industry=percentile.industry,
            company_size=percentile.company_size,
        ),
        industry=industry_slug(result.industry) if result.industry else None,
        company_size=company_size_slug(result.company_size) if result.company_size else None,
        summary=generate_summary_report(result),
    )


# ---------------------------------------------------------------------------
# Assessment endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/questions",
    response_model=QuestionnaireResponse,
    status_code=status.HTTP_200_OK,
    summary="Retrieve the assessment questionnaire",
    dependencies=[Depends(_make_rate_limit_dependency(READ_SCOPE))],
)
async def get_questionnaire(
    service: AssessmentService = Depends(get_assessment_service),
) -> QuestionnaireResponse:
    """Return all pillars and questions in display order.

    Each question offers five options worth 0, 25, 50, 75 and 100 points.
    """
    questionnaire = service.get_questionnaire()
    return QuestionnaireResponse(
        pillars=[
            PillarSchema(
                pillar_id=pillar.pillar_id,
                name=pillar.name,
                description=pillar.description,
                weight=pillar.weight,
                color=pillar.color,
                order=pillar.order,
            )
            for pillar in questionnaire.pillars
        ],
        questions=[
            QuestionSchema(
                question_id=question.question_id,
                pillar_id=question.pillar_id,
                text=question.text,
                weight=question.weight,
                options=[
                    AnswerOptionSchema(value=option.value, label=option.label)
                    for option in question.options
                ],
            )
            for question in questionnaire.questions
        ],
        total_questions=len(questionnaire.questions),
    )


@router.post(
    "",
    response_model=AssessmentResultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Score and store a completed assessment",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ValidationErrorResponse},
    },
    dependencies=[Depends(_make_rate_limit_dependency(SUBMIT_SCOPE))],
)
async def submit_assessment(
    body: SubmitAssessmentRequest,
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentResultResponse | JSONResponse:
    """Compute the Insider Risk Index for a full answer set.

    Every catalog question must be answered exactly once. Unanswered or
    duplicated questions return 422 with ``error=incomplete_assessment``;
    unknown question ids and values that are not valid options return 400.
    Industry and company size are free text; unrecognised values are
    accepted and scored against global averages.
    """
    answers = [
        Answer(question_id=a.question_id, value=a.value, rationale=a.rationale)
        for a in body.answers
    ]
    try:
        assessment_id, created_at, result = await service.submit_assessment(
            answers=answers,
            industry=body.industry,
            company_size=body.company_size,
            email_opt_in=body.email_opt_in,
            contact_email=str(body.contact_email) if body.contact_email else None,
        )
    except IncompleteAssessmentError as exc:
        logger.info(
            "Incomplete assessment rejected",
            missing=len(exc.missing_question_ids),
            duplicates=len(exc.duplicate_question_ids),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=exc.to_dict(),
        )
    except (UnknownQuestionError, InvalidAnswerValueError) as exc:
        logger.warning("Assessment rejected", error=exc.code, question_ids=exc.question_ids)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=exc.to_dict(),
        )

    return _result_response(assessment_id, created_at, result)


@router.get(
    "/{assessment_id}",
    response_model=AssessmentResultResponse,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a stored assessment result",
    dependencies=[Depends(_make_rate_limit_dependency(READ_SCOPE))],
)
async def get_assessment(
    assessment_id: uuid.UUID = Path(..., description="Assessment UUID"),
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentResultResponse:
    """Return a stored assessment as scored at submission."""
    try:
        stored = await service.get_assessment(assessment_id)
    except AssessmentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return _result_response(stored.assessment_id, stored.created_at, stored.result)


# ---------------------------------------------------------------------------
# Benchmarks
# ---------------------------------------------------------------------------


@benchmarks_router.get(
    "",
    response_model=BenchmarkLookupResponse,
    status_code=status.HTTP_200_OK,
    summary="Retrieve cohort benchmark averages",
    dependencies=[Depends(_make_rate_limit_dependency(READ_SCOPE))],
)
async def get_benchmarks(
    industry: str | None = Query(default=None, max_length=100),
    company_size: str | None = Query(default=None, max_length=50),
    service: AssessmentService = Depends(get_assessment_service),
) -> BenchmarkLookupResponse:
    """Return industry, size and global averages plus per-pillar averages.

    Unrecognised values are not an error; they resolve to the global
    average and are echoed back as null.
    """
    lookup = service.get_benchmarks(industry=industry, company_size=company_size)
    return BenchmarkLookupResponse(
        industry=industry_slug(lookup.industry) if lookup.industry else None,
        industry_label=INDUSTRY_LABELS[lookup.industry] if lookup.industry else None,
        company_size=company_size_slug(lookup.company_size) if lookup.company_size else None,
        company_size_label=(
            COMPANY_SIZE_LABELS[lookup.company_size] if lookup.company_size else None
        ),
        benchmark=_benchmark_schema(lookup.benchmark),
        pillar_benchmarks=lookup.pillar_benchmarks,
    )
