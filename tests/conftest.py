"""Test fixtures for insider-risk-index.

Provides answer-set builders, a fine-grained catalog for continuous-value
properties, a mock repository, and an async HTTP client with the
assessment service dependency overridden.
"""

import dataclasses
import uuid
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from insider_risk_index.api.routes.assessment import get_assessment_service
from insider_risk_index.core.pillars import PILLARS
from insider_risk_index.core.questions import (
    DEFAULT_CATALOG,
    QUESTION_BANK,
    AnswerOption,
    AssessmentCatalog,
)
from insider_risk_index.core.scoring import Answer, InsiderRiskScorer
from insider_risk_index.core.services.assessment_service import AssessmentService
from insider_risk_index.main import create_app
from insider_risk_index.settings import Settings

AnswerFactory = Callable[..., list[Answer]]


# ---------------------------------------------------------------------------
# Answer sets
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_answers() -> AnswerFactory:
    """Factory building one answer per catalog question.

    Usage: ``make_answers(50)`` for a uniform set, or
    ``make_answers(0, {"visibility": 100})`` to override whole pillars.
    """

    def _make(
        default: float = 50.0,
        per_pillar: dict[str, float] | None = None,
        catalog: AssessmentCatalog = DEFAULT_CATALOG,
    ) -> list[Answer]:
        overrides = per_pillar or {}
        return [
            Answer(question_id=q.question_id, value=overrides.get(q.pillar_id, default))
            for q in catalog.questions
        ]

    return _make


@pytest.fixture()
def fine_grained_catalog() -> AssessmentCatalog:
    """The default questions and weights with options every 5 points."""
    options = tuple(AnswerOption(value=float(v), label=f"{v} points") for v in range(0, 101, 5))
    return AssessmentCatalog(
        PILLARS,
        [dataclasses.replace(question, options=options) for question in QUESTION_BANK],
    )


# ---------------------------------------------------------------------------
# Service and repository
# ---------------------------------------------------------------------------


def _stored_record(answers: list[Answer], **overrides: object) -> MagicMock:
    """Build a stored record whose snapshot matches ``answers``.

    Pass ``pillar_scores``, ``iri`` and ``level`` explicitly for answer sets
    the current catalog no longer accepts.
    """
    record = MagicMock()
    record.id = uuid.uuid4()
    record.created_at = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)
    record.industry = None
    record.company_size = None
    if "pillar_scores" not in overrides:
        result = InsiderRiskScorer().score_assessment(answers)
        record.pillar_scores = {b.pillar_id: b.score for b in result.pillar_breakdown}
        record.iri = result.total_score
        record.level = result.level
    record.answers = [
        {"question_id": a.question_id, "value": a.value, "rationale": a.rationale}
        for a in answers
    ]
    for name, value in overrides.items():
        setattr(record, name, value)
    return record


@pytest.fixture()
def make_record() -> Callable[..., MagicMock]:
    """Factory for mock AssessmentRecord ORM-like objects."""
    return _stored_record


@pytest.fixture()
def mock_repository() -> AsyncMock:
    """Mock AssessmentRepository echoing created records back."""
    repository = AsyncMock()

    async def _create_assessment(**kwargs: object) -> MagicMock:
        return _stored_record(list(kwargs["answers"]))  # type: ignore[arg-type]

    repository.create_assessment.side_effect = _create_assessment
    repository.get_assessment.return_value = None
    return repository


@pytest.fixture()
def assessment_service(mock_repository: AsyncMock) -> AssessmentService:
    return AssessmentService(repository=mock_repository)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        log_json=False,
        rate_limit_submit_per_minute=1000,
        rate_limit_read_per_minute=1000,
    )


@pytest.fixture()
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest_asyncio.fixture()
async def client(
    app: FastAPI,
    assessment_service: AssessmentService,
) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the assessment service dependency overridden."""
    app.dependency_overrides[get_assessment_service] = lambda: assessment_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
