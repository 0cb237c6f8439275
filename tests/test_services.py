"""Unit tests for the assessment service layer."""

import hashlib
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from insider_risk_index.core.benchmarks import CompanySize, Industry
from insider_risk_index.core.errors import IncompleteAssessmentError, InvalidAnswerValueError
from insider_risk_index.core.pillars import ALL_PILLAR_IDS
from insider_risk_index.core.scoring import Answer
from insider_risk_index.core.services import (
    AssessmentNotFoundError,
    AssessmentService,
    compute_org_meta_hash,
)


class TestOrgMetaHash:
    """Cohort hash derivation."""

    def test_hash_of_both_keys(self) -> None:
        expected = hashlib.sha256(b"HEALTHCARE_SMALL_51_250").hexdigest()[:16]
        assert compute_org_meta_hash(Industry.HEALTHCARE, CompanySize.SMALL_51_250) == expected

    def test_sixteen_hex_chars(self) -> None:
        value = compute_org_meta_hash(Industry.RETAIL, CompanySize.STARTUP_1_50)
        assert value is not None
        assert len(value) == 16
        int(value, 16)

    @pytest.mark.parametrize(
        ("industry", "company_size"),
        [(None, CompanySize.STARTUP_1_50), (Industry.RETAIL, None), (None, None)],
    )
    def test_none_unless_both_known(self, industry, company_size) -> None:
        assert compute_org_meta_hash(industry, company_size) is None


class TestGetQuestionnaire:
    """Questionnaire retrieval."""

    def test_returns_catalog(self, assessment_service: AssessmentService) -> None:
        questionnaire = assessment_service.get_questionnaire()
        assert len(questionnaire.pillars) == 5
        assert len(questionnaire.questions) == 20
        assert questionnaire.questions[0].question_id == "v1"


class TestSubmitAssessment:
    """Tests for AssessmentService.submit_assessment."""

    @pytest.mark.asyncio()
    async def test_scores_and_persists(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        """A complete answer set is scored and stored with canonical cohort keys."""
        record_id, created_at, result = await assessment_service.submit_assessment(
            answers=make_answers(75),
            industry="Financial Services",
            company_size="251-1000",
        )

        assert isinstance(record_id, uuid.UUID)
        assert created_at.tzinfo is not None
        assert result.total_score == pytest.approx(75.0, abs=0.01)

        mock_repository.create_assessment.assert_awaited_once()
        kwargs = mock_repository.create_assessment.call_args.kwargs
        assert kwargs["iri"] == result.total_score
        assert kwargs["level"] == 4
        assert kwargs["industry"] == "financial-services"
        assert kwargs["company_size"] == "251-1000"
        assert kwargs["org_meta_hash"] == compute_org_meta_hash(
            Industry.FINANCIAL_SERVICES, CompanySize.MID_251_1000
        )
        assert len(kwargs["pillar_breakdown"]) == 5

    @pytest.mark.asyncio()
    async def test_unknown_cohort_stored_as_none(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        await assessment_service.submit_assessment(
            answers=make_answers(50), industry="aerospace", company_size=None
        )
        kwargs = mock_repository.create_assessment.call_args.kwargs
        assert kwargs["industry"] is None
        assert kwargs["company_size"] is None
        assert kwargs["org_meta_hash"] is None

    @pytest.mark.asyncio()
    async def test_contact_email_dropped_without_opt_in(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        await assessment_service.submit_assessment(
            answers=make_answers(50),
            email_opt_in=False,
            contact_email="ciso@acmecorp.com",
        )
        kwargs = mock_repository.create_assessment.call_args.kwargs
        assert kwargs["email_opt_in"] is False
        assert kwargs["contact_email"] is None

    @pytest.mark.asyncio()
    async def test_contact_email_kept_with_opt_in(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        await assessment_service.submit_assessment(
            answers=make_answers(50),
            email_opt_in=True,
            contact_email="ciso@acmecorp.com",
        )
        kwargs = mock_repository.create_assessment.call_args.kwargs
        assert kwargs["contact_email"] == "ciso@acmecorp.com"

    @pytest.mark.asyncio()
    async def test_incomplete_not_persisted(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        with pytest.raises(IncompleteAssessmentError):
            await assessment_service.submit_assessment(answers=make_answers(50)[:10])
        mock_repository.create_assessment.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_invalid_value_not_persisted(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        with pytest.raises(InvalidAnswerValueError):
            await assessment_service.submit_assessment(answers=make_answers(33))
        mock_repository.create_assessment.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_persistence_disabled(
        self,
        mock_repository: AsyncMock,
        make_answers,
    ) -> None:
        service = AssessmentService(repository=mock_repository, persist_results=False)
        record_id, _, result = await service.submit_assessment(answers=make_answers(100))
        assert isinstance(record_id, uuid.UUID)
        assert result.level == 5
        mock_repository.create_assessment.assert_not_awaited()


class TestGetAssessment:
    """Tests for AssessmentService.get_assessment."""

    @pytest.mark.asyncio()
    async def test_returns_stored_snapshot(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
        make_record,
    ) -> None:
        record = make_record(
            make_answers(25, {"visibility": 100}),
            industry="technology",
            company_size="5000+",
        )
        mock_repository.get_assessment.return_value = record

        stored = await assessment_service.get_assessment(record.id)

        mock_repository.get_assessment.assert_awaited_once_with(record.id)
        assert stored.assessment_id == record.id
        assert stored.created_at == record.created_at
        assert stored.result.total_score == pytest.approx(43.75, abs=0.01)
        assert stored.result.industry is Industry.TECHNOLOGY
        assert stored.result.company_size is CompanySize.ENTERPRISE_5000_PLUS

    @pytest.mark.asyncio()
    async def test_stored_scores_are_authoritative(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
        make_record,
    ) -> None:
        """The persisted index and level are returned even if answers differ."""
        record = make_record(
            make_answers(100),
            pillar_scores=dict.fromkeys(ALL_PILLAR_IDS, 50.0),
            iri=Decimal("50.00"),
            level=3,
        )
        mock_repository.get_assessment.return_value = record

        stored = await assessment_service.get_assessment(record.id)

        assert stored.result.total_score == 50.0
        assert stored.result.level == 3
        assert [b.score for b in stored.result.pillar_breakdown] == [50.0] * 5
        assert stored.result.weaknesses == [
            "Visibility",
            "Prevention & Coaching",
            "Investigation & Evidence",
            "Identity & SaaS/OAuth",
            "Phishing Resilience",
        ]

    @pytest.mark.asyncio()
    async def test_answers_outside_current_catalog_still_load(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
        make_record,
    ) -> None:
        answers = make_answers(75)
        answers[0] = Answer(question_id="legacy-v0", value=75, rationale="Retired question")
        record = make_record(
            answers,
            pillar_scores=dict.fromkeys(ALL_PILLAR_IDS, 75.0),
            iri=75.0,
            level=4,
        )
        mock_repository.get_assessment.return_value = record

        stored = await assessment_service.get_assessment(record.id)

        assert stored.result.total_score == 75.0
        assert stored.result.level == 4
        assert stored.result.rationales == {"legacy-v0": "Retired question"}

    @pytest.mark.asyncio()
    async def test_missing_pillar_in_snapshot_scores_zero(
        self,
        assessment_service: AssessmentService,
        mock_repository: AsyncMock,
        make_answers,
        make_record,
    ) -> None:
        scores = dict.fromkeys(ALL_PILLAR_IDS, 80.0)
        del scores["phishing-resilience"]
        record = make_record(make_answers(75), pillar_scores=scores, iri=68.0, level=4)
        mock_repository.get_assessment.return_value = record

        stored = await assessment_service.get_assessment(record.id)

        assert stored.result.pillar_breakdown[-1].pillar_id == "phishing-resilience"
        assert stored.result.pillar_breakdown[-1].score == 0.0
        assert stored.result.total_score == 68.0

    @pytest.mark.asyncio()
    async def test_not_found(self, assessment_service: AssessmentService) -> None:
        with pytest.raises(AssessmentNotFoundError):
            await assessment_service.get_assessment(uuid.uuid4())


class TestGetBenchmarks:
    """Tests for AssessmentService.get_benchmarks."""

    def test_known_cohorts(self, assessment_service: AssessmentService) -> None:
        lookup = assessment_service.get_benchmarks("government", "1-50")
        assert lookup.industry is Industry.GOVERNMENT
        assert lookup.company_size is CompanySize.STARTUP_1_50
        assert lookup.benchmark.industry == 72.0
        assert lookup.benchmark.company_size == 48.0
        assert lookup.pillar_benchmarks["visibility"] == 75.0

    def test_unknown_cohorts_fall_back(self, assessment_service: AssessmentService) -> None:
        lookup = assessment_service.get_benchmarks("aerospace", "huge")
        assert lookup.industry is None
        assert lookup.company_size is None
        assert lookup.benchmark.industry == lookup.benchmark.overall == 64.2
