"""Service layer orchestrating Insider Risk Index assessments.

Implements the assessment flow:
    1. get_questionnaire()  - pillars and questions for display
    2. submit_assessment()  - scores an answer set and stores it
    3. get_assessment()     - loads a stored result from its score snapshot
    4. get_benchmarks()     - cohort averages for an industry/size pair

All database access goes through the repository Protocol. No SQLAlchemy or
FastAPI imports belong here.
"""

import hashlib
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from insider_risk_index.core.benchmarks import (
    Benchmark,
    CompanySize,
    Industry,
    company_size_slug,
    industry_slug,
    normalize_company_size,
    normalize_industry,
    resolve_benchmark,
    resolve_pillar_benchmarks,
)
from insider_risk_index.core.interfaces import IAssessmentRepository
from insider_risk_index.core.pillars import Pillar
from insider_risk_index.core.questions import AssessmentQuestion
from insider_risk_index.core.scoring import (
    Answer,
    AssessmentResult,
    InsiderRiskScorer,
    ScoreBreakdown,
)
from insider_risk_index.observability import get_logger

logger = get_logger(__name__)


class AssessmentNotFoundError(Exception):
    """Raised when no stored assessment exists for the requested id."""


@dataclass(frozen=True)
class Questionnaire:
    """Pillars and questions in display order."""

    pillars: Sequence[Pillar]
    questions: Sequence[AssessmentQuestion]


@dataclass(frozen=True)
class StoredAssessment:
    """A stored assessment rebuilt from its persisted score snapshot."""

    assessment_id: uuid.UUID
    created_at: datetime
    result: AssessmentResult


@dataclass(frozen=True)
class BenchmarkLookup:
    """Cohort averages for one industry/size pair.

    ``industry`` and ``company_size`` are the canonical keys, or None when
    the input was absent or not recognised.
    """

    industry: Industry | None
    company_size: CompanySize | None
    benchmark: Benchmark
    pillar_benchmarks: dict[str, float]


def compute_org_meta_hash(
    industry: Industry | None,
    company_size: CompanySize | None,
) -> str | None:
    """Return a 16-hex-char cohort hash, or None unless both keys are known.

    Args:
        industry: Canonical industry.
        company_size: Canonical size bracket.

    Returns:
        First 16 hex characters of sha256("{INDUSTRY}_{SIZE}") or None.
    """
    if industry is None or company_size is None:
        return None
    digest = hashlib.sha256(f"{industry.value}_{company_size.value}".encode())
    return digest.hexdigest()[:16]


class AssessmentService:
    """Orchestrates scoring and storage of assessments.

    Depends on a repository injected at construction time. Contains no
    framework-specific code.
    """

    def __init__(
        self,
        repository: IAssessmentRepository,
        scorer: InsiderRiskScorer | None = None,
        persist_results: bool = True,
    ) -> None:
        """Initialise the service.

        Args:
            repository: Any object satisfying IAssessmentRepository.
            scorer: Scoring engine. Defaults to one bound to the default catalog.
            persist_results: When False, submissions are scored but not stored
                and receive a transient id.
        """
        self._repository = repository
        self._scorer = scorer or InsiderRiskScorer()
        self._persist_results = persist_results

    def get_questionnaire(self) -> Questionnaire:
        """Return the catalog's pillars and questions in display order."""
        catalog = self._scorer.catalog
        return Questionnaire(pillars=catalog.pillars, questions=catalog.questions)

    async def submit_assessment(
        self,
        answers: Sequence[Answer],
        industry: str | None = None,
        company_size: str | None = None,
        email_opt_in: bool = False,
        contact_email: str | None = None,
    ) -> tuple[uuid.UUID, datetime, AssessmentResult]:
        """Score an answer set and store it.

        Validation errors from the engine propagate unchanged and nothing is
        stored for a rejected answer set.

        Args:
            answers: One answer per catalog question.
            industry: Free-text or canonical industry.
            company_size: Free-text or canonical size bracket.
            email_opt_in: Whether the respondent wants the report by email.
            contact_email: Contact email. Discarded unless email_opt_in is set.

        Returns:
            Tuple of (assessment id, created_at, result).

        Raises:
            AssessmentValidationError: If the answer set is not scoreable.
        """
        result = self._scorer.score_assessment(
            answers, industry=industry, company_size=company_size
        )
        org_meta_hash = compute_org_meta_hash(result.industry, result.company_size)

        if not self._persist_results:
            assessment_id = uuid.uuid4()
            created_at = datetime.now(tz=timezone.utc)
            logger.info(
                "Assessment scored without persistence",
                assessment_id=str(assessment_id),
                total_score=result.total_score,
                level=result.level,
            )
            return assessment_id, created_at, result

        record = await self._repository.create_assessment(
            answers=answers,
            pillar_breakdown=result.pillar_breakdown,
            iri=result.total_score,
            level=result.level,
            industry=industry_slug(result.industry) if result.industry else None,
            company_size=company_size_slug(result.company_size) if result.company_size else None,
            org_meta_hash=org_meta_hash,
            email_opt_in=email_opt_in,
            contact_email=contact_email if email_opt_in else None,
        )

        logger.info(
            "Assessment submitted",
            assessment_id=str(record.id),
            total_score=result.total_score,
            level=result.level,
            org_meta_hash=org_meta_hash,
            email_opt_in=email_opt_in,
        )
        return record.id, record.created_at, result

    async def get_assessment(self, assessment_id: uuid.UUID) -> StoredAssessment:
        """Load a stored assessment as it was scored at submission.

        The stored index, level and pillar scores are authoritative. Stored
        answers are not re-validated, so records written against an older
        catalog stay readable. Guidance, strengths, weaknesses and
        benchmarks are derived again from the stored pillar scores.

        Args:
            assessment_id: Assessment record UUID.

        Returns:
            StoredAssessment with the rebuilt result.

        Raises:
            AssessmentNotFoundError: If no assessment exists with this id.
        """
        record = await self._repository.get_assessment(assessment_id)
        if record is None:
            raise AssessmentNotFoundError(f"Assessment {assessment_id} not found.")

        stored_scores: dict = record.pillar_scores or {}
        pillar_breakdown = []
        for pillar in self._scorer.catalog.pillars:
            score = float(stored_scores.get(pillar.pillar_id, 0.0))
            pillar_breakdown.append(
                ScoreBreakdown(
                    pillar_id=pillar.pillar_id,
                    pillar_name=pillar.name,
                    score=score,
                    weight=pillar.weight,
                    contribution_to_total=round(score * pillar.weight, 2),
                )
            )

        result = self._scorer.assemble_result(
            pillar_breakdown,
            round(float(record.iri), 2),
            industry=record.industry,
            company_size=record.company_size,
            rationales={
                stored["question_id"]: stored["rationale"]
                for stored in record.answers or []
                if stored.get("rationale")
            },
            level=record.level,
        )

        logger.debug(
            "Stored assessment loaded",
            assessment_id=str(assessment_id),
            total_score=result.total_score,
            level=result.level,
        )
        return StoredAssessment(
            assessment_id=record.id,
            created_at=record.created_at,
            result=result,
        )

    def get_benchmarks(
        self,
        industry: str | None = None,
        company_size: str | None = None,
    ) -> BenchmarkLookup:
        """Resolve cohort averages for an industry/size pair.

        Never raises; unrecognised inputs fall back to global averages.
        """
        canonical_industry = normalize_industry(industry)
        canonical_size = normalize_company_size(company_size)
        return BenchmarkLookup(
            industry=canonical_industry,
            company_size=canonical_size,
            benchmark=resolve_benchmark(canonical_industry, canonical_size),
            pillar_benchmarks=resolve_pillar_benchmarks(canonical_industry, canonical_size),
        )
