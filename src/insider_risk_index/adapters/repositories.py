"""SQLAlchemy repository for stored Insider Risk Index assessments.

All database operations are async and use parameterised queries
exclusively.
"""

import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from insider_risk_index.core.models import AssessmentRecord, PillarScoreRecord
from insider_risk_index.core.scoring import Answer, ScoreBreakdown
from insider_risk_index.observability import get_logger

logger = get_logger(__name__)


class AssessmentRepository:
    """Repository for AssessmentRecord and PillarScoreRecord persistence."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialise with an async database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def create_assessment(
        self,
        answers: Sequence[Answer],
        pillar_breakdown: Sequence[ScoreBreakdown],
        iri: float,
        level: int,
        industry: str | None,
        company_size: str | None,
        org_meta_hash: str | None,
        email_opt_in: bool,
        contact_email: str | None,
    ) -> AssessmentRecord:
        """Persist a scored assessment and one row per pillar.

        Args:
            answers: The validated answer set.
            pillar_breakdown: Per-pillar scores from the engine.
            iri: Overall Insider Risk Index.
            level: Maturity level 1-5.
            industry: Canonical industry slug or None.
            company_size: Canonical company size slug or None.
            org_meta_hash: Cohort hash or None.
            email_opt_in: Whether the respondent opted in to email.
            contact_email: Contact email, only when opted in.

        Returns:
            The persisted AssessmentRecord.
        """
        record = AssessmentRecord(
            industry=industry,
            company_size=company_size,
            org_meta_hash=org_meta_hash,
            answers=[
                {
                    "question_id": answer.question_id,
                    "value": answer.value,
                    "rationale": answer.rationale,
                }
                for answer in answers
            ],
            pillar_scores={b.pillar_id: b.score for b in pillar_breakdown},
            iri=iri,
            level=level,
            email_opt_in=email_opt_in,
            contact_email=contact_email,
        )
        self._session.add(record)
        await self._session.flush()

        self._session.add_all(
            PillarScoreRecord(
                assessment_id=record.id,
                pillar_id=breakdown.pillar_id,
                score=breakdown.score,
                weight=breakdown.weight,
                contribution_to_total=breakdown.contribution_to_total,
            )
            for breakdown in pillar_breakdown
        )
        await self._session.flush()
        await self._session.refresh(record)

        logger.info(
            "Assessment persisted",
            assessment_id=str(record.id),
            iri=iri,
            level=level,
            org_meta_hash=org_meta_hash,
        )
        return record

    async def get_assessment(self, assessment_id: uuid.UUID) -> AssessmentRecord | None:
        """Retrieve a stored assessment by id.

        Args:
            assessment_id: Assessment record UUID.

        Returns:
            AssessmentRecord or None if not found.
        """
        result = await self._session.execute(
            select(AssessmentRecord).where(AssessmentRecord.id == assessment_id)
        )
        return result.scalar_one_or_none()

