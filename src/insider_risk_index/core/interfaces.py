"""Protocol interfaces for the Insider Risk Index service.

The core layer depends on these Protocols only. Concrete SQLAlchemy and
in-memory implementations live in the adapters layer and are injected by
the API dependency factories.
"""

import uuid
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from insider_risk_index.core.scoring import Answer, ScoreBreakdown


@runtime_checkable
class IAssessmentRepository(Protocol):
    """Repository interface for stored assessments.

    Consumed by AssessmentService to persist scored answer sets and load
    their stored snapshots back.
    """

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
    ) -> Any:
        """Persist a scored assessment together with its pillar rows.

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
            The persisted assessment record (exposes ``id`` and ``created_at``).
        """
        ...

    async def get_assessment(self, assessment_id: uuid.UUID) -> Any | None:
        """Retrieve a stored assessment.

        Args:
            assessment_id: Assessment record UUID.

        Returns:
            The assessment record, or None if it does not exist.
        """
        ...


@runtime_checkable
class RateLimiter(Protocol):
    """Admission check for rate-limited endpoints."""

    def allow(self, key: str) -> bool:
        """Consume one unit of quota for ``key``.

        Args:
            key: Rate limit key, typically a client IP plus endpoint name.

        Returns:
            True if the request may proceed.
        """
        ...
