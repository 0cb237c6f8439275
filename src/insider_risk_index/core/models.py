"""SQLAlchemy ORM models for stored Insider Risk Index assessments.

Assessments are anonymous. The organisation's industry and size are kept
as canonical slugs plus a short one-way hash of the pair, used to group
submissions by cohort without storing anything that identifies the
respondent. A contact email is stored only when the respondent opted in.

Tables:
    iri_assessments   - one row per submitted answer set
    iri_pillar_scores - per-pillar breakdown rows for each assessment
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_JSON = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for Insider Risk Index ORM models."""


class AssessmentRecord(Base):
    """A submitted, scored assessment.

    ``iri``, ``level`` and ``pillar_scores`` are the scores at submission
    time and are what reads return. ``answers`` keeps the raw answer set
    and rationales for auditing.

    Table: iri_assessments
    """

    __tablename__ = "iri_assessments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When the assessment was submitted",
    )
    industry: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="Canonical industry slug, NULL when not recognised",
    )
    company_size: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        index=True,
        comment="Canonical company size slug, NULL when not recognised",
    )
    org_meta_hash: Mapped[str | None] = mapped_column(
        String(16),
        nullable=True,
        index=True,
        comment="sha256 prefix of INDUSTRY_SIZE for cohort grouping",
    )
    answers: Mapped[list] = mapped_column(
        _JSON,
        nullable=False,
        comment="Submitted answers: [{question_id, value, rationale}]",
    )
    pillar_scores: Mapped[dict] = mapped_column(
        _JSON,
        nullable=False,
        comment="Pillar scores 0-100 keyed by pillar id",
    )
    iri: Mapped[float] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        comment="Overall Insider Risk Index 0-100",
    )
    level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Maturity level 1-5",
    )
    email_opt_in: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the respondent asked to receive the report by email",
    )
    contact_email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Contact email, stored only with email_opt_in",
    )


class PillarScoreRecord(Base):
    """One pillar's score within a stored assessment.

    Denormalised from ``iri_assessments.pillar_scores`` for reporting queries.

    Table: iri_pillar_scores
    """

    __tablename__ = "iri_pillar_scores"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key UUID",
    )
    assessment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("iri_assessments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning assessment",
    )
    pillar_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Pillar identifier, e.g. visibility",
    )
    score: Mapped[float] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        comment="Normalised pillar score 0-100",
    )
    weight: Mapped[float] = mapped_column(
        Numeric(4, 3),
        nullable=False,
        comment="Pillar weight at scoring time",
    )
    contribution_to_total: Mapped[float] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        comment="score * weight, rounded",
    )
