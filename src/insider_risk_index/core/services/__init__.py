"""Services package for the Insider Risk Index service."""

from insider_risk_index.core.services.assessment_service import (
    AssessmentNotFoundError,
    AssessmentService,
    BenchmarkLookup,
    Questionnaire,
    StoredAssessment,
    compute_org_meta_hash,
)

__all__ = [
    "AssessmentNotFoundError",
    "AssessmentService",
    "BenchmarkLookup",
    "Questionnaire",
    "StoredAssessment",
    "compute_org_meta_hash",
]
