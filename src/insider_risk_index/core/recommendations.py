"""Recommendation, strength and weakness derivation from pillar scores.

Guidance is priority-ordered: pillar-specific actions for the weakest
pillar come first, followed by the next-weakest pillars, then
program-level guidance driven by the overall score, then an
industry-specific note. A pillar needs improvement below 70; the number of
actions it receives grows as its score falls:

    score < 30  -> 3 actions
    score < 50  -> 2 actions
    score < 70  -> 1 action
"""

from collections.abc import Sequence
from typing import Protocol

from insider_risk_index.core.benchmarks import Industry, normalize_industry
from insider_risk_index.core.pillars import PILLARS_BY_ID

NEEDS_IMPROVEMENT_THRESHOLD: float = 70.0
STRENGTH_THRESHOLD: float = 70.0
WEAKNESS_THRESHOLD: float = 60.0

MAX_RECOMMENDATIONS: int = 8
MAX_STRENGTHS: int = 5
MAX_WEAKNESSES: int = 5


class PillarScore(Protocol):
    """Anything carrying a pillar id, a 0-100 score and its contribution."""

    pillar_id: str
    score: float
    contribution_to_total: float


PILLAR_RECOMMENDATIONS: dict[str, list[str]] = {
    "visibility": [
        "Deploy comprehensive monitoring across all endpoints and network segments.",
        "Implement user behavior analytics to detect anomalous activity.",
        "Establish baseline patterns for normal user and system behavior.",
        "Integrate endpoint and application telemetry into your SIEM.",
    ],
    "prevention-coaching": [
        "Introduce enhanced training with real-time coaching during risky activities.",
        "Extend screening and periodic re-vetting to employees with privileged access.",
        "Establish clear, protected channels for reporting suspicious behavior.",
        "Invest in employee well-being programs that reduce motivation for misuse.",
    ],
    "investigation-evidence": [
        "Establish forensic investigation capabilities and documented procedures.",
        "Implement comprehensive audit logging with tamper-evident retention.",
        "Adopt session reconstruction so investigators can replay user activity.",
        "Formalize legal and HR coordination for insider investigations.",
    ],
    "identity-saas": [
        "Enforce multi-factor authentication across all systems.",
        "Deploy privileged access management (PAM) for administrative accounts.",
        "Run regular access reviews and certification campaigns.",
        "Monitor and govern SaaS and OAuth application grants.",
    ],
    "phishing-resilience": [
        "Deploy advanced email security with sandboxing and link inspection.",
        "Run regular phishing simulations paired with targeted training.",
        "Define clear procedures for reporting and responding to phishing attempts.",
        "Adopt real-time detection for credential-harvesting pages.",
    ],
}

INDUSTRY_RECOMMENDATIONS: dict[Industry, str] = {
    Industry.HEALTHCARE: (
        "Align insider risk monitoring with HIPAA access-audit requirements for "
        "patient records."
    ),
    Industry.FINANCIAL_SERVICES: (
        "Map insider risk controls to regulatory expectations for trading, "
        "payments and customer data."
    ),
    Industry.TECHNOLOGY: (
        "Prioritise protection of source code and intellectual property in "
        "developer tooling."
    ),
    Industry.GOVERNMENT: (
        "Align the program with continuous evaluation requirements for cleared "
        "personnel."
    ),
    Industry.MANUFACTURING: (
        "Extend monitoring to OT environments and protect proprietary designs."
    ),
    Industry.RETAIL: (
        "Focus controls on point-of-sale, payment card data and seasonal staff "
        "onboarding."
    ),
    Industry.EDUCATION: (
        "Protect student records and research data across federated identities."
    ),
    Industry.NON_PROFIT: (
        "Prioritise low-cost controls that protect donor data and finances."
    ),
    Industry.ENERGY: (
        "Segment and monitor access to operational technology and grid systems."
    ),
    Industry.TELECOMMUNICATIONS: (
        "Monitor privileged access to subscriber data and network infrastructure."
    ),
    Industry.MEDIA_ENTERTAINMENT: (
        "Protect pre-release content and talent data against leaks."
    ),
}


def _actions_for_score(score: float) -> int:
    if score < 30:
        return 3
    if score < 50:
        return 2
    if score < NEEDS_IMPROVEMENT_THRESHOLD:
        return 1
    return 0


def _program_recommendations(total_score: float) -> list[str]:
    if total_score < 40:
        return [
            "Establish a comprehensive insider risk management program with dedicated "
            "resources and executive sponsorship.",
            "Conduct a thorough risk assessment to identify your most critical "
            "vulnerabilities.",
        ]
    if total_score < 60:
        return [
            "Enhance existing security controls with a focus on the lowest-scoring areas.",
            "Develop incident response procedures specific to insider threats.",
        ]
    if total_score < 80:
        return [
            "Fine-tune your insider risk program to address remaining gaps.",
            "Implement advanced analytics to improve threat detection.",
        ]
    return []


def _sort_weakest_first(breakdowns: Sequence[PillarScore]) -> list[PillarScore]:
    # sorted() is stable, so ties keep catalog order.
    return sorted(breakdowns, key=lambda breakdown: breakdown.score)


def generate_recommendations(
    breakdowns: Sequence[PillarScore],
    industry: "Industry | str | None" = None,
    total_score: float | None = None,
) -> list[str]:
    """Build priority-ordered recommendations from pillar scores.

    Args:
        breakdowns: Per-pillar scores. May be the full breakdown or only the
            weak pillars; pillars at or above the improvement threshold
            contribute no pillar-specific actions.
        industry: Canonical or free-text industry for a tailored note.
        total_score: Overall index driving program-level guidance. Required
            when ``breakdowns`` holds only some pillars; defaults to the sum
            of contributions, which is only correct for the full breakdown.

    Returns:
        At most MAX_RECOMMENDATIONS strings, most severe weakness first.
        Non-empty whenever any pillar scores below 70.
    """
    recommendations: list[str] = []

    needs_improvement = [
        breakdown
        for breakdown in _sort_weakest_first(breakdowns)
        if breakdown.score < NEEDS_IMPROVEMENT_THRESHOLD
    ]
    for breakdown in needs_improvement:
        actions = PILLAR_RECOMMENDATIONS.get(breakdown.pillar_id, [])
        recommendations.extend(actions[: _actions_for_score(breakdown.score)])

    if total_score is None:
        total_score = sum(breakdown.contribution_to_total for breakdown in breakdowns)
    recommendations.extend(_program_recommendations(total_score))

    canonical_industry = normalize_industry(industry)
    if needs_improvement and canonical_industry in INDUSTRY_RECOMMENDATIONS:
        recommendations.append(INDUSTRY_RECOMMENDATIONS[canonical_industry])

    return list(dict.fromkeys(recommendations))[:MAX_RECOMMENDATIONS]


def _pillar_name(pillar_id: str) -> str:
    pillar = PILLARS_BY_ID.get(pillar_id)
    return pillar.name if pillar is not None else pillar_id


def identify_strengths(breakdowns: Sequence[PillarScore]) -> list[str]:
    """Return names of pillars scoring 70 or more, strongest first."""
    strong = [b for b in breakdowns if b.score >= STRENGTH_THRESHOLD]
    strong.sort(key=lambda breakdown: breakdown.score, reverse=True)
    return [_pillar_name(b.pillar_id) for b in strong][:MAX_STRENGTHS]


def identify_weaknesses(breakdowns: Sequence[PillarScore]) -> list[str]:
    """Return names of pillars scoring below 60, weakest first."""
    weak = [b for b in _sort_weakest_first(breakdowns) if b.score < WEAKNESS_THRESHOLD]
    return [_pillar_name(b.pillar_id) for b in weak][:MAX_WEAKNESSES]
