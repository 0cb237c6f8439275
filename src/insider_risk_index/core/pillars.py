"""Pillar registry for the Insider Risk Index.

The five pillars partition the questionnaire. Each pillar carries a
top-level weight; the overall index is the weighted sum of normalised pillar
scores, so the weights must sum to 1.0:

    visibility              0.25
    prevention-coaching     0.25
    investigation-evidence  0.20
    identity-saas           0.15
    phishing-resilience     0.15

The weight invariant is checked when the catalog is built
(see ``AssessmentCatalog.validate``).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pillar:
    """A top-level scoring dimension.

    Attributes:
        pillar_id: Stable identifier referenced by questions (e.g. 'visibility').
        name: Display name.
        description: Short explanation shown alongside results.
        weight: Share of the overall index (all pillars sum to 1.0).
        color: Hex colour for charts. Ignored by the scoring engine.
        order: 1-based display order.
    """

    pillar_id: str
    name: str
    description: str
    weight: float
    color: str
    order: int


PILLARS: tuple[Pillar, ...] = (
    Pillar(
        pillar_id="visibility",
        name="Visibility",
        description=(
            "Monitoring and detection of insider activity across endpoints, "
            "applications and the network."
        ),
        weight=0.25,
        color="#3B82F6",
        order=1,
    ),
    Pillar(
        pillar_id="prevention-coaching",
        name="Prevention & Coaching",
        description=(
            "Proactive measures, screening and in-the-moment coaching that stop "
            "risky behaviour before it becomes an incident."
        ),
        weight=0.25,
        color="#10B981",
        order=2,
    ),
    Pillar(
        pillar_id="investigation-evidence",
        name="Investigation & Evidence",
        description=(
            "Forensic capability, session reconstruction and coordinated "
            "response once an incident is suspected."
        ),
        weight=0.20,
        color="#F59E0B",
        order=3,
    ),
    Pillar(
        pillar_id="identity-saas",
        name="Identity & SaaS/OAuth",
        description=(
            "Identity governance, MFA, privileged access and control of "
            "third-party SaaS and OAuth grants."
        ),
        weight=0.15,
        color="#8B5CF6",
        order=4,
    ),
    Pillar(
        pillar_id="phishing-resilience",
        name="Phishing Resilience",
        description=(
            "Email security, phishing awareness and response to social "
            "engineering attempts."
        ),
        weight=0.15,
        color="#EF4444",
        order=5,
    ),
)

PILLARS_BY_ID: dict[str, Pillar] = {pillar.pillar_id: pillar for pillar in PILLARS}

PILLAR_WEIGHTS: dict[str, float] = {pillar.pillar_id: pillar.weight for pillar in PILLARS}

ALL_PILLAR_IDS: list[str] = [pillar.pillar_id for pillar in PILLARS]


def get_pillar(pillar_id: str) -> Pillar:
    """Return the pillar with the given id.

    Raises:
        KeyError: If no pillar has this id.
    """
    try:
        return PILLARS_BY_ID[pillar_id]
    except KeyError:
        raise KeyError(f"Unknown pillar {pillar_id!r}") from None
