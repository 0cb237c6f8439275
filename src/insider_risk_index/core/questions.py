"""Insider Risk Index question bank.

Contains 20 questions, four per pillar. Every question offers five discrete
options scored 0, 25, 50, 75 and 100. Question weights within a pillar sum
to 1.0, so a pillar's normalised score is the weighted mean of its answers.

Pillars:
    visibility               endpoint, behavioural, application and network monitoring
    prevention-coaching      coaching, screening, well-being and reporting
    investigation-evidence   forensics, session replay, response and legal/HR coordination
    identity-saas            IAM, MFA, privileged access and SaaS/OAuth governance
    phishing-resilience      email security, awareness, detection and incident handling

The module builds ``DEFAULT_CATALOG`` at import time. Catalog invariants are
asserted there, so an authoring error fails at startup rather than skewing
scores at request time.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from insider_risk_index.core.errors import CatalogError
from insider_risk_index.core.pillars import PILLARS, Pillar

_WEIGHT_TOLERANCE: float = 1e-6
_STANDARD_VALUES: tuple[int, ...] = (0, 25, 50, 75, 100)


@dataclass(frozen=True)
class AnswerOption:
    """A discrete answer choice.

    Attributes:
        value: Points awarded for this option, in the range 0-100.
        label: Short label presented to the respondent.
    """

    value: float
    label: str


@dataclass(frozen=True)
class AssessmentQuestion:
    """A single questionnaire item.

    Attributes:
        question_id: Unique identifier referenced by answers (e.g. 'v1').
        pillar_id: The pillar this question contributes to.
        text: Question text presented to respondents.
        weight: Weight within the pillar (a pillar's weights sum to 1.0).
        options: Ordered answer options.
    """

    question_id: str
    pillar_id: str
    text: str
    weight: float
    options: tuple[AnswerOption, ...]

    @property
    def option_values(self) -> frozenset[float]:
        return frozenset(option.value for option in self.options)


def _options(*labels: str) -> tuple[AnswerOption, ...]:
    return tuple(
        AnswerOption(value=value, label=label)
        for value, label in zip(_STANDARD_VALUES, labels, strict=True)
    )


QUESTION_BANK: list[AssessmentQuestion] = [
    # -----------------------------------------------------------------------
    # Pillar: visibility (weights sum = 1.00)
    # -----------------------------------------------------------------------
    AssessmentQuestion(
        question_id="v1",
        pillar_id="visibility",
        text="How comprehensive is your organization's endpoint monitoring and logging?",
        weight=0.30,
        options=_options(
            "No centralized monitoring",
            "Basic monitoring",
            "Moderate coverage",
            "Good coverage",
            "Excellent coverage",
        ),
    ),
    AssessmentQuestion(
        question_id="v2",
        pillar_id="visibility",
        text="How effectively can you understand user intent and intervene in real-time?",
        weight=0.25,
        options=_options(
            "No behavioral monitoring",
            "Basic access logs",
            "Application usage tracking",
            "Behavioral analytics with alerts",
            "Real-time intent analysis",
        ),
    ),
    AssessmentQuestion(
        question_id="v3",
        pillar_id="visibility",
        text=(
            "How effectively do you capture user context and behavior across "
            "all applications?"
        ),
        weight=0.25,
        options=_options(
            "No application monitoring",
            "Basic access logging",
            "Integrated app monitoring",
            "Cross-platform visibility",
            "Comprehensive session intelligence",
        ),
    ),
    AssessmentQuestion(
        question_id="v4",
        pillar_id="visibility",
        text="What is your network traffic monitoring capability?",
        weight=0.20,
        options=_options(
            "No network monitoring",
            "Perimeter monitoring",
            "Internal traffic visibility",
            "Comprehensive network analytics",
            "Advanced threat detection",
        ),
    ),
    # -----------------------------------------------------------------------
    # Pillar: prevention-coaching (weights sum = 1.00)
    # -----------------------------------------------------------------------
    AssessmentQuestion(
        question_id="pc1",
        pillar_id="prevention-coaching",
        text=(
            "How effectively do you guide and coach users during risky "
            "activities in real-time?"
        ),
        weight=0.30,
        options=_options(
            "No behavioral guidance",
            "Periodic training only",
            "Alert-based warnings",
            "In-session notifications",
            "Real-time behavioral coaching",
        ),
    ),
    AssessmentQuestion(
        question_id="pc2",
        pillar_id="prevention-coaching",
        text=(
            "What screening processes do you have for employees with privileged "
            "access (admin accounts, classified data, OT systems, research environments)?"
        ),
        weight=0.25,
        options=_options(
            "No additional screening",
            "Basic background checks",
            "Enhanced screening",
            "Comprehensive vetting",
            "Continuous monitoring",
        ),
    ),
    AssessmentQuestion(
        question_id="pc3",
        pillar_id="prevention-coaching",
        text="How well do you monitor and support employee well-being and satisfaction?",
        weight=0.20,
        options=_options(
            "No formal program",
            "Basic HR support",
            "Employee assistance program",
            "Proactive wellness monitoring",
            "Comprehensive program",
        ),
    ),
    AssessmentQuestion(
        question_id="pc4",
        pillar_id="prevention-coaching",
        text="What policies and procedures do you have for reporting suspicious behavior?",
        weight=0.25,
        options=_options(
            "No formal process",
            "Basic reporting channels",
            "Anonymous reporting system",
            "Multiple reporting options",
            "Comprehensive program",
        ),
    ),
    # -----------------------------------------------------------------------
    # Pillar: investigation-evidence (weights sum = 1.00)
    # -----------------------------------------------------------------------
    AssessmentQuestion(
        question_id="ie1",
        pillar_id="investigation-evidence",
        text="What forensic investigation capabilities does your organization have?",
        weight=0.30,
        options=_options(
            "No forensic capability",
            "Basic incident response",
            "Internal forensics team",
            "Advanced forensics",
            "Expert capabilities",
        ),
    ),
    AssessmentQuestion(
        question_id="ie2",
        pillar_id="investigation-evidence",
        text=(
            "How effectively can you reconstruct and replay user sessions for "
            "investigations?"
        ),
        weight=0.25,
        options=_options(
            "No session recording",
            "Basic activity logs",
            "Screen recording tools",
            "Detailed session tracking",
            "Immutable session replay",
        ),
    ),
    AssessmentQuestion(
        question_id="ie3",
        pillar_id="investigation-evidence",
        text="What incident response procedures do you have for insider threats?",
        weight=0.25,
        options=_options(
            "No specific procedures",
            "Basic response plan",
            "Insider threat procedures",
            "Comprehensive playbooks",
            "Tested and refined procedures",
        ),
    ),
    AssessmentQuestion(
        question_id="ie4",
        pillar_id="investigation-evidence",
        text="How well do you coordinate with legal and HR teams during investigations?",
        weight=0.20,
        options=_options(
            "No coordination",
            "Ad-hoc coordination",
            "Defined processes",
            "Integrated approach",
            "Seamless coordination",
        ),
    ),
    # -----------------------------------------------------------------------
    # Pillar: identity-saas (weights sum = 1.00)
    # -----------------------------------------------------------------------
    AssessmentQuestion(
        question_id="is1",
        pillar_id="identity-saas",
        text="How robust is your identity and access management (IAM) system?",
        weight=0.30,
        options=_options(
            "Basic user accounts",
            "Centralized authentication",
            "Role-based access control",
            "Advanced IAM",
            "Adaptive authentication within zero trust",
        ),
    ),
    AssessmentQuestion(
        question_id="is2",
        pillar_id="identity-saas",
        text="What multi-factor authentication (MFA) coverage do you have?",
        weight=0.25,
        options=_options(
            "No MFA",
            "Limited MFA",
            "Selective MFA",
            "Broad MFA coverage",
            "Universal MFA",
        ),
    ),
    AssessmentQuestion(
        question_id="is3",
        pillar_id="identity-saas",
        text="How do you manage privileged access and administrative accounts?",
        weight=0.25,
        options=_options(
            "No special controls",
            "Basic admin controls",
            "Privileged account management",
            "Comprehensive PAM",
            "Advanced PAM",
        ),
    ),
    AssessmentQuestion(
        question_id="is4",
        pillar_id="identity-saas",
        text=(
            "How effectively do you detect and prevent risky SaaS and OAuth "
            "application usage in real-time?"
        ),
        weight=0.20,
        options=_options(
            "No SaaS oversight",
            "Basic app inventory",
            "Automated discovery",
            "Real-time monitoring",
            "Intelligent intervention",
        ),
    ),
    # -----------------------------------------------------------------------
    # Pillar: phishing-resilience (weights sum = 1.00)
    # -----------------------------------------------------------------------
    AssessmentQuestion(
        question_id="pr1",
        pillar_id="phishing-resilience",
        text="What email security controls do you have in place?",
        weight=0.30,
        options=_options(
            "Basic email filtering",
            "Enhanced filtering",
            "Advanced email security",
            "Comprehensive protection",
            "Proven threat prevention",
        ),
    ),
    AssessmentQuestion(
        question_id="pr2",
        pillar_id="phishing-resilience",
        text="How comprehensive is your phishing awareness training and testing?",
        weight=0.25,
        options=_options(
            "No phishing training",
            "Annual training",
            "Regular training",
            "Comprehensive program",
            "Measurable risk reduction program",
        ),
    ),
    AssessmentQuestion(
        question_id="pr3",
        pillar_id="phishing-resilience",
        text=(
            "How effectively do you detect and prevent sophisticated phishing "
            "attacks in real-time?"
        ),
        weight=0.25,
        options=_options(
            "Basic email filtering",
            "Enhanced email security",
            "Advanced threat detection",
            "Real-time page analysis",
            "Intelligent content inspection",
        ),
    ),
    AssessmentQuestion(
        question_id="pr4",
        pillar_id="phishing-resilience",
        text=(
            "How do you handle and respond to social engineering incidents "
            "(phishing, smishing, vishing, etc.)?"
        ),
        weight=0.20,
        options=_options(
            "No formal process",
            "Basic response",
            "Structured response",
            "Comprehensive response",
            "Advanced orchestration",
        ),
    ),
]


class AssessmentCatalog:
    """Immutable pairing of pillars and questions with indexed lookups.

    The constructor validates the catalog invariants and raises
    ``CatalogError`` on the first violation. Instances are safe to share
    across threads and requests.
    """

    def __init__(
        self,
        pillars: Sequence[Pillar],
        questions: Sequence[AssessmentQuestion],
        strict: bool = True,
    ) -> None:
        """Build and validate a catalog.

        Args:
            pillars: Pillars in catalog (display) order.
            questions: Questions in catalog order.
            strict: When True, every pillar must own at least one question.
        """
        self.pillars: tuple[Pillar, ...] = tuple(pillars)
        self.questions: tuple[AssessmentQuestion, ...] = tuple(questions)
        self._questions_by_id: dict[str, AssessmentQuestion] = {
            q.question_id: q for q in self.questions
        }
        self._questions_by_pillar: dict[str, tuple[AssessmentQuestion, ...]] = {
            pillar.pillar_id: tuple(
                q for q in self.questions if q.pillar_id == pillar.pillar_id
            )
            for pillar in self.pillars
        }
        self.validate(strict=strict)

    def validate(self, strict: bool = True) -> None:
        """Assert the catalog invariants.

        Raises:
            CatalogError: If any invariant is violated.
        """
        if not self.pillars:
            raise CatalogError("Catalog has no pillars")

        pillar_ids = [pillar.pillar_id for pillar in self.pillars]
        if len(set(pillar_ids)) != len(pillar_ids):
            raise CatalogError(f"Duplicate pillar ids in {pillar_ids}")

        for pillar in self.pillars:
            if not pillar.weight > 0:
                raise CatalogError(
                    f"Pillar {pillar.pillar_id!r} has non-positive weight {pillar.weight}"
                )
        pillar_total = math.fsum(pillar.weight for pillar in self.pillars)
        if abs(pillar_total - 1.0) > _WEIGHT_TOLERANCE:
            raise CatalogError(f"Pillar weights sum to {pillar_total}, expected 1.0")

        if len(self._questions_by_id) != len(self.questions):
            counts = Counter(q.question_id for q in self.questions)
            duplicates = sorted(qid for qid, count in counts.items() if count > 1)
            raise CatalogError(f"Duplicate question ids: {duplicates}")

        known_pillars = set(pillar_ids)
        for question in self.questions:
            if question.pillar_id not in known_pillars:
                raise CatalogError(
                    f"Question {question.question_id!r} references unknown pillar "
                    f"{question.pillar_id!r}"
                )
            if not question.weight > 0:
                raise CatalogError(
                    f"Question {question.question_id!r} has non-positive weight "
                    f"{question.weight}"
                )
            if not question.options:
                raise CatalogError(f"Question {question.question_id!r} has no options")
            for option in question.options:
                if not 0 <= option.value <= 100:
                    raise CatalogError(
                        f"Question {question.question_id!r} option {option.label!r} "
                        f"has value {option.value} outside 0-100"
                    )

        for pillar_id, questions in self._questions_by_pillar.items():
            if not questions:
                if strict:
                    raise CatalogError(f"Pillar {pillar_id!r} has no questions")
                continue
            question_total = math.fsum(q.weight for q in questions)
            if abs(question_total - 1.0) > _WEIGHT_TOLERANCE:
                raise CatalogError(
                    f"Question weights for pillar {pillar_id!r} sum to "
                    f"{question_total}, expected 1.0"
                )

    @property
    def question_ids(self) -> list[str]:
        return [q.question_id for q in self.questions]

    def question(self, question_id: str) -> AssessmentQuestion | None:
        """Return the question with this id, or None if absent."""
        return self._questions_by_id.get(question_id)

    def questions_for(self, pillar_id: str) -> tuple[AssessmentQuestion, ...]:
        """Return the questions of a pillar in catalog order."""
        return self._questions_by_pillar.get(pillar_id, ())

    def check_completeness(
        self,
        answered_question_ids: Iterable[str],
    ) -> tuple[bool, list[str]]:
        """Report which catalog questions are still unanswered.

        Used for progress display; never raises.

        Args:
            answered_question_ids: Ids of the questions answered so far.

        Returns:
            Tuple of (is_complete, missing_question_ids in catalog order).
        """
        answered = set(answered_question_ids)
        missing = [q.question_id for q in self.questions if q.question_id not in answered]
        return not missing, missing


# Convenience mappings for fast lookup
QUESTIONS_BY_ID: dict[str, AssessmentQuestion] = {q.question_id: q for q in QUESTION_BANK}

QUESTIONS_BY_PILLAR: dict[str, list[AssessmentQuestion]] = {}
for _question in QUESTION_BANK:
    QUESTIONS_BY_PILLAR.setdefault(_question.pillar_id, []).append(_question)

DEFAULT_CATALOG: AssessmentCatalog = AssessmentCatalog(PILLARS, QUESTION_BANK)
