"""Insider Risk Index scoring algorithm.

Aggregates weighted questionnaire answers into a hierarchical score:

    question -> pillar -> overall index

Each answer contributes ``value * question.weight`` to its pillar. The pillar
score is normalised against ``100 * question.weight`` summed over the
pillar, giving 0-100. Each pillar then contributes ``score * pillar.weight``
to the overall index. Pillar scores and contributions are rounded to two
decimal places when stored on the result, and the total is the sum of the
stored contributions, so the displayed sub-totals always add up to the
displayed total.

The engine is a pure function of its arguments: no I/O, no shared mutable
state. An answer set must cover every catalog question exactly once with a
valid option value; anything else raises an ``AssessmentValidationError``
rather than producing a silently skewed score.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from insider_risk_index.core.benchmarks import (
    Benchmark,
    CompanySize,
    Industry,
    normalize_company_size,
    normalize_industry,
    resolve_benchmark,
)
from insider_risk_index.core.errors import (
    IncompleteAssessmentError,
    InvalidAnswerValueError,
    UnknownQuestionError,
)
from insider_risk_index.core.levels import classify_level, get_level
from insider_risk_index.core.pillars import Pillar
from insider_risk_index.core.questions import DEFAULT_CATALOG, AssessmentCatalog
from insider_risk_index.core.recommendations import (
    generate_recommendations,
    identify_strengths,
    identify_weaknesses,
)
from insider_risk_index.observability import get_logger

logger = get_logger(__name__)

MAX_PILLAR_SCORE: float = 100.0


@dataclass(frozen=True)
class Answer:
    """A respondent's answer to one question.

    Attributes:
        question_id: Catalog question being answered.
        value: Points of the chosen option (0-100).
        rationale: Optional free text. Passed through, never scored.
    """

    question_id: str
    value: float
    rationale: str | None = None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Normalised score and contribution of one pillar."""

    pillar_id: str
    pillar_name: str
    score: float
    weight: float
    contribution_to_total: float
    max_score: float = MAX_PILLAR_SCORE


@dataclass(frozen=True)
class AssessmentResult:
    """Complete scoring output for one answer set.

    Attributes:
        total_score: Overall IRI, 0-100, equal to the sum of contributions.
        level: Maturity level 1-5.
        level_name: Display name of the level.
        level_description: Interpretation of the level.
        pillar_breakdown: One entry per pillar in catalog order.
        recommendations: Priority-ordered guidance, most severe first.
        strengths: Names of high-scoring pillars, strongest first.
        weaknesses: Names of low-scoring pillars, weakest first.
        benchmark: Cohort averages for comparison.
        industry: Canonical industry, or None when not recognised.
        company_size: Canonical size bracket, or None when not recognised.
        rationales: Free-text rationale per question id, as submitted.
    """

    total_score: float
    level: int
    level_name: str
    level_description: str
    pillar_breakdown: list[ScoreBreakdown]
    recommendations: list[str]
    strengths: list[str]
    weaknesses: list[str]
    benchmark: Benchmark
    industry: Industry | None = None
    company_size: CompanySize | None = None
    rationales: dict[str, str] = field(default_factory=dict)


class InsiderRiskScorer:
    """Scoring engine bound to a question catalog.

    Stateless apart from the immutable catalog, so one instance can serve
    concurrent requests.
    """

    def __init__(self, catalog: AssessmentCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog

    def validate_answers(self, answers: Sequence[Answer]) -> dict[str, Answer]:
        """Check one-to-one coverage of the catalog and index the answers.

        Checks run in order: unknown ids, duplicate answers, missing
        answers, option values.

        Args:
            answers: The submitted answers.

        Returns:
            Mapping of question id to its answer.

        Raises:
            UnknownQuestionError: An answer references a question not in the catalog.
            IncompleteAssessmentError: A question is answered twice or not at all.
            InvalidAnswerValueError: A value is not one of the question's options.
        """
        unknown = [a.question_id for a in answers if self.catalog.question(a.question_id) is None]
        if unknown:
            raise UnknownQuestionError(list(dict.fromkeys(unknown)))

        counts = Counter(answer.question_id for answer in answers)
        duplicates = [qid for qid in self.catalog.question_ids if counts[qid] > 1]
        _, missing = self.catalog.check_completeness(counts)
        if duplicates or missing:
            raise IncompleteAssessmentError(
                missing_question_ids=missing,
                duplicate_question_ids=duplicates,
            )

        answers_by_id = {answer.question_id: answer for answer in answers}

        invalid: dict[str, float] = {}
        for question in self.catalog.questions:
            value = answers_by_id[question.question_id].value
            if value not in question.option_values:
                invalid[question.question_id] = value
        if invalid:
            raise InvalidAnswerValueError(invalid)

        return answers_by_id

    def score_pillar(
        self,
        pillar: Pillar,
        answers_by_id: dict[str, Answer],
    ) -> ScoreBreakdown:
        """Compute the normalised score and contribution of one pillar.

        Args:
            pillar: The pillar to score.
            answers_by_id: Validated answers indexed by question id.

        Returns:
            ScoreBreakdown with score and contribution rounded to 2 dp.
            A pillar without questions scores 0.
        """
        pillar_score_raw = 0.0
        pillar_max_raw = 0.0
        for question in self.catalog.questions_for(pillar.pillar_id):
            answer = answers_by_id[question.question_id]
            pillar_score_raw += answer.value * question.weight
            pillar_max_raw += MAX_PILLAR_SCORE * question.weight

        if pillar_max_raw > 0:
            pillar_score = (pillar_score_raw / pillar_max_raw) * MAX_PILLAR_SCORE
        else:
            pillar_score = 0.0

        return ScoreBreakdown(
            pillar_id=pillar.pillar_id,
            pillar_name=pillar.name,
            score=round(pillar_score, 2),
            weight=pillar.weight,
            contribution_to_total=round(pillar_score * pillar.weight, 2),
        )

    def score_assessment(
        self,
        answers: Sequence[Answer],
        industry: "Industry | str | None" = None,
        company_size: "CompanySize | str | None" = None,
    ) -> AssessmentResult:
        """Run the full scoring pipeline for one answer set.

        Args:
            answers: Exactly one answer per catalog question.
            industry: Canonical or free-text industry. Unknown values mean
                "no cohort preference".
            company_size: Canonical or free-text size bracket.

        Returns:
            The complete AssessmentResult.

        Raises:
            AssessmentValidationError: If the answer set is not scoreable.
        """
        answers_by_id = self.validate_answers(answers)

        pillar_breakdown = [
            self.score_pillar(pillar, answers_by_id) for pillar in self.catalog.pillars
        ]
        total_score = round(sum(b.contribution_to_total for b in pillar_breakdown), 2)
        result = self.assemble_result(
            pillar_breakdown,
            total_score,
            industry=industry,
            company_size=company_size,
            rationales={
                answer.question_id: answer.rationale
                for answer in answers
                if answer.rationale
            },
        )

        logger.debug(
            "Insider risk index computed",
            total_score=total_score,
            level=result.level,
            industry=result.industry.value if result.industry else None,
            company_size=result.company_size.value if result.company_size else None,
            answer_count=len(answers),
        )
        return result

    def assemble_result(
        self,
        pillar_breakdown: list[ScoreBreakdown],
        total_score: float,
        industry: "Industry | str | None" = None,
        company_size: "CompanySize | str | None" = None,
        rationales: dict[str, str] | None = None,
        level: int | None = None,
    ) -> AssessmentResult:
        """Derive level, guidance and benchmarks from pillar scores.

        Used for fresh scores and for results rebuilt from a stored
        snapshot, whose answers may no longer match the catalog.

        Args:
            pillar_breakdown: One entry per pillar.
            total_score: Overall index, already rounded.
            industry: Canonical or free-text industry.
            company_size: Canonical or free-text size bracket.
            rationales: Rationale per question id.
            level: A previously assigned level to keep. Classified from
                ``total_score`` when omitted.

        Returns:
            The complete AssessmentResult.
        """
        maturity_level = get_level(level) if level is not None else classify_level(total_score)
        canonical_industry = normalize_industry(industry)
        canonical_size = normalize_company_size(company_size)

        return AssessmentResult(
            total_score=total_score,
            level=maturity_level.level,
            level_name=maturity_level.name,
            level_description=maturity_level.description,
            pillar_breakdown=pillar_breakdown,
            recommendations=generate_recommendations(
                pillar_breakdown, canonical_industry, total_score=total_score
            ),
            strengths=identify_strengths(pillar_breakdown),
            weaknesses=identify_weaknesses(pillar_breakdown),
            benchmark=resolve_benchmark(canonical_industry, canonical_size),
            industry=canonical_industry,
            company_size=canonical_size,
            rationales=dict(rationales or {}),
        )


_DEFAULT_SCORER: InsiderRiskScorer = InsiderRiskScorer()


def calculate_insider_risk_index(
    answers: Sequence[Answer],
    industry: "Industry | str | None" = None,
    company_size: "CompanySize | str | None" = None,
    catalog: AssessmentCatalog | None = None,
) -> AssessmentResult:
    """Score an answer set against the default (or a supplied) catalog.

    See ``InsiderRiskScorer.score_assessment``.
    """
    scorer = _DEFAULT_SCORER if catalog is None else InsiderRiskScorer(catalog)
    return scorer.score_assessment(answers, industry=industry, company_size=company_size)
