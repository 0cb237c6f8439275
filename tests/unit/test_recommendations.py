"""Unit tests for recommendations, strengths, weaknesses and the summary report."""

import pytest

from insider_risk_index.core.benchmarks import Industry
from insider_risk_index.core.pillars import PILLARS
from insider_risk_index.core.recommendations import (
    INDUSTRY_RECOMMENDATIONS,
    MAX_RECOMMENDATIONS,
    PILLAR_RECOMMENDATIONS,
    generate_recommendations,
    identify_strengths,
    identify_weaknesses,
)
from insider_risk_index.core.scoring import InsiderRiskScorer, ScoreBreakdown
from insider_risk_index.core.summary import generate_summary_report


def _breakdowns(scores: dict[str, float]) -> list[ScoreBreakdown]:
    """Build catalog-ordered breakdowns from pillar scores."""
    return [
        ScoreBreakdown(
            pillar_id=pillar.pillar_id,
            pillar_name=pillar.name,
            score=scores[pillar.pillar_id],
            weight=pillar.weight,
            contribution_to_total=round(scores[pillar.pillar_id] * pillar.weight, 2),
        )
        for pillar in PILLARS
    ]


_STRONG = {
    "visibility": 90.0,
    "prevention-coaching": 85.0,
    "investigation-evidence": 95.0,
    "identity-saas": 88.0,
    "phishing-resilience": 92.0,
}


class TestGenerateRecommendations:
    """Priority ordering and caps."""

    def test_all_strong_yields_nothing(self) -> None:
        assert generate_recommendations(_breakdowns(_STRONG)) == []

    def test_single_weak_pillar_first(self) -> None:
        scores = {**_STRONG, "phishing-resilience": 40.0}
        recommendations = generate_recommendations(_breakdowns(scores))
        assert recommendations[:2] == PILLAR_RECOMMENDATIONS["phishing-resilience"][:2]

    @pytest.mark.parametrize(("score", "count"), [(10.0, 3), (29.99, 3), (30.0, 2), (49.0, 2), (50.0, 1), (69.99, 1)])
    def test_action_count_grows_with_severity(self, score: float, count: int) -> None:
        scores = {**_STRONG, "visibility": score}
        recommendations = generate_recommendations(_breakdowns(scores))
        visibility_actions = [r for r in recommendations if r in PILLAR_RECOMMENDATIONS["visibility"]]
        assert len(visibility_actions) == count

    def test_lowest_pillar_leads(self) -> None:
        scores = {**_STRONG, "visibility": 60.0, "investigation-evidence": 20.0}
        recommendations = generate_recommendations(_breakdowns(scores))
        assert recommendations[0] == PILLAR_RECOMMENDATIONS["investigation-evidence"][0]

    def test_ties_keep_catalog_order(self) -> None:
        scores = {**_STRONG, "visibility": 60.0, "identity-saas": 60.0}
        recommendations = generate_recommendations(_breakdowns(scores))
        assert recommendations[0] == PILLAR_RECOMMENDATIONS["visibility"][0]
        assert recommendations[1] == PILLAR_RECOMMENDATIONS["identity-saas"][0]

    def test_capped(self) -> None:
        scores = dict.fromkeys(_STRONG, 0.0)
        recommendations = generate_recommendations(_breakdowns(scores), Industry.HEALTHCARE)
        assert len(recommendations) == MAX_RECOMMENDATIONS
        assert len(set(recommendations)) == len(recommendations)

    def test_program_level_guidance_for_low_total(self) -> None:
        scores = {**dict.fromkeys(_STRONG, 75.0), "visibility": 0.0, "prevention-coaching": 0.0}
        recommendations = generate_recommendations(_breakdowns(scores))
        assert any("comprehensive insider risk management program" in r for r in recommendations)

    def test_weak_pillars_only_with_overall_total(self) -> None:
        scores = {**dict.fromkeys(_STRONG, 100.0), "identity-saas": 50.0}
        full = _breakdowns(scores)
        total = sum(b.contribution_to_total for b in full)
        assert total == pytest.approx(92.5)
        weak_only = [b for b in full if b.pillar_id == "identity-saas"]

        assert generate_recommendations(weak_only, total_score=total) == generate_recommendations(full)
        assert generate_recommendations(weak_only, total_score=total) == [
            PILLAR_RECOMMENDATIONS["identity-saas"][0]
        ]

    def test_scorer_passes_its_total(self, make_answers) -> None:
        result = InsiderRiskScorer().score_assessment(make_answers(100, {"identity-saas": 50}))
        assert result.total_score == pytest.approx(92.5)
        assert result.recommendations == [PILLAR_RECOMMENDATIONS["identity-saas"][0]]

    def test_explicit_total_drives_program_guidance(self) -> None:
        recommendations = generate_recommendations(_breakdowns(_STRONG), total_score=35.0)
        assert recommendations[0].startswith("Establish a comprehensive insider risk")

    def test_industry_note_appended(self) -> None:
        scores = {**_STRONG, "identity-saas": 65.0}
        recommendations = generate_recommendations(_breakdowns(scores), "healthcare")
        assert recommendations[-1] == INDUSTRY_RECOMMENDATIONS[Industry.HEALTHCARE]

    def test_industry_note_requires_a_gap(self) -> None:
        assert generate_recommendations(_breakdowns(_STRONG), Industry.TECHNOLOGY) == []


class TestStrengthsAndWeaknesses:
    """Threshold-based pillar lists."""

    def test_strengths_sorted_strongest_first(self) -> None:
        scores = {**_STRONG, "visibility": 70.0, "identity-saas": 69.99}
        assert identify_strengths(_breakdowns(scores)) == [
            "Investigation & Evidence",
            "Phishing Resilience",
            "Prevention & Coaching",
            "Visibility",
        ]

    def test_weaknesses_sorted_weakest_first(self) -> None:
        scores = {**_STRONG, "visibility": 59.99, "identity-saas": 10.0, "phishing-resilience": 60.0}
        assert identify_weaknesses(_breakdowns(scores)) == [
            "Identity & SaaS/OAuth",
            "Visibility",
        ]


class TestSummaryReport:
    """Plain-text summary of a result."""

    def test_contents(self, make_answers) -> None:
        result = InsiderRiskScorer().score_assessment(
            make_answers(75, {"identity-saas": 25, "phishing-resilience": 100})
        )
        report = generate_summary_report(result)
        assert f"scored {result.total_score:g}/100" in report
        assert f"Level {result.level}: {result.level_name}" in report
        assert "Strongest area: Phishing Resilience (100)" in report
        assert "Primary concern: Identity & SaaS/OAuth (25)" in report
        assert "above the global average of 64.2" in report
        assert result.recommendations[0] in report

    def test_below_average(self, make_answers) -> None:
        result = InsiderRiskScorer().score_assessment(make_answers(25))
        assert "below the global average" in generate_summary_report(result)

    def test_no_actions_section_without_recommendations(self, make_answers) -> None:
        result = InsiderRiskScorer().score_assessment(make_answers(100))
        report = generate_summary_report(result)
        assert "Immediate actions:" not in report
        assert "Next steps:" in report
