"""Plain-text summary of an assessment result for emails and share pages."""

from insider_risk_index.core.scoring import AssessmentResult

_NEXT_STEPS: tuple[str, ...] = (
    "Review the detailed findings for each pillar.",
    "Prioritise recommendations against your organization's risk tolerance.",
    "Build an implementation roadmap with measurable milestones.",
    "Reassess regularly to track progress.",
)


def generate_summary_report(result: AssessmentResult) -> str:
    """Render a short narrative summary of a result.

    Args:
        result: A scored assessment. Not modified.

    Returns:
        Multi-line plain-text summary.
    """
    ranked = sorted(result.pillar_breakdown, key=lambda breakdown: breakdown.score)
    weakest = ranked[0]
    strongest = ranked[-1]
    position = "above" if result.total_score > result.benchmark.overall else "below"

    lines = [
        "Insider Risk Index Assessment Summary",
        "",
        f"Your organization scored {result.total_score:g}/100, placing it at "
        f"Level {result.level}: {result.level_name}.",
        "",
        "Key findings:",
        f"- Overall score is {position} the global average of {result.benchmark.overall:g}.",
        f"- Strongest area: {strongest.pillar_name} ({strongest.score:g}).",
        f"- Primary concern: {weakest.pillar_name} ({weakest.score:g}).",
    ]

    if result.recommendations:
        lines += ["", "Immediate actions:"]
        lines += [f"- {recommendation}" for recommendation in result.recommendations[:3]]

    lines += ["", "Next steps:"]
    lines += [f"{index}. {step}" for index, step in enumerate(_NEXT_STEPS, start=1)]
    return "\n".join(lines)
