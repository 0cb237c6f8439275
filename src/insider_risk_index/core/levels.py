"""Maturity level classification for the Insider Risk Index.

Thresholds use inclusive lower bounds, so a score sitting exactly on a
boundary takes the higher level:

    85-100    -> Level 5 (Optimized)
    65-84.99  -> Level 4 (Proactive)
    45-64.99  -> Level 3 (Managed)
    25-44.99  -> Level 2 (Emerging)
    0-24.99   -> Level 1 (Ad Hoc)
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class MaturityLevel:
    """Metadata for one maturity level.

    Attributes:
        level: Ordinal level 1-5.
        name: Display name.
        description: One-sentence interpretation for respondents.
        color: Hex colour for gauges and badges.
        min_score: Inclusive lower bound of the level's score range.
    """

    level: int
    name: str
    description: str
    color: str
    min_score: float


# Ordered highest first; the first threshold met wins.
MATURITY_LEVELS: tuple[MaturityLevel, ...] = (
    MaturityLevel(
        level=5,
        name="Optimized",
        description=(
            "Insider risk is managed as a measured, continuously improving "
            "program. Maintain current practices and keep reassessing."
        ),
        color="#059669",
        min_score=85.0,
    ),
    MaturityLevel(
        level=4,
        name="Proactive",
        description=(
            "A solid baseline with good coverage across pillars. Targeted "
            "enhancements will close the remaining gaps."
        ),
        color="#16A34A",
        min_score=65.0,
    ),
    MaturityLevel(
        level=3,
        name="Managed",
        description=(
            "Core controls exist but coverage is uneven. Prioritise the "
            "lowest-scoring pillars."
        ),
        color="#D97706",
        min_score=45.0,
    ),
    MaturityLevel(
        level=2,
        name="Emerging",
        description=(
            "Foundational capabilities are forming but major gaps remain. "
            "Comprehensive improvements are needed."
        ),
        color="#EA580C",
        min_score=25.0,
    ),
    MaturityLevel(
        level=1,
        name="Ad Hoc",
        description=(
            "Insider risk is handled reactively, if at all. Immediate action "
            "is required to establish a program."
        ),
        color="#DC2626",
        min_score=0.0,
    ),
)

_LEVELS_BY_NUMBER: dict[int, MaturityLevel] = {lvl.level: lvl for lvl in MATURITY_LEVELS}


def classify_level(score: float) -> MaturityLevel:
    """Map a 0-100 score to its maturity level.

    Defined for every float: out-of-range values are clamped to 0-100 and
    NaN is treated as 0.

    Args:
        score: Overall Insider Risk Index.

    Returns:
        The MaturityLevel whose range contains the score.
    """
    if math.isnan(score):
        score = 0.0
    score = min(max(score, 0.0), 100.0)

    for maturity_level in MATURITY_LEVELS:
        if score >= maturity_level.min_score:
            return maturity_level
    return MATURITY_LEVELS[-1]


def get_level(level: int) -> MaturityLevel:
    """Return the metadata for a level number.

    Raises:
        KeyError: If the level is not 1-5.
    """
    return _LEVELS_BY_NUMBER[level]
