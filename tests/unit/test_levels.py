"""Unit tests for maturity level classification."""

import math

import pytest

from insider_risk_index.core.levels import MATURITY_LEVELS, classify_level, get_level


class TestClassifyLevel:
    """Boundary behaviour of classify_level."""

    @pytest.mark.parametrize(
        ("score", "expected_level"),
        [
            (100.0, 5),
            (85.0, 5),
            (84.99, 4),
            (65.0, 4),
            (64.99, 3),
            (45.0, 3),
            (44.99, 2),
            (25.0, 2),
            (24.99, 1),
            (0.0, 1),
        ],
    )
    def test_inclusive_lower_bounds(self, score: float, expected_level: int) -> None:
        assert classify_level(score).level == expected_level

    def test_names(self) -> None:
        assert [lvl.name for lvl in MATURITY_LEVELS] == [
            "Optimized",
            "Proactive",
            "Managed",
            "Emerging",
            "Ad Hoc",
        ]

    @pytest.mark.parametrize(("score", "expected_level"), [(-10.0, 1), (150.0, 5)])
    def test_out_of_range_is_clamped(self, score: float, expected_level: int) -> None:
        assert classify_level(score).level == expected_level

    def test_nan_is_level_one(self) -> None:
        assert classify_level(math.nan).level == 1

    def test_level_metadata(self) -> None:
        level = classify_level(70.0)
        assert level.name == "Proactive"
        assert level.color.startswith("#")
        assert level.description


class TestGetLevel:
    """Lookup by level number."""

    def test_known_level(self) -> None:
        assert get_level(3).name == "Managed"
        assert get_level(3).min_score == 45.0

    def test_unknown_level_raises(self) -> None:
        with pytest.raises(KeyError):
            get_level(6)
