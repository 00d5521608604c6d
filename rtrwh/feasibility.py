"""
Feasibility scoring for rooftop rainwater harvesting

Additive rubric with four independent criteria (max 100 points). Each
criterion contributes exactly one reason, in evaluation order:

    rainfall (30) -> roof area (25) -> storage space (20) -> harvest/demand (25)

Every threshold is a strict lower bound: a value must EXCEED it to earn the
band. Category thresholds are inclusive: a score of exactly 65 is 'good'.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .models import Feasibility, FeasibilityCategory


# ============================================================================
# RUBRIC
# ============================================================================

# (exclusive lower bound, points, reason), highest band first; the last band
# is the fallback and its bound is ignored.
Band = Tuple[float, int, str]

RAINFALL_BANDS: Sequence[Band] = (
    (1000, 30, "Excellent rainfall (>1000mm annually)"),
    (600, 20, "Good rainfall (600-1000mm annually)"),
    (float("-inf"), 10, "Moderate rainfall (<600mm annually)"),
)

ROOF_AREA_BANDS: Sequence[Band] = (
    (100, 25, "Large roof area (>100 sq.m)"),
    (50, 18, "Medium roof area (50-100 sq.m)"),
    (float("-inf"), 10, "Small roof area (<50 sq.m)"),
)

STORAGE_SPACE_BANDS: Sequence[Band] = (
    (20, 20, "Adequate space for storage systems"),
    (10, 12, "Limited but workable space"),
    (float("-inf"), 5, "Very limited space for storage"),
)

DEMAND_RATIO_BANDS: Sequence[Band] = (
    (0.8, 25, "Harvest can meet 80%+ of water needs"),
    (0.4, 18, "Harvest can meet 40-80% of water needs"),
    (float("-inf"), 10, "Harvest can supplement water needs"),
)

# Inclusive lower bounds
CATEGORY_THRESHOLDS: Sequence[Tuple[int, FeasibilityCategory]] = (
    (80, FeasibilityCategory.EXCELLENT),
    (65, FeasibilityCategory.GOOD),
    (45, FeasibilityCategory.FAIR),
)

MAX_SCORE = sum(bands[0][1] for bands in (
    RAINFALL_BANDS, ROOF_AREA_BANDS, STORAGE_SPACE_BANDS, DEMAND_RATIO_BANDS
))


def _score_band(value: float, bands: Sequence[Band]) -> Tuple[int, str]:
    for bound, points, reason in bands[:-1]:
        if value > bound:
            return points, reason
    _, points, reason = bands[-1]
    return points, reason


def category_for_score(score: float) -> FeasibilityCategory:
    for threshold, category in CATEGORY_THRESHOLDS:
        if score >= threshold:
            return category
    return FeasibilityCategory.POOR


def score_feasibility(
    *,
    annual_rainfall_mm: float,
    roof_area_m2: float,
    available_space_m2: float,
    annual_harvest_l: float,
    daily_consumption_l: float,
) -> Feasibility:
    annual_demand = daily_consumption_l * 365
    harvest_ratio = annual_harvest_l / annual_demand

    score = 0
    reasons: List[str] = []
    for value, bands in (
        (annual_rainfall_mm, RAINFALL_BANDS),
        (roof_area_m2, ROOF_AREA_BANDS),
        (available_space_m2, STORAGE_SPACE_BANDS),
        (harvest_ratio, DEMAND_RATIO_BANDS),
    ):
        points, reason = _score_band(value, bands)
        score += points
        reasons.append(reason)

    return Feasibility(
        score=score,
        category=category_for_score(score),
        reasons=tuple(reasons),
    )
