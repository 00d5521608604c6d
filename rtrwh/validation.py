"""
Input validation boundary

The engine assumes a well-formed input and does not range-check. Callers
(the wizard, the pipeline) run validate_assessment_input first so the engine
never divides by zero or produces NaN/Infinity.
"""

from __future__ import annotations

import math
from typing import List

from .models import AssessmentInput, InvalidAssessmentInput

__all__ = ["InvalidAssessmentInput", "validate_assessment_input"]


def _finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def validate_assessment_input(inputs: AssessmentInput) -> AssessmentInput:
    """
    Check the input against the engine's domain

    Returns:
        The same record, so calls can be chained

    Raises:
        InvalidAssessmentInput: listing every failed check
    """
    problems: List[str] = []
    prop = inputs.property

    for name, value in (
        ("roof_area", prop.roof_area),
        ("available_space", prop.available_space),
        ("water_consumption", prop.water_consumption),
        ("building_height", prop.building_height),
        ("budget", inputs.preferences.budget),
    ):
        if not _finite(value):
            problems.append(f"{name} must be a finite number (got {value!r})")

    if _finite(prop.roof_area) and prop.roof_area <= 0:
        problems.append(f"Roof area must be > 0 m² (got {prop.roof_area})")
    if _finite(prop.available_space) and prop.available_space < 0:
        problems.append(f"Available space must be >= 0 m² (got {prop.available_space})")
    if _finite(prop.water_consumption) and prop.water_consumption <= 0:
        problems.append(f"Water consumption must be > 0 L/day (got {prop.water_consumption})")
    if isinstance(prop.dwellers, bool) or not isinstance(prop.dwellers, int) or prop.dwellers < 1:
        problems.append(f"Dwellers must be an integer >= 1 (got {prop.dwellers!r})")
    # Wizard rule: the engine itself accepts a blank address (default region)
    if not inputs.location.address.strip():
        problems.append("Address must not be empty")

    if problems:
        raise InvalidAssessmentInput(problems)
    return inputs
