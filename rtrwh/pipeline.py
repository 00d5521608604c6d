"""
End-to-end assessment pipeline:

1. Normalize inputs into an AssessmentInput and validate them.
2. Resolve the region and run the assessment engine.
3. Collect diagnostics (defaulted region, budget, unrecoverable economics).
4. Optionally persist the result to an AssessmentStore.

Persistence runs after the result exists and never alters it: a failed save
is logged and reported as a diagnostic error, and the result is returned.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .data_tables import AssessmentRecord, AssessmentStore
from .engine import AssessmentEngine
from .models import AssessmentInput, AssessmentResult
from .reference_tables import ReferenceTables
from .region import RegionProfile
from .validation import validate_assessment_input

logger = logging.getLogger(__name__)


@dataclass
class AssessmentRun:
    inputs: AssessmentInput
    result: AssessmentResult
    region: RegionProfile
    diagnostics: Dict[str, Any]
    record: Optional[AssessmentRecord] = None

    @property
    def saved(self) -> bool:
        return self.record is not None


def _warn(diagnostics: Dict[str, Any], message: str, detail: Optional[Dict[str, Any]] = None) -> None:
    diagnostics["warnings"].append({"message": message, "detail": detail or {}})


def build_diagnostics(inputs: AssessmentInput, region: RegionProfile, result: AssessmentResult) -> Dict[str, Any]:
    diagnostics: Dict[str, Any] = {"warnings": [], "errors": []}

    if region.is_default:
        _warn(
            diagnostics,
            "No known city in address; default rainfall and aquifer profile used.",
            {"address": inputs.location.address, "annual_rainfall_mm": region.rainfall.annual_mm},
        )

    economics = result.economics
    if not economics.is_recoverable:
        _warn(
            diagnostics,
            "Annual savings do not exceed maintenance cost; installation cost is not recoverable.",
            {
                "annual_savings": economics.annual_savings,
                "maintenance_cost": economics.maintenance_cost,
            },
        )

    budget = inputs.preferences.budget
    if budget > 0 and economics.total_cost > budget:
        _warn(
            diagnostics,
            "Total cost exceeds the stated budget.",
            {"budget": budget, "total_cost": economics.total_cost},
        )

    return diagnostics


def run_assessment(
    *,
    inputs: Union[AssessmentInput, Dict[str, Any]],
    tables: Optional[ReferenceTables] = None,
    engine: Optional[AssessmentEngine] = None,
    store: Optional[AssessmentStore] = None,
    user_id: Optional[str] = None,
) -> AssessmentRun:
    """
    Execute the full assessment pipeline and return an AssessmentRun.

    Inputs are checked with validate_assessment_input, which also applies the
    wizard rule that an address is required. Call the engine directly to
    assess a blank address against the default region.

    Raises:
        InvalidAssessmentInput: before any calculation, if the inputs are malformed
            (including dict payloads with non-numeric fields)
    """
    if isinstance(inputs, dict):
        inputs = AssessmentInput.from_dict(inputs)
    validate_assessment_input(inputs)

    engine = engine or AssessmentEngine(tables)
    region = engine.resolve_region(inputs)
    result = engine.calculate_for_region(inputs, region)

    diagnostics = build_diagnostics(inputs, region, result)

    record = None
    if store is not None:
        try:
            record = store.save_assessment(inputs, result, user_id=user_id)
        except sqlite3.Error as exc:
            logger.exception("Failed to save assessment for %r", inputs.location.address)
            diagnostics["errors"].append({"message": "Failed to save assessment", "detail": {"error": str(exc)}})

    return AssessmentRun(
        inputs=inputs,
        result=result,
        region=region,
        diagnostics=diagnostics,
        record=record,
    )
