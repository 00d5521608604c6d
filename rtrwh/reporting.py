"""
Reporting utilities for presenting assessment results and stored assessments.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from .feasibility import category_for_score
from .models import AssessmentResult, FeasibilityCategory

NOT_RECOVERABLE = "Not recoverable"
TOP_STATES_LIMIT = 5


def build_analytics_overview(assessments_df: pd.DataFrame) -> Dict[str, Any]:
    """
    Aggregate stored assessments (the `assessments` table) for the overview:
    - totals and average feasibility score
    - top states by assessment count (blank state -> 'Unknown')
    - monthly trend keyed by month index 0-11
    - feasibility distribution by category
    """
    distribution = {c.value: 0 for c in FeasibilityCategory}
    if assessments_df.empty:
        return {
            "total_assessments": 0,
            "average_feasibility_score": 0.0,
            "total_potential_harvest": 0.0,
            "top_states": [],
            "monthly_trend": [],
            "feasibility_distribution": distribution,
        }

    df = assessments_df.copy()
    df["state"] = df["state"].fillna("").replace("", "Unknown")

    # Ties keep first-seen order
    state_counts = df.groupby("state", sort=False).size().sort_values(ascending=False, kind="stable")
    top_states = [
        {"state": state, "count": int(count)}
        for state, count in state_counts.head(TOP_STATES_LIMIT).items()
    ]

    months = pd.to_datetime(df["created_at"], utc=True).dt.month - 1
    month_counts = months.value_counts().sort_index()
    monthly_trend = [{"month": int(m), "count": int(c)} for m, c in month_counts.items()]

    for score in df["feasibility_score"]:
        distribution[category_for_score(score).value] += 1

    return {
        "total_assessments": int(len(df)),
        "average_feasibility_score": float(df["feasibility_score"].mean()),
        "total_potential_harvest": float(df["annual_harvest"].sum()),
        "top_states": top_states,
        "monthly_trend": monthly_trend,
        "feasibility_distribution": distribution,
    }


def build_structure_table(result: AssessmentResult) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = []
    for rec in result.structures:
        rows.append({
            "type": rec.type.value,
            "priority": rec.priority,
            "suitability": rec.suitability,
            "capacity_l": rec.capacity,
            "cost": rec.cost,
            "maintenance_frequency": rec.maintenance_frequency,
            "expected_life_years": rec.expected_life,
            "description": rec.description,
        })
    return pd.DataFrame(rows)


def build_subsidy_table(result: AssessmentResult) -> pd.DataFrame:
    total_cost = result.economics.total_cost
    rows = [
        {
            "scheme": s.scheme,
            "authority": s.authority,
            "amount": s.amount,
            "share_of_cost_pct": s.amount / total_cost * 100 if total_cost else 0.0,
            "application_process": s.application_process,
        }
        for s in result.economics.subsidies
    ]
    return pd.DataFrame(rows)


def _format_payback(payback_years) -> str:
    if payback_years is None:
        return NOT_RECOVERABLE
    return f"{payback_years:.1f} yrs"


def build_result_summary(result: AssessmentResult) -> Dict[str, Any]:
    """Flat headline figures for the report header"""
    econ = result.economics
    top = result.structures[0]
    return {
        "feasibility_score": result.feasibility.score,
        "feasibility_category": result.feasibility.category.value,
        "annual_harvest_l": result.potential.annual_harvest,
        "daily_average_l": result.potential.daily_average,
        "annual_rainfall_mm": result.rainfall.annual,
        "aquifer_type": result.aquifer.type,
        "top_structure": top.type.value,
        "structure_count": len(result.structures),
        "total_cost": econ.total_cost,
        "annual_savings": econ.annual_savings,
        "payback": _format_payback(econ.payback_period),
        "roi_pct": econ.roi,
        "co2_saved_kg": result.environmental.co2_saved,
    }
