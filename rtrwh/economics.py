"""
Installation economics

    total_cost       = sum(structure costs) + fittings allowance
    annual_savings   = min(harvest, 80% of annual demand) * water rate
    maintenance_cost = 3% of total_cost per year
    net              = annual_savings - maintenance_cost

When net <= 0 the installation never recovers its cost: payback_period and
roi are reported as None instead of a negative or infinite figure.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from .models import Economics, StructureRecommendation, SubsidyInfo
from .reference_tables import ReferenceTables


def water_saved_liters(tables: ReferenceTables, annual_harvest_l: float, daily_consumption_l: float) -> float:
    # Water beyond the demand cap has no billing offset
    cap = tables.get("economics", "demand_offset_cap")
    return min(annual_harvest_l, daily_consumption_l * 365 * cap)


def payback_and_roi(total_cost: float, net_annual_benefit: float) -> Tuple[Optional[float], Optional[float]]:
    if net_annual_benefit <= 0 or total_cost <= 0:
        return None, None
    return total_cost / net_annual_benefit, net_annual_benefit / total_cost * 100


def calculate_subsidies(tables: ReferenceTables, total_cost: float) -> Tuple[SubsidyInfo, ...]:
    """Fixed schemes; eligibility text is informational and not checked against the input"""
    return tuple(
        SubsidyInfo(
            scheme=s.scheme,
            authority=s.authority,
            amount=min(total_cost * s.cost_share, s.cap),
            eligibility=s.eligibility,
            application_process=s.application_process,
        )
        for s in tables.subsidies
    )


def calculate_economics(
    tables: ReferenceTables,
    *,
    structures: Iterable[StructureRecommendation],
    annual_harvest_l: float,
    daily_consumption_l: float,
) -> Economics:
    fittings = tables.get("economics", "fittings_allowance")
    rate = tables.get("economics", "water_rate_per_liter")
    maintenance_pct = tables.get("economics", "maintenance_pct")

    total_cost = sum(s.cost for s in structures) + fittings
    annual_savings = water_saved_liters(tables, annual_harvest_l, daily_consumption_l) * rate
    maintenance_cost = total_cost * maintenance_pct
    payback, roi = payback_and_roi(total_cost, annual_savings - maintenance_cost)

    return Economics(
        total_cost=total_cost,
        annual_savings=annual_savings,
        payback_period=payback,
        roi=roi,
        maintenance_cost=maintenance_cost,
        subsidies=calculate_subsidies(tables, total_cost),
    )
