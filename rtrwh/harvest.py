"""
Harvest potential

1 mm of rain on 1 m² is 1 liter, so roof_area × rainfall_mm gives liters of
gross rainfall. The collection efficiency (0.8) covers first-flush,
gutter and conveyance losses on top of the runoff coefficient.
"""

from __future__ import annotations

import math

from .models import HarvestPotential, RainfallSummary
from .reference_tables import RainfallProfile, ReferenceTables


def annual_harvest_liters(
    tables: ReferenceTables,
    roof_area_m2: float,
    annual_rainfall_mm: float,
    coefficient: float,
) -> float:
    efficiency = tables.get("harvest_factors", "collection_efficiency")
    return roof_area_m2 * annual_rainfall_mm * coefficient * efficiency


def calculate_harvest_potential(
    tables: ReferenceTables,
    *,
    roof_area_m2: float,
    annual_rainfall_mm: float,
    coefficient: float,
    daily_consumption_l: float,
) -> HarvestPotential:
    """
    Annual, daily-average and peak-month harvest plus dry-month coverage

    daily_consumption_l must be > 0; the validation boundary rejects zero
    demand before the engine runs.
    """
    annual = annual_harvest_liters(tables, roof_area_m2, annual_rainfall_mm, coefficient)
    peak_share = tables.get("harvest_factors", "peak_month_share")

    return HarvestPotential(
        annual_harvest=annual,
        daily_average=annual / 365,
        peak_month_harvest=annual * peak_share,
        dry_month_supply=math.floor(annual / (daily_consumption_l * 30)),
        runoff_coefficient=coefficient,
    )


def seasonal_rainfall(tables: ReferenceTables, profile: RainfallProfile) -> RainfallSummary:
    return RainfallSummary(
        annual=profile.annual_mm,
        monsoon=profile.monsoon_mm,
        post_monsoon=profile.annual_mm * tables.get("harvest_factors", "post_monsoon_share"),
        pre_monsoon=profile.annual_mm * tables.get("harvest_factors", "pre_monsoon_share"),
        reliability_index=profile.reliability,
    )
