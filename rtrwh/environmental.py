import math

from .models import EnvironmentalImpact
from .reference_tables import ReferenceTables


def calculate_environmental_impact(
    tables: ReferenceTables,
    *,
    annual_harvest_l: float,
    dwellers: int,
) -> EnvironmentalImpact:
    """CO2 and pumping/treatment energy avoided, and groundwater returned, per year"""
    beneficiaries = math.ceil(dwellers * tables.get("environmental_factors", "beneficiaries_per_dweller"))
    return EnvironmentalImpact(
        co2_saved=annual_harvest_l * tables.get("environmental_factors", "co2_kg_per_liter"),
        energy_saved=annual_harvest_l * tables.get("environmental_factors", "energy_kwh_per_liter"),
        groundwater_recharged=annual_harvest_l * tables.get("environmental_factors", "groundwater_share"),
        community_impact=(
            f"Benefiting {beneficiaries} people in the neighborhood through groundwater recharge"
        ),
    )
