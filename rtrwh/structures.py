"""
Structure recommendation

Proposes the physical structures for a site and ranks them:

- storage_tank     always (priority 1)
- recharge_pit     when available space > 10 m² (priority 2)
- recharge_trench  when roof area > 100 m² (priority 3)

The final list is sorted by suitability, highest first. Python's sort is
stable, so equal suitabilities keep priority order.
"""

from __future__ import annotations

from typing import List, Tuple

from .models import StructureRecommendation, StructureType
from .reference_tables import ReferenceTables

RECHARGE_PIT_MIN_SPACE_M2 = 10
RECHARGE_TRENCH_MIN_ROOF_M2 = 100

# Share of annual harvest each structure is sized to hold or infiltrate
TANK_HARVEST_SHARE = 0.3
PIT_HARVEST_SHARE = 0.7
TRENCH_HARVEST_SHARE = 0.5
TANK_LITERS_PER_M2 = 1000

TANK_MAX_SUITABILITY = 95
PIT_MAX_SUITABILITY = 90
TRENCH_MAX_SUITABILITY = 85


def storage_tank_capacity(annual_harvest_l: float, available_space_m2: float) -> float:
    """30% of the annual harvest, limited to 1 m³ (1000 L) per m² of free ground"""
    return min(annual_harvest_l * TANK_HARVEST_SHARE, available_space_m2 * TANK_LITERS_PER_M2)


def storage_tank_cost(tables: ReferenceTables, capacity_l: float) -> float:
    for tier in tables.storage_tank_tiers:
        if tier.covers(capacity_l):
            return tier.cost(capacity_l)
    # Unreachable: the schedule always ends with an open-ended tier
    raise ValueError(f"No storage tank cost tier covers {capacity_l} L")


def _recommendation(
    tables: ReferenceTables,
    structure_type: StructureType,
    *,
    priority: int,
    suitability: float,
    capacity: float,
    cost: float,
) -> StructureRecommendation:
    entry = tables.structure_entry(structure_type)
    return StructureRecommendation(
        type=structure_type,
        priority=priority,
        suitability=suitability,
        description=entry.description,
        capacity=capacity,
        cost=cost,
        maintenance_frequency=entry.maintenance_frequency,
        expected_life=entry.expected_life_years,
        benefits=entry.benefits,
    )


def _storage_tank(tables: ReferenceTables, annual_harvest_l: float, available_space_m2: float) -> StructureRecommendation:
    capacity = storage_tank_capacity(annual_harvest_l, available_space_m2)
    return _recommendation(
        tables,
        StructureType.STORAGE_TANK,
        priority=1,
        suitability=min(TANK_MAX_SUITABILITY, 60 + available_space_m2 / 2),
        capacity=capacity,
        cost=storage_tank_cost(tables, capacity),
    )


def _recharge_pit(tables: ReferenceTables, annual_harvest_l: float) -> StructureRecommendation:
    base = tables.get("structure_costs", "recharge_pit_base_cost")
    per_kl = tables.get("structure_costs", "recharge_pit_cost_per_kl_harvest")
    return _recommendation(
        tables,
        StructureType.RECHARGE_PIT,
        priority=2,
        suitability=min(PIT_MAX_SUITABILITY, 50 + annual_harvest_l / 10000),
        capacity=annual_harvest_l * PIT_HARVEST_SHARE,
        cost=base + (annual_harvest_l / 1000) * per_kl,
    )


def _recharge_trench(tables: ReferenceTables, annual_harvest_l: float, roof_area_m2: float) -> StructureRecommendation:
    base = tables.get("structure_costs", "recharge_trench_base_cost")
    per_m2 = tables.get("structure_costs", "recharge_trench_cost_per_sqm_roof")
    return _recommendation(
        tables,
        StructureType.RECHARGE_TRENCH,
        priority=3,
        suitability=min(TRENCH_MAX_SUITABILITY, 40 + roof_area_m2 / 10),
        capacity=annual_harvest_l * TRENCH_HARVEST_SHARE,
        cost=base + roof_area_m2 * per_m2,
    )


def recommend_structures(
    tables: ReferenceTables,
    *,
    annual_harvest_l: float,
    roof_area_m2: float,
    available_space_m2: float,
) -> Tuple[StructureRecommendation, ...]:
    structures: List[StructureRecommendation] = [
        _storage_tank(tables, annual_harvest_l, available_space_m2)
    ]

    if available_space_m2 > RECHARGE_PIT_MIN_SPACE_M2:
        structures.append(_recharge_pit(tables, annual_harvest_l))

    if roof_area_m2 > RECHARGE_TRENCH_MIN_ROOF_M2:
        structures.append(_recharge_trench(tables, annual_harvest_l, roof_area_m2))

    return tuple(sorted(structures, key=lambda s: s.suitability, reverse=True))
