"""
Physical sizing for each structure kind

All four kinds are sized regardless of which ones were recommended, so the
report can show the full set.
"""

from __future__ import annotations

import math

from .models import (
    FirstFlushDiverterDimensions,
    RechargePitDimensions,
    RechargeTrenchDimensions,
    StorageTankDimensions,
    StructureDimensions,
)
from .structures import storage_tank_capacity

# ============================================================================
# SIZING CONSTANTS
# ============================================================================

TANK_HEIGHT_M = 2.0
TANK_MIN_DIAMETER_M = 1.5
TANK_RCC_THRESHOLD_L = 5000

PIT_DEPTH_M = 3.0
PIT_MIN_DIAMETER_M = 1.0
PIT_HARVEST_PER_PIT_L = 50000
PIT_FILTER_LAYERS = (
    "Coarse aggregate (40mm)",
    "Medium aggregate (20mm)",
    "Fine aggregate (10mm)",
    "Sand",
)

TRENCH_MIN_LENGTH_M = 10.0
TRENCH_WIDTH_M = 1.0
TRENCH_DEPTH_M = 1.5
TRENCH_SLOPE_PCT = 2.0

FIRST_FLUSH_MM = 2  # liters per m² of catchment
FIRST_FLUSH_LARGE_ROOF_M2 = 100


def size_storage_tank(annual_harvest_l: float, available_space_m2: float) -> StorageTankDimensions:
    """Cylinder of fixed 2 m height: volume (m³) = π r² h"""
    capacity = storage_tank_capacity(annual_harvest_l, available_space_m2)
    diameter = math.sqrt((capacity / 1000) / (math.pi * TANK_HEIGHT_M))
    return StorageTankDimensions(
        capacity=capacity,
        diameter=max(TANK_MIN_DIAMETER_M, diameter),
        height=TANK_HEIGHT_M,
        material="RCC with polymer lining" if capacity > TANK_RCC_THRESHOLD_L else "HDPE",
    )


def size_recharge_pit(annual_harvest_l: float) -> RechargePitDimensions:
    return RechargePitDimensions(
        depth=PIT_DEPTH_M,
        diameter=max(PIT_MIN_DIAMETER_M, math.sqrt(annual_harvest_l / 10000)),
        filter_layers=PIT_FILTER_LAYERS,
        number_of_pits=math.ceil(annual_harvest_l / PIT_HARVEST_PER_PIT_L),
    )


def size_recharge_trench(roof_area_m2: float) -> RechargeTrenchDimensions:
    return RechargeTrenchDimensions(
        length=max(TRENCH_MIN_LENGTH_M, roof_area_m2 / 10),
        width=TRENCH_WIDTH_M,
        depth=TRENCH_DEPTH_M,
        slope=TRENCH_SLOPE_PCT,
    )


def size_first_flush_diverter(roof_area_m2: float) -> FirstFlushDiverterDimensions:
    return FirstFlushDiverterDimensions(
        capacity=roof_area_m2 * FIRST_FLUSH_MM,
        diameter=150 if roof_area_m2 > FIRST_FLUSH_LARGE_ROOF_M2 else 100,
    )


def calculate_dimensions(
    *,
    annual_harvest_l: float,
    roof_area_m2: float,
    available_space_m2: float,
) -> StructureDimensions:
    return StructureDimensions(
        storage_tank=size_storage_tank(annual_harvest_l, available_space_m2),
        recharge_pit=size_recharge_pit(annual_harvest_l),
        recharge_trench=size_recharge_trench(roof_area_m2),
        first_flush_diverter=size_first_flush_diverter(roof_area_m2),
    )
