"""
Table-driven RTRWH assessment engine.

Single pass over one input record:

1. Resolve the region (rainfall + aquifer) and the roof runoff coefficient.
2. Compute harvest potential.
3. Score feasibility and recommend structures from the annual harvest.
4. Size all structures and compute economics from the recommendations.
5. Estimate environmental impact.
6. Assemble one immutable AssessmentResult.

The engine holds only read-only tables and a region provider, performs no
I/O, and returns equal results for equal inputs.
"""

from __future__ import annotations

import logging
from typing import Optional

from .dimensions import calculate_dimensions
from .economics import calculate_economics
from .environmental import calculate_environmental_impact
from .feasibility import score_feasibility
from .harvest import calculate_harvest_potential, seasonal_rainfall
from .models import AquiferSummary, AssessmentInput, AssessmentResult
from .reference_tables import ReferenceTables, default_reference_tables
from .region import RegionDataProvider, RegionProfile, TableRegionProfileResolver
from .runoff import runoff_coefficient
from .structures import recommend_structures

logger = logging.getLogger(__name__)


class AssessmentEngine:
    def __init__(
        self,
        tables: Optional[ReferenceTables] = None,
        region_provider: Optional[RegionDataProvider] = None,
    ):
        self.tables = tables or default_reference_tables()
        self.region_provider = region_provider or TableRegionProfileResolver(self.tables)

    # ------------------------------------------------------------------ public
    def resolve_region(self, inputs: AssessmentInput) -> RegionProfile:
        return self.region_provider.resolve(inputs.location.address)

    def calculate(self, inputs: AssessmentInput) -> AssessmentResult:
        region = self.resolve_region(inputs)
        return self.calculate_for_region(inputs, region)

    def calculate_for_region(self, inputs: AssessmentInput, region: RegionProfile) -> AssessmentResult:
        prop = inputs.property
        coefficient = runoff_coefficient(self.tables, prop.roof_type)

        potential = calculate_harvest_potential(
            self.tables,
            roof_area_m2=prop.roof_area,
            annual_rainfall_mm=region.rainfall.annual_mm,
            coefficient=coefficient,
            daily_consumption_l=prop.water_consumption,
        )
        harvest = potential.annual_harvest

        feasibility = score_feasibility(
            annual_rainfall_mm=region.rainfall.annual_mm,
            roof_area_m2=prop.roof_area,
            available_space_m2=prop.available_space,
            annual_harvest_l=harvest,
            daily_consumption_l=prop.water_consumption,
        )

        structures = recommend_structures(
            self.tables,
            annual_harvest_l=harvest,
            roof_area_m2=prop.roof_area,
            available_space_m2=prop.available_space,
        )
        dimensions = calculate_dimensions(
            annual_harvest_l=harvest,
            roof_area_m2=prop.roof_area,
            available_space_m2=prop.available_space,
        )
        economics = calculate_economics(
            self.tables,
            structures=structures,
            annual_harvest_l=harvest,
            daily_consumption_l=prop.water_consumption,
        )
        environmental = calculate_environmental_impact(
            self.tables,
            annual_harvest_l=harvest,
            dwellers=prop.dwellers,
        )

        logger.debug(
            "Assessed %r: harvest=%.1f L, score=%d, structures=%d",
            inputs.location.address,
            harvest,
            feasibility.score,
            len(structures),
        )

        return AssessmentResult(
            feasibility=feasibility,
            rainfall=seasonal_rainfall(self.tables, region.rainfall),
            potential=potential,
            aquifer=AquiferSummary(
                type=region.aquifer.type,
                depth=region.aquifer.depth_m,
                quality=region.aquifer.quality,
                recharge_capacity=region.aquifer.recharge_rate * harvest / 365,
                transmissivity=region.aquifer.transmissivity,
            ),
            structures=structures,
            economics=economics,
            environmental=environmental,
            dimensions=dimensions,
        )


def calculate_assessment(inputs: AssessmentInput, tables: Optional[ReferenceTables] = None) -> AssessmentResult:
    """Convenience wrapper: one engine, one calculation"""
    return AssessmentEngine(tables).calculate(inputs)
