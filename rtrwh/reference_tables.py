"""
Reference Tables - Abstraction Layer for the Assessment Lookup Data

Provides validated, typed access to the fixed lookup tables the engine uses:
rainfall by city, aquifer type by city, aquifer profiles, runoff
coefficients, structure catalog and cost schedule, economics constants,
subsidy schemes and environmental factors.

KEY PRINCIPLE: Calculators ask for WHAT they need (semantic accessors), not
WHERE it lives in the JSON. Swapping the JSON for a real climate or
hydrogeology source only touches this module.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .models import StructureType

logger = logging.getLogger(__name__)

REFERENCE_TABLES_ENV = "RTRWH_REFERENCE_TABLES"
DEFAULT_TABLES_PATH = Path(__file__).resolve().parent / "data" / "reference_tables.json"

REQUIRED_SECTIONS = (
    "rainfall_by_city",
    "default_rainfall",
    "aquifer_by_city",
    "default_aquifer_type",
    "aquifer_profiles",
    "default_aquifer_profile",
    "runoff_coefficients",
    "default_runoff_coefficient",
    "harvest_factors",
    "structure_catalog",
    "structure_costs",
    "economics",
    "subsidies",
    "environmental_factors",
)


@dataclass(frozen=True)
class RainfallProfile:
    """Annual and monsoon rainfall (mm) with a 0-1 reliability index"""
    annual_mm: float
    monsoon_mm: float
    reliability: float


@dataclass(frozen=True)
class CityRainfall:
    keyword: str
    profile: RainfallProfile


@dataclass(frozen=True)
class AquiferProfile:
    """
    Hydrogeology of one aquifer type

    Attributes:
        type: aquifer name (e.g. 'basalt')
        depth_m: typical depth to water in meters
        quality: groundwater quality label
        recharge_rate: 0-1 share of harvest the aquifer can accept
        transmissivity: relative ease of lateral flow
    """
    type: str
    depth_m: float
    quality: str
    recharge_rate: float
    transmissivity: float


@dataclass(frozen=True)
class StructureCatalogEntry:
    structure_type: StructureType
    description: str
    maintenance_frequency: str
    expected_life_years: int
    benefits: Tuple[str, ...]


@dataclass(frozen=True)
class CostTier:
    """One band of the storage tank cost schedule: base + (capacity - start) * rate"""
    max_capacity_l: Optional[float]
    base_cost: float
    tier_start_l: float
    rate_per_l: float

    def covers(self, capacity_l: float) -> bool:
        return self.max_capacity_l is None or capacity_l <= self.max_capacity_l

    def cost(self, capacity_l: float) -> float:
        return self.base_cost + (capacity_l - self.tier_start_l) * self.rate_per_l


@dataclass(frozen=True)
class SubsidyScheme:
    scheme: str
    authority: str
    cost_share: float
    cap: float
    eligibility: Tuple[str, ...]
    application_process: str


class ReferenceTables:
    """
    Registry of all lookup tables with validation

    This is the SINGLE SOURCE OF TRUTH for reference data. Every calculator
    receives an instance instead of reading constants inline.

    Example:
        tables = ReferenceTables(load_reference_tables())
        coeff = tables.runoff_coefficient('metal')  # 0.90
        basalt = tables.aquifer_profile('basalt')
    """

    def __init__(self, tables: Dict[str, Any]):
        """
        Initialize registry from the raw tables

        Args:
            tables: Raw tables dict loaded from JSON
        """
        self._db = tables
        self._validate()
        self._rainfall = self._build_rainfall()
        self._aquifers = self._build_aquifers()
        self._catalog = self._build_catalog()
        self._tank_tiers = self._build_tank_tiers()
        self._subsidies = self._build_subsidies()

    # ---------------------------------------------------------------- builders
    def _validate(self) -> None:
        """Validate that all expected sections are present"""
        missing = [name for name in REQUIRED_SECTIONS if name not in self._db]
        if missing:
            raise ValueError(f"Reference table validation failed. Missing sections: {missing}")

        missing_structures = [
            s.value for s in StructureType if s.value not in self._db["structure_catalog"]
        ]
        if missing_structures:
            raise ValueError(
                f"Reference table validation failed. Missing structure catalog entries: {missing_structures}"
            )

    @staticmethod
    def _rainfall_profile(row: Dict[str, Any]) -> RainfallProfile:
        return RainfallProfile(
            annual_mm=float(row["annual_mm"]),
            monsoon_mm=float(row["monsoon_mm"]),
            reliability=float(row["reliability"]),
        )

    def _build_rainfall(self) -> Tuple[CityRainfall, ...]:
        # Order is preserved: the resolver takes the first keyword that matches.
        return tuple(
            CityRainfall(keyword=str(row["keyword"]).lower(), profile=self._rainfall_profile(row))
            for row in self._db["rainfall_by_city"]
        )

    @staticmethod
    def _aquifer(type_name: str, row: Dict[str, Any]) -> AquiferProfile:
        return AquiferProfile(
            type=type_name,
            depth_m=float(row["depth_m"]),
            quality=str(row["quality"]),
            recharge_rate=float(row["recharge_rate"]),
            transmissivity=float(row["transmissivity"]),
        )

    def _build_aquifers(self) -> Dict[str, AquiferProfile]:
        return {
            name: self._aquifer(name, row)
            for name, row in self._db["aquifer_profiles"].items()
        }

    def _build_catalog(self) -> Dict[StructureType, StructureCatalogEntry]:
        catalog = {}
        for structure_type in StructureType:
            row = self._db["structure_catalog"][structure_type.value]
            catalog[structure_type] = StructureCatalogEntry(
                structure_type=structure_type,
                description=row["description"],
                maintenance_frequency=row["maintenance_frequency"],
                expected_life_years=int(row["expected_life_years"]),
                benefits=tuple(row["benefits"]),
            )
        return catalog

    def _build_tank_tiers(self) -> Tuple[CostTier, ...]:
        tiers = []
        for row in self._db["structure_costs"]["storage_tank_tiers"]:
            max_cap = row.get("max_capacity_l")
            tiers.append(
                CostTier(
                    max_capacity_l=float(max_cap) if max_cap is not None else None,
                    base_cost=float(row["base_cost"]),
                    tier_start_l=float(row["tier_start_l"]),
                    rate_per_l=float(row["rate_per_l"]),
                )
            )
        if not tiers or tiers[-1].max_capacity_l is not None:
            raise ValueError("Storage tank cost schedule must end with an open-ended tier")
        return tuple(tiers)

    def _build_subsidies(self) -> Tuple[SubsidyScheme, ...]:
        return tuple(
            SubsidyScheme(
                scheme=row["scheme"],
                authority=row["authority"],
                cost_share=float(row["cost_share"]),
                cap=float(row["cap"]),
                eligibility=tuple(row["eligibility"]),
                application_process=row["application_process"],
            )
            for row in self._db["subsidies"]
        )

    # ----------------------------------------------------------------- region
    @property
    def rainfall_by_city(self) -> Tuple[CityRainfall, ...]:
        return self._rainfall

    @property
    def default_rainfall(self) -> RainfallProfile:
        return self._rainfall_profile(self._db["default_rainfall"])

    def aquifer_type_for(self, keyword: Optional[str]) -> str:
        """Aquifer type for a matched city keyword; unmapped keywords get the default type"""
        if keyword is None:
            return str(self._db["default_aquifer_type"])
        return str(self._db["aquifer_by_city"].get(keyword, self._db["default_aquifer_type"]))

    def aquifer_profile(self, aquifer_type: str) -> AquiferProfile:
        if aquifer_type in self._aquifers:
            return self._aquifers[aquifer_type]
        return self._aquifer(aquifer_type, self._db["default_aquifer_profile"])

    # ------------------------------------------------------------------ runoff
    def runoff_coefficient(self, roof_type: str) -> float:
        coefficients = self._db["runoff_coefficients"]
        return float(coefficients.get(roof_type, self._db["default_runoff_coefficient"]))

    # ------------------------------------------------------------- structures
    def structure_entry(self, structure_type: StructureType) -> StructureCatalogEntry:
        return self._catalog[structure_type]

    @property
    def storage_tank_tiers(self) -> Tuple[CostTier, ...]:
        return self._tank_tiers

    @property
    def subsidies(self) -> Tuple[SubsidyScheme, ...]:
        return self._subsidies

    # -------------------------------------------------------------- constants
    def get(self, section: str, key: str) -> float:
        """
        Get a numeric constant by section and key

        Args:
            section: e.g. 'economics', 'harvest_factors'
            key: constant name inside the section

        Returns:
            The constant as float

        Raises:
            KeyError: If the constant is not found
        """
        node = self._db.get(section)
        if not isinstance(node, dict) or key not in node:
            raise KeyError(f"Reference constant '{section}.{key}' not found")
        value = node[key]
        if isinstance(value, (dict, list)):
            raise ValueError(f"Reference constant '{section}.{key}' is not numeric")
        return float(value)

    def __repr__(self) -> str:
        return (
            f"ReferenceTables({len(self._rainfall)} cities, "
            f"{len(self._aquifers)} aquifer types, {len(self._subsidies)} subsidy schemes)"
        )


def load_reference_tables(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the raw reference tables JSON

    Resolution order: explicit `path`, then the RTRWH_REFERENCE_TABLES
    environment variable, then the packaged default.
    """
    env_path = os.environ.get(REFERENCE_TABLES_ENV)
    base = Path(path) if path else Path(env_path) if env_path else DEFAULT_TABLES_PATH
    logger.debug("Loading reference tables from %s", base)
    with open(base, "r", encoding="utf-8") as fp:
        return json.load(fp)


def default_reference_tables() -> ReferenceTables:
    return ReferenceTables(load_reference_tables())
