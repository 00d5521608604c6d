"""
Assessment Records

Immutable input and result records for the RTRWH assessment engine.

KEY PRINCIPLE: Records are VALUES. Every record is a frozen dataclass, every
collection inside a record is a tuple, and nothing is mutated after the engine
builds it. `to_dict()` produces the camelCase shape the report layer and the
assessment store serialize.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, Union


class RoofType(Enum):
    """Roof catchment materials with a tabulated runoff coefficient"""
    CONCRETE = "concrete"
    METAL = "metal"
    TILE = "tile"
    THATCHED = "thatched"


class MaintenanceLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PrimaryUse(Enum):
    DRINKING = "drinking"
    DOMESTIC = "domestic"
    IRRIGATION = "irrigation"
    GROUNDWATER_RECHARGE = "groundwater_recharge"


class FeasibilityCategory(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class StructureType(Enum):
    """Physical structures the recommender can propose"""
    STORAGE_TANK = "storage_tank"
    RECHARGE_PIT = "recharge_pit"
    RECHARGE_TRENCH = "recharge_trench"


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class InvalidAssessmentInput(ValueError):
    """Raised when an input record cannot be assessed; carries every problem found"""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid assessment input: " + "; ".join(self.problems))


def _enum_or_default(enum_cls: Type[Enum], raw: Any, default: Enum) -> Enum:
    # Preferences are informational; unknown values fall back to the default
    try:
        return enum_cls(str(raw).lower())
    except ValueError:
        return default


# ============================================================================
# INPUT
# ============================================================================

@dataclass(frozen=True)
class LocationInfo:
    """Where the site is. Coordinates are carried but unused by the engine."""
    address: str
    pincode: str = ""
    state: str = ""
    district: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "pincode": self.pincode,
            "state": self.state,
            "district": self.district,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class PropertyInfo:
    """
    Building and household figures

    Attributes:
        roof_area: Catchment area in m²
        roof_type: RoofType or a raw material string (unknown materials fall
            back to the default runoff coefficient)
        building_height: meters
        available_space: m² of ground available for tanks and recharge works
        dwellers: number of people in the household
        water_consumption: household demand in liters/day
    """
    roof_area: float
    roof_type: Union[RoofType, str]
    available_space: float
    dwellers: int
    water_consumption: float
    building_height: float = 3.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roofArea": self.roof_area,
            "roofType": _enum_value(self.roof_type),
            "buildingHeight": self.building_height,
            "availableSpace": self.available_space,
            "dwellers": self.dwellers,
            "waterConsumption": self.water_consumption,
        }


@dataclass(frozen=True)
class Preferences:
    """Owner preferences. Informational only; the engine does not score them."""
    budget: float = 0.0
    maintenance_level: MaintenanceLevel = MaintenanceLevel.MEDIUM
    primary_use: PrimaryUse = PrimaryUse.DOMESTIC

    def to_dict(self) -> Dict[str, Any]:
        return {
            "budget": self.budget,
            "maintenanceLevel": _enum_value(self.maintenance_level),
            "primaryUse": _enum_value(self.primary_use),
        }


@dataclass(frozen=True)
class AssessmentInput:
    location: LocationInfo
    property: PropertyInfo
    preferences: Preferences = field(default_factory=Preferences)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AssessmentInput":
        """
        Build an input record from the wizard's nested camelCase payload

        Args:
            payload: {"location": {...}, "property": {...}, "preferences": {...}}

        Returns:
            AssessmentInput (range checks are left to validate_assessment_input)

        Raises:
            InvalidAssessmentInput: if a numeric field cannot be read as a number
        """
        loc = payload.get("location", {}) or {}
        prop = payload.get("property", {}) or {}
        prefs = payload.get("preferences", {}) or {}
        problems: List[str] = []

        def number(section: Dict[str, Any], key: str, default: float) -> float:
            raw = section.get(key, default)
            if isinstance(raw, bool):
                problems.append(f"{key} must be a number (got {raw!r})")
                return default
            try:
                return float(raw)
            except (TypeError, ValueError):
                problems.append(f"{key} must be a number (got {raw!r})")
                return default

        # Whole numbers become int; fractional values stay float so validation rejects them
        dwellers: Any = number(prop, "dwellers", 0)
        if float(dwellers).is_integer():
            dwellers = int(dwellers)

        raw_roof = str(prop.get("roofType", RoofType.CONCRETE.value)).lower()
        known_roofs = {r.value: r for r in RoofType}

        inputs = cls(
            location=LocationInfo(
                address=str(loc.get("address", "")),
                pincode=str(loc.get("pincode", "")),
                state=str(loc.get("state", "")),
                district=str(loc.get("district", "")),
                latitude=number(loc, "latitude", 0.0) if loc.get("latitude") is not None else 0.0,
                longitude=number(loc, "longitude", 0.0) if loc.get("longitude") is not None else 0.0,
            ),
            property=PropertyInfo(
                roof_area=number(prop, "roofArea", 0.0),
                roof_type=known_roofs.get(raw_roof, raw_roof),
                building_height=number(prop, "buildingHeight", 3.0),
                available_space=number(prop, "availableSpace", 0.0),
                dwellers=dwellers,
                water_consumption=number(prop, "waterConsumption", 0.0),
            ),
            preferences=Preferences(
                budget=number(prefs, "budget", 0.0),
                maintenance_level=_enum_or_default(
                    MaintenanceLevel, prefs.get("maintenanceLevel"), MaintenanceLevel.MEDIUM
                ),
                primary_use=_enum_or_default(PrimaryUse, prefs.get("primaryUse"), PrimaryUse.DOMESTIC),
            ),
        )
        if problems:
            raise InvalidAssessmentInput(problems)
        return inputs

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location.to_dict(),
            "property": self.property.to_dict(),
            "preferences": self.preferences.to_dict(),
        }


# ============================================================================
# RESULT COMPONENTS
# ============================================================================

@dataclass(frozen=True)
class Feasibility:
    score: int
    category: FeasibilityCategory
    reasons: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "category": self.category.value,
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class RainfallSummary:
    """Seasonal rainfall split in mm"""
    annual: float
    monsoon: float
    post_monsoon: float
    pre_monsoon: float
    reliability_index: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "annual": self.annual,
            "monsoon": self.monsoon,
            "postMonsoon": self.post_monsoon,
            "preMonsoon": self.pre_monsoon,
            "reliabilityIndex": self.reliability_index,
        }


@dataclass(frozen=True)
class HarvestPotential:
    """
    Harvestable volumes in liters

    dry_month_supply counts the 30-day months of household demand the annual
    harvest could cover.
    """
    annual_harvest: float
    daily_average: float
    peak_month_harvest: float
    dry_month_supply: int
    runoff_coefficient: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "annualHarvest": self.annual_harvest,
            "dailyAverage": self.daily_average,
            "peakMonthHarvest": self.peak_month_harvest,
            "dryMonthSupply": self.dry_month_supply,
            "runoffCoefficient": self.runoff_coefficient,
        }


@dataclass(frozen=True)
class AquiferSummary:
    type: str
    depth: float
    quality: str
    recharge_capacity: float  # liters/day
    transmissivity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "depth": self.depth,
            "quality": self.quality,
            "rechargeCapacity": self.recharge_capacity,
            "transmissivity": self.transmissivity,
        }


@dataclass(frozen=True)
class StructureRecommendation:
    type: StructureType
    priority: int
    suitability: float
    description: str
    capacity: float  # liters
    cost: float
    maintenance_frequency: str
    expected_life: int  # years
    benefits: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "priority": self.priority,
            "suitability": self.suitability,
            "description": self.description,
            "capacity": self.capacity,
            "cost": self.cost,
            "maintenanceFrequency": self.maintenance_frequency,
            "expectedLife": self.expected_life,
            "benefits": list(self.benefits),
        }


@dataclass(frozen=True)
class SubsidyInfo:
    scheme: str
    authority: str
    amount: float
    eligibility: Tuple[str, ...]
    application_process: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "authority": self.authority,
            "amount": self.amount,
            "eligibility": list(self.eligibility),
            "applicationProcess": self.application_process,
        }


@dataclass(frozen=True)
class Economics:
    """
    Installation cost and annual cash flows

    payback_period and roi are None when the annual net benefit
    (annual_savings - maintenance_cost) is zero or negative: the installation
    never pays for itself.
    """
    total_cost: float
    annual_savings: float
    payback_period: Optional[float]
    roi: Optional[float]
    maintenance_cost: float
    subsidies: Tuple[SubsidyInfo, ...]

    @property
    def net_annual_benefit(self) -> float:
        return self.annual_savings - self.maintenance_cost

    @property
    def is_recoverable(self) -> bool:
        return self.payback_period is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCost": self.total_cost,
            "annualSavings": self.annual_savings,
            "paybackPeriod": self.payback_period,
            "roi": self.roi,
            "maintenanceCost": self.maintenance_cost,
            "subsidies": [s.to_dict() for s in self.subsidies],
        }


@dataclass(frozen=True)
class EnvironmentalImpact:
    co2_saved: float  # kg/yr
    energy_saved: float  # kWh/yr
    groundwater_recharged: float  # L/yr
    community_impact: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "co2Saved": self.co2_saved,
            "energySaved": self.energy_saved,
            "groundwaterRecharged": self.groundwater_recharged,
            "communityImpact": self.community_impact,
        }


# ============================================================================
# DIMENSIONS
# ============================================================================

@dataclass(frozen=True)
class StorageTankDimensions:
    capacity: float  # liters
    diameter: float  # m
    height: float  # m
    material: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "diameter": self.diameter,
            "height": self.height,
            "material": self.material,
        }


@dataclass(frozen=True)
class RechargePitDimensions:
    depth: float  # m
    diameter: float  # m
    filter_layers: Tuple[str, ...]
    number_of_pits: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "depth": self.depth,
            "diameter": self.diameter,
            "filterLayers": list(self.filter_layers),
            "numberOfPits": self.number_of_pits,
        }


@dataclass(frozen=True)
class RechargeTrenchDimensions:
    length: float  # m
    width: float  # m
    depth: float  # m
    slope: float  # percent

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length,
            "width": self.width,
            "depth": self.depth,
            "slope": self.slope,
        }


@dataclass(frozen=True)
class FirstFlushDiverterDimensions:
    capacity: float  # liters
    diameter: int  # mm

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "diameter": self.diameter}


@dataclass(frozen=True)
class StructureDimensions:
    """Sizing for every structure kind, recommended or not"""
    storage_tank: StorageTankDimensions
    recharge_pit: RechargePitDimensions
    recharge_trench: RechargeTrenchDimensions
    first_flush_diverter: FirstFlushDiverterDimensions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "storageTank": self.storage_tank.to_dict(),
            "rechargePit": self.recharge_pit.to_dict(),
            "rechargeTrench": self.recharge_trench.to_dict(),
            "firstFlushDiverter": self.first_flush_diverter.to_dict(),
        }


# ============================================================================
# RESULT
# ============================================================================

@dataclass(frozen=True)
class AssessmentResult:
    feasibility: Feasibility
    rainfall: RainfallSummary
    potential: HarvestPotential
    aquifer: AquiferSummary
    structures: Tuple[StructureRecommendation, ...]
    economics: Economics
    environmental: EnvironmentalImpact
    dimensions: StructureDimensions

    def structure(self, structure_type: StructureType) -> Optional[StructureRecommendation]:
        for rec in self.structures:
            if rec.type == structure_type:
                return rec
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feasibility": self.feasibility.to_dict(),
            "rainfall": self.rainfall.to_dict(),
            "potential": self.potential.to_dict(),
            "aquifer": self.aquifer.to_dict(),
            "structures": [s.to_dict() for s in self.structures],
            "economics": self.economics.to_dict(),
            "environmental": self.environmental.to_dict(),
            "dimensions": self.dimensions.to_dict(),
        }
