import itertools

import pytest

from rtrwh.engine import AssessmentEngine, calculate_assessment
from rtrwh.models import FeasibilityCategory, StructureType
from rtrwh.reference_tables import AquiferProfile, RainfallProfile
from rtrwh.region import RegionProfile


def test_default_region_household(engine, make_input):
    """Unknown town, 100 m² concrete roof, 20 m² free space, 500 L/day"""
    result = engine.calculate(make_input(address="Village Rampur, Bihar"))

    assert result.rainfall.annual == 800
    assert result.rainfall.post_monsoon == pytest.approx(120)
    assert result.rainfall.pre_monsoon == pytest.approx(40)

    assert result.potential.annual_harvest == pytest.approx(54400)
    assert result.potential.dry_month_supply == 3

    assert result.feasibility.score == 60
    assert result.feasibility.category == FeasibilityCategory.FAIR

    assert [s.type for s in result.structures] == [
        StructureType.STORAGE_TANK,
        StructureType.RECHARGE_PIT,
    ]
    assert result.economics.total_cost == pytest.approx(104340)
    assert not result.economics.is_recoverable

    assert result.aquifer.type == "alluvial"
    assert result.aquifer.depth == 15
    assert result.aquifer.recharge_capacity == pytest.approx(0.8 * 54400 / 365)

    assert result.environmental.co2_saved == pytest.approx(16.32)
    assert result.dimensions.recharge_pit.number_of_pits == 2


def test_mumbai_large_site(engine, make_input):
    result = engine.calculate(
        make_input(address="Bandra West, Mumbai", roof_area=200, available_space=30, state="Maharashtra")
    )

    assert result.potential.annual_harvest == pytest.approx(299200)
    assert result.feasibility.score == 100
    assert result.feasibility.category == FeasibilityCategory.EXCELLENT
    assert result.structures[0].type == StructureType.RECHARGE_PIT
    assert result.economics.total_cost == pytest.approx(289100)
    assert result.aquifer.type == "basalt"
    assert result.aquifer.quality == "excellent"


def test_recoverable_small_site(engine, make_input):
    result = engine.calculate(make_input(address="Village Rampur, Bihar", roof_area=60, available_space=5))

    assert result.feasibility.score == 53
    assert [s.type for s in result.structures] == [StructureType.STORAGE_TANK]
    assert result.economics.payback_period == pytest.approx(37000 / 522)
    assert result.economics.roi == pytest.approx(522 / 37000 * 100)


def test_unknown_roof_material_uses_default_coefficient(engine, make_input):
    result = engine.calculate(make_input(address="Village Rampur, Bihar", roof_type="asbestos"))
    assert result.potential.runoff_coefficient == pytest.approx(0.75)
    assert result.potential.annual_harvest == pytest.approx(100 * 800 * 0.75 * 0.8)


def test_calculation_is_idempotent(engine, make_input):
    inputs = make_input()
    assert engine.calculate(inputs) == engine.calculate(inputs)
    assert engine.calculate(inputs).to_dict() == calculate_assessment(inputs, engine.tables).to_dict()


def test_harvest_grows_with_roof_area(engine, make_input):
    harvests = [
        engine.calculate(make_input(roof_area=area)).potential.annual_harvest
        for area in (20, 50, 100, 150, 300)
    ]
    assert harvests == sorted(harvests)
    assert len(set(harvests)) == len(harvests)


def test_tank_suitability_grows_with_space(engine, make_input):
    suitabilities = [
        engine.calculate(make_input(available_space=space)).structure(StructureType.STORAGE_TANK).suitability
        for space in (0, 5, 20, 40, 100)
    ]
    assert suitabilities == sorted(suitabilities)


class _FixedRegion:
    """Region provider returning one profile regardless of address"""

    def __init__(self, profile):
        self.profile = profile
        self.addresses = []

    def resolve(self, address):
        self.addresses.append(address)
        return self.profile


def test_custom_region_provider(tables, make_input):
    profile = RegionProfile(
        rainfall=RainfallProfile(annual_mm=1500, monsoon_mm=1100, reliability=0.9),
        aquifer=AquiferProfile(type="laterite", depth_m=12, quality="good", recharge_rate=0.5, transmissivity=90),
        matched_keyword="goa",
    )
    provider = _FixedRegion(profile)
    engine = AssessmentEngine(tables, region_provider=provider)

    result = engine.calculate(make_input(address="Panaji, Goa"))

    assert provider.addresses == ["Panaji, Goa"]
    assert result.rainfall.annual == 1500
    assert result.rainfall.reliability_index == pytest.approx(0.9)
    assert result.aquifer.type == "laterite"
    assert result.potential.annual_harvest == pytest.approx(100 * 1500 * 0.85 * 0.8)


def test_result_serializes_to_camel_case(engine, make_input):
    payload = engine.calculate(make_input()).to_dict()

    assert set(payload) == {
        "feasibility", "rainfall", "potential", "aquifer",
        "structures", "economics", "environmental", "dimensions",
    }
    assert "annualHarvest" in payload["potential"]
    assert "rechargeCapacity" in payload["aquifer"]
    assert payload["structures"][0]["type"] in {t.value for t in StructureType}


@pytest.mark.parametrize(
    "address, roof_area, space, consumption",
    list(itertools.product(
        ["Koramangala, Bangalore", "Salt Lake, Kolkata", "Malviya Nagar, Jaipur", "Village Rampur"],
        [25, 100, 240],
        [0, 12, 40],
        [80, 600],
    )),
)
def test_result_invariants(engine, make_input, address, roof_area, space, consumption):
    result = engine.calculate(
        make_input(address=address, roof_area=roof_area, available_space=space, water_consumption=consumption)
    )

    assert 35 <= result.feasibility.score <= 100
    assert len(result.feasibility.reasons) == 4

    types = [s.type for s in result.structures]
    assert StructureType.STORAGE_TANK in types
    assert (StructureType.RECHARGE_PIT in types) == (space > 10)
    assert (StructureType.RECHARGE_TRENCH in types) == (roof_area > 100)

    suitabilities = [s.suitability for s in result.structures]
    assert suitabilities == sorted(suitabilities, reverse=True)

    econ = result.economics
    assert econ.total_cost == pytest.approx(sum(s.cost for s in result.structures) + 10000)
    assert (econ.payback_period is None) == (econ.roi is None)
    if econ.is_recoverable:
        assert econ.payback_period > 0
        assert econ.roi > 0
    for subsidy in econ.subsidies:
        assert 0 <= subsidy.amount <= econ.total_cost

    dims = result.dimensions
    assert dims.storage_tank.diameter >= 1.5
    assert dims.recharge_pit.diameter >= 1.0
    assert dims.recharge_pit.number_of_pits >= 1
    assert min(dims.recharge_trench.length, dims.recharge_trench.width, dims.recharge_trench.depth) > 0
