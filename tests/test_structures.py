import pytest

from rtrwh.models import StructureType
from rtrwh.structures import recommend_structures, storage_tank_capacity, storage_tank_cost


@pytest.mark.parametrize(
    "capacity, cost",
    [
        (500, 8000),
        (1000, 8000),
        (3000, 21000),
        (5000, 27000),
        (10000, 39500),
        (12000, 43500),
        (30000, 79500),
    ],
)
def test_storage_tank_cost_schedule(tables, capacity, cost):
    assert storage_tank_cost(tables, capacity) == pytest.approx(cost)


def test_storage_tank_capacity_limited_by_space():
    assert storage_tank_capacity(54400, 20) == pytest.approx(16320)
    assert storage_tank_capacity(32640, 5) == pytest.approx(5000)
    assert storage_tank_capacity(54400, 0) == 0


def test_tank_and_pit_for_default_household(tables):
    structures = recommend_structures(
        tables, annual_harvest_l=54400, roof_area_m2=100, available_space_m2=20
    )

    assert [s.type for s in structures] == [StructureType.STORAGE_TANK, StructureType.RECHARGE_PIT]

    tank, pit = structures
    assert tank.priority == 1
    assert tank.suitability == pytest.approx(70)
    assert tank.capacity == pytest.approx(16320)
    assert tank.cost == pytest.approx(52140)
    assert tank.expected_life == 15
    assert tank.maintenance_frequency == "Every 6 months"

    assert pit.priority == 2
    assert pit.suitability == pytest.approx(55.44)
    assert pit.capacity == pytest.approx(38080)
    assert pit.cost == pytest.approx(42200)
    assert pit.expected_life == 20


def test_small_site_only_gets_storage_tank(tables):
    """10 m² of space and a 100 m² roof are not enough for pit or trench"""
    structures = recommend_structures(
        tables, annual_harvest_l=32640, roof_area_m2=100, available_space_m2=10
    )
    assert [s.type for s in structures] == [StructureType.STORAGE_TANK]


def test_large_site_sorted_by_suitability(tables):
    structures = recommend_structures(
        tables, annual_harvest_l=299200, roof_area_m2=200, available_space_m2=30
    )

    assert [s.type for s in structures] == [
        StructureType.RECHARGE_PIT,
        StructureType.STORAGE_TANK,
        StructureType.RECHARGE_TRENCH,
    ]
    assert [s.priority for s in structures] == [2, 1, 3]
    assert [s.cost for s in structures] == pytest.approx([164600, 79500, 35000])

    trench = structures[2]
    assert trench.suitability == pytest.approx(60)
    assert trench.capacity == pytest.approx(149600)
    assert trench.expected_life == 25


def test_equal_suitability_keeps_priority_order(tables):
    # tank: 60 + 20/2 = 70, pit: 50 + 200000/10000 = 70
    structures = recommend_structures(
        tables, annual_harvest_l=200000, roof_area_m2=50, available_space_m2=20
    )
    assert structures[0].suitability == structures[1].suitability
    assert [s.type for s in structures] == [StructureType.STORAGE_TANK, StructureType.RECHARGE_PIT]


def test_suitability_caps(tables):
    structures = recommend_structures(
        tables, annual_harvest_l=1_000_000, roof_area_m2=1000, available_space_m2=200
    )
    by_type = {s.type: s for s in structures}
    assert by_type[StructureType.STORAGE_TANK].suitability == 95
    assert by_type[StructureType.RECHARGE_PIT].suitability == 90
    assert by_type[StructureType.RECHARGE_TRENCH].suitability == 85
