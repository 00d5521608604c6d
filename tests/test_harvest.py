import pytest

from rtrwh.harvest import annual_harvest_liters, calculate_harvest_potential, seasonal_rainfall
from rtrwh.reference_tables import RainfallProfile


def test_annual_harvest_formula(tables):
    """roof × rainfall × coefficient × 0.8 collection efficiency"""
    assert annual_harvest_liters(tables, 100, 800, 0.85) == pytest.approx(54400)
    assert annual_harvest_liters(tables, 200, 2200, 0.85) == pytest.approx(299200)


def test_harvest_potential_default_region(tables):
    potential = calculate_harvest_potential(
        tables,
        roof_area_m2=100,
        annual_rainfall_mm=800,
        coefficient=0.85,
        daily_consumption_l=500,
    )

    assert potential.annual_harvest == pytest.approx(54400)
    assert potential.daily_average == pytest.approx(54400 / 365)
    assert potential.peak_month_harvest == pytest.approx(21760)
    assert potential.dry_month_supply == 3
    assert potential.runoff_coefficient == pytest.approx(0.85)


def test_dry_month_supply_floors(tables):
    # 32640 / 15000 = 2.176
    potential = calculate_harvest_potential(
        tables,
        roof_area_m2=60,
        annual_rainfall_mm=800,
        coefficient=0.85,
        daily_consumption_l=500,
    )
    assert potential.dry_month_supply == 2
    assert isinstance(potential.dry_month_supply, int)


def test_zero_rainfall_gives_zero_harvest(tables):
    potential = calculate_harvest_potential(
        tables,
        roof_area_m2=100,
        annual_rainfall_mm=0,
        coefficient=0.85,
        daily_consumption_l=500,
    )
    assert potential.annual_harvest == 0
    assert potential.dry_month_supply == 0


def test_seasonal_rainfall_split(tables):
    summary = seasonal_rainfall(tables, RainfallProfile(annual_mm=2200, monsoon_mm=1800, reliability=0.85))

    assert summary.annual == 2200
    assert summary.monsoon == 1800
    assert summary.post_monsoon == pytest.approx(330)
    assert summary.pre_monsoon == pytest.approx(110)
    assert summary.reliability_index == pytest.approx(0.85)
