import pytest

from rtrwh.engine import AssessmentEngine
from rtrwh.models import (
    AssessmentInput,
    LocationInfo,
    Preferences,
    PropertyInfo,
    RoofType,
)
from rtrwh.reference_tables import ReferenceTables, load_reference_tables


@pytest.fixture(scope="session")
def raw_tables():
    return load_reference_tables()


@pytest.fixture(scope="session")
def tables(raw_tables):
    return ReferenceTables(raw_tables)


@pytest.fixture
def engine(tables):
    return AssessmentEngine(tables)


@pytest.fixture
def make_input():
    """Factory for inputs; defaults match the wizard's initial form values"""
    def _make(
        address="12 MG Road, Bangalore",
        roof_area=100.0,
        roof_type=RoofType.CONCRETE,
        available_space=20.0,
        dwellers=4,
        water_consumption=500.0,
        budget=50000.0,
        state="Karnataka",
    ):
        return AssessmentInput(
            location=LocationInfo(address=address, pincode="560001", state=state, district=""),
            property=PropertyInfo(
                roof_area=roof_area,
                roof_type=roof_type,
                available_space=available_space,
                dwellers=dwellers,
                water_consumption=water_consumption,
            ),
            preferences=Preferences(budget=budget),
        )
    return _make
