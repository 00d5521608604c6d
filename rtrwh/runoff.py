from typing import Union

from .models import RoofType
from .reference_tables import ReferenceTables


def runoff_coefficient(tables: ReferenceTables, roof_type: Union[RoofType, str]) -> float:
    """
    Fraction of rainfall on the roof that becomes collectible runoff

    concrete 0.85, metal 0.90, tile 0.80, thatched 0.60; any other
    material gets the table default (0.75). Never raises.
    """
    key = getattr(roof_type, "value", roof_type)
    return tables.runoff_coefficient(str(key).lower())
