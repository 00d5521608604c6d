"""
Region profile resolution

Maps a free-text address to a rainfall profile and an aquifer profile.

Matching rule: the lowercased address is scanned against the city keyword
table in table order and the FIRST keyword contained in the address wins.
An address mentioning two cities ("Pune Road, Mumbai") therefore resolves to
whichever city appears first in the table (mumbai), not in the address.
No match gives the default profile (800 mm / 600 mm / 0.75, alluvial).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .reference_tables import AquiferProfile, RainfallProfile, ReferenceTables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionProfile:
    rainfall: RainfallProfile
    aquifer: AquiferProfile
    matched_keyword: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.matched_keyword is None


class RegionDataProvider(Protocol):
    """Anything that can turn an address into climate + hydrogeology data"""

    def resolve(self, address: str) -> RegionProfile: ...


class TableRegionProfileResolver:
    """Keyword-table implementation of RegionDataProvider"""

    def __init__(self, tables: ReferenceTables):
        self.tables = tables

    def match_keyword(self, address: str) -> Optional[str]:
        city = (address or "").lower()
        for row in self.tables.rainfall_by_city:
            if row.keyword in city:
                return row.keyword
        return None

    def resolve(self, address: str) -> RegionProfile:
        keyword = self.match_keyword(address)
        if keyword is None:
            logger.debug("No city keyword in address %r; using default region profile", address)
            rainfall = self.tables.default_rainfall
        else:
            rainfall = next(r.profile for r in self.tables.rainfall_by_city if r.keyword == keyword)

        aquifer_type = self.tables.aquifer_type_for(keyword)
        return RegionProfile(
            rainfall=rainfall,
            aquifer=self.tables.aquifer_profile(aquifer_type),
            matched_keyword=keyword,
        )
