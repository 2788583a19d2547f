from typing import Protocol, List
from dataclasses import dataclass, field

# ----- Data shapes (thin & explicit) -----

@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    place_id: str
    is_partial_match: bool = False

@dataclass(frozen=True)
class RoofInsight:
    total_area_m2: float
    total_area_ft2: int           # round(total_area_m2 * 10.7639)
    segment_areas_m2: List[float] = field(default_factory=list)

# ----- Protocols (interfaces) -----

class GeocodingClient(Protocol):
    async def resolve(self, address: str) -> GeocodeResult: ...

class RoofInsightClient(Protocol):
    async def fetch_roof_insight(self, lat: float, lng: float) -> RoofInsight: ...
