import logging
import math

from ..core.errors import ValidationError
from ..core.utils import format_usd, utc_timestamp
from ..data.base import GeocodingClient, RoofInsightClient
from ..schemas import EstimateRequest

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Address and cost per square foot are required"
NON_POSITIVE_COST = "Cost per square foot must be greater than 0"
INVALID_COST = "Invalid value for costPerSqFt"
COST_TOO_LARGE = "Cost per square foot is too large"

class EstimateService:
    """
    Orchestrates:
      validate → geocode (address → point) → solar (point → roof areas) → cost
    The two provider calls are strictly sequential; the second needs the
    coordinates of the first, and any failure aborts the whole request.
    """
    def __init__(self, geo: GeocodingClient, solar: RoofInsightClient):
        self.geo = geo
        self.solar = solar

    @staticmethod
    def validate(req: EstimateRequest) -> tuple[str, int | float]:
        address = (req.address or "").strip()
        if not address or req.costPerSqFt is None:
            raise ValidationError(MISSING_FIELDS)
        if isinstance(req.costPerSqFt, float) and not math.isfinite(req.costPerSqFt):
            raise ValidationError(INVALID_COST)
        if req.costPerSqFt <= 0:
            raise ValidationError(NON_POSITIVE_COST)
        return address, req.costPerSqFt

    async def estimate(self, req: EstimateRequest) -> dict:
        address, cost_per_sqft = self.validate(req)

        # 1) Geocode
        geo = await self.geo.resolve(address)

        # 2) Roof insight for the closest building
        roof = await self.solar.fetch_roof_insight(geo.latitude, geo.longitude)

        # 3) Price it
        total = roof.total_area_ft2 * cost_per_sqft
        if isinstance(total, float) and not math.isfinite(total):
            raise ValidationError(COST_TOO_LARGE)
        logger.info("estimate for place %s: %d ft2 at %s/ft2", geo.place_id, roof.total_area_ft2, cost_per_sqft)

        return {
            "address": req.address,
            "roofArea": roof.total_area_ft2,
            "roofAreaMeters": roof.total_area_m2,
            "roofSegments": list(roof.segment_areas_m2),
            "coordinates": {"lat": geo.latitude, "lng": geo.longitude},
            "placeId": geo.place_id,
            "costPerSqFt": cost_per_sqft,
            "totalCost": format_usd(total),
            "timestamp": utc_timestamp(),
        }
