import logging
import time
from typing import List
from .base import RoofInsightClient, RoofInsight
from ..core.config import Settings
from ..core.errors import ConfigurationError, DataUnavailableError, UpstreamError
from ..core.metrics import UPSTREAM_LATENCY
from ..core.utils import fnv1a_32, seeded_rand, square_meters_to_feet
import httpx

logger = logging.getLogger(__name__)

# Low-confidence imagery is never accepted
REQUIRED_QUALITY = "HIGH"

class MockSolar(RoofInsightClient):
    """
    Synthetic building insights keyed on rounded coordinates.
    Segment areas always sum to the whole-roof area.
    """
    async def fetch_roof_insight(self, lat: float, lng: float) -> RoofInsight:
        seed = fnv1a_32(f"{round(lat, 5)},{round(lng, 5)}")
        count = 1 + int(seeded_rand(seed, 1)[0] * 4)  # 1..4 planes
        weights = seeded_rand(seed+1, count)
        total_w = sum(weights) or 1.0
        total_m2 = round(80.0 + seeded_rand(seed+2, 1)[0] * 220.0, 2)
        segments = [round(total_m2 * w / total_w, 2) for w in weights]
        return RoofInsight(
            total_area_m2=total_m2,
            total_area_ft2=square_meters_to_feet(total_m2),
            segment_areas_m2=segments,
        )

class GoogleSolar(RoofInsightClient):
    """
    Google Solar API, closest building to a point.
    """
    def __init__(self, api_key: str | None, url: str, timeout: float = 15.0,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def fetch_roof_insight(self, lat: float, lng: float) -> RoofInsight:
        if not self.api_key:
            raise ConfigurationError("Google Maps API key not configured")

        params = {
            "location.latitude": str(lat),
            "location.longitude": str(lng),
            "requiredQuality": REQUIRED_QUALITY,
            "key": self.api_key,
        }
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.url, params=params)
                r.raise_for_status()
                bi = r.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(f"Solar API request failed: HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Solar API request failed: {exc!r}") from exc
        except ValueError as exc:
            raise UpstreamError("Solar API returned invalid JSON") from exc
        finally:
            UPSTREAM_LATENCY.labels(provider="solar").observe(time.perf_counter() - start)

        potential = bi.get("solarPotential") or {}
        whole = potential.get("wholeRoofStats") or {}
        total_m2 = whole.get("areaMeters2")
        if total_m2 is None:
            raise DataUnavailableError(f"Solar data not available for {lat},{lng}")

        try:
            segments: List[float] = [
                float(s["stats"]["areaMeters2"]) for s in potential.get("roofSegmentStats") or []
            ]
            total_m2 = float(total_m2)
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(f"Solar API roof stats malformed: {exc!r}") from exc

        logger.debug("roof insight at %s,%s: %.2f m2 in %d segments", lat, lng, total_m2, len(segments))
        return RoofInsight(
            total_area_m2=total_m2,
            total_area_ft2=square_meters_to_feet(total_m2),
            segment_areas_m2=segments,
        )

def solar_client(settings: Settings) -> RoofInsightClient:
    if settings.SOLAR_PROVIDER == "mock":
        return MockSolar()
    return GoogleSolar(settings.GOOGLE_MAPS_KEY, settings.SOLAR_URL, settings.HTTP_TIMEOUT_SECONDS)
