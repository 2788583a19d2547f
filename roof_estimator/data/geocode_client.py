import logging
import time
from .base import GeocodingClient, GeocodeResult
from ..core.config import Settings
from ..core.errors import ConfigurationError, NotFoundError, UpstreamError
from ..core.metrics import UPSTREAM_LATENCY
from ..core.utils import fnv1a_32, seeded_rand
import httpx

logger = logging.getLogger(__name__)

class MockGeocode(GeocodingClient):
    """
    Mock geocoder that turns the address string into a stable lat/lng and
    place id. Entirely deterministic and free of external dependencies.
    """
    async def resolve(self, address: str) -> GeocodeResult:
        seed = fnv1a_32(address)
        # Continental US bounds for realism
        lat = 25.0 + seeded_rand(seed, 1)[0] * (49.0 - 25.0)
        lng = -124.0 + seeded_rand(seed+1, 1)[0] * (-67.0 + 124.0)
        return GeocodeResult(
            latitude=round(lat, 6),
            longitude=round(lng, 6),
            place_id=f"mock-{seed:08x}",
        )

class GoogleGeocode(GeocodingClient):
    """
    Google Geocoding API. Only a full, unambiguous match is accepted:
    partial matches are reported as not found so an estimate is never
    produced for the wrong parcel.
    """
    def __init__(self, api_key: str | None, url: str, timeout: float = 15.0,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def resolve(self, address: str) -> GeocodeResult:
        if not self.api_key:
            raise ConfigurationError("Google Maps API key not configured")

        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.url, params={"address": address, "key": self.api_key})
                r.raise_for_status()
                j = r.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(f"Geocoding API request failed: HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Geocoding API request failed: {exc!r}") from exc
        except ValueError as exc:
            raise UpstreamError("Geocoding API returned invalid JSON") from exc
        finally:
            UPSTREAM_LATENCY.labels(provider="geocode").observe(time.perf_counter() - start)

        results = j.get("results") or []
        if not results:
            logger.info("geocode returned no results: status=%s error=%s",
                        j.get("status"), j.get("error_message"))
            raise NotFoundError("Address not found")

        best = results[0]
        if best.get("partial_match"):
            raise NotFoundError("Address only partially matched")

        try:
            location = best["geometry"]["location"]
            return GeocodeResult(
                latitude=float(location["lat"]),
                longitude=float(location["lng"]),
                place_id=best.get("place_id") or "",
                is_partial_match=False,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(f"Geocoding API result malformed: {exc!r}") from exc

def geocode_client(settings: Settings) -> GeocodingClient:
    """
    Factory picks mock or google based on settings.
    """
    if settings.GEO_PROVIDER == "mock":
        return MockGeocode()
    return GoogleGeocode(settings.GOOGLE_MAPS_KEY, settings.GEOCODE_URL, settings.HTTP_TIMEOUT_SECONDS)
