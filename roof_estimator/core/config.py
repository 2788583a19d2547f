import os
from dotenv import load_dotenv
from pydantic import BaseModel

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
GOOGLE_SOLAR_URL = "https://solar.googleapis.com/v1/buildingInsights:findClosest"

class Settings(BaseModel):
    # Credential shared by the geocoding and solar providers
    GOOGLE_MAPS_KEY: str | None = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Data providers
    GEO_PROVIDER: str = "google"      # google | mock
    GEOCODE_URL: str = GOOGLE_GEOCODE_URL
    SOLAR_PROVIDER: str = "google"    # google | mock
    SOLAR_URL: str = GOOGLE_SOLAR_URL
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # CORS
    ALLOW_ORIGINS: str = "*"

    # Metrics
    PROMETHEUS_ENABLED: bool = True

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """
        Build settings once at startup. A local .env is honoured when reading
        the real process environment.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            GOOGLE_MAPS_KEY=environ.get("GOOGLE_MAPS_KEY") or None,
            HOST=environ.get("HOST", "0.0.0.0"),
            PORT=int(environ.get("PORT") or "3000"),
            LOG_LEVEL=environ.get("LOG_LEVEL", "INFO").upper(),
            GEO_PROVIDER=environ.get("GEO_PROVIDER", "google").lower(),
            GEOCODE_URL=environ.get("GEOCODE_URL", GOOGLE_GEOCODE_URL),
            SOLAR_PROVIDER=environ.get("SOLAR_PROVIDER", "google").lower(),
            SOLAR_URL=environ.get("SOLAR_URL", GOOGLE_SOLAR_URL),
            HTTP_TIMEOUT_SECONDS=float(environ.get("HTTP_TIMEOUT_SECONDS", "15")),
            ALLOW_ORIGINS=environ.get("ALLOW_ORIGINS", "*"),
            PROMETHEUS_ENABLED=environ.get("PROMETHEUS_ENABLED", "true").lower() == "true",
        )
