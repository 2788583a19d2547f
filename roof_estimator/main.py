import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from .routers.estimate import router as estimate_router

# Core modules
from .core.config import Settings
from .core.errors import GENERIC_FAILURE, ErrorKind, EstimateError
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import ESTIMATE_OUTCOMES, PromMiddleware, metrics_endpoint
from .data.base import GeocodingClient, RoofInsightClient
from .data.geocode_client import geocode_client
from .data.solar_client import solar_client
from .services.estimate_service import MISSING_FIELDS

INVALID_JSON = "Request body must be valid JSON"

logger = logging.getLogger(__name__)

async def estimate_error_handler(request: Request, exc: EstimateError):
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.kind.name, exc.detail, exc_info=exc.__cause__ or exc)
    else:
        logger.warning("%s: %s", exc.kind.name, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Body shape errors are client errors like any other validation failure,
    reported with the same {"error": ...} envelope.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p != "body"]
    if first.get("type") == "json_invalid":
        message = INVALID_JSON
    elif first.get("type") == "missing" or not loc:
        message = MISSING_FIELDS
    else:
        # Union members add their own loc segment; the field name comes first
        message = f"Invalid value for {loc[0]}"
    logger.warning("request validation failed: %s", errors)
    ESTIMATE_OUTCOMES.labels(outcome="validation").inc()
    return JSONResponse(status_code=400, content={"error": message})

async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything that escapes the route (e.g. response validation) still gets the envelope."""
    logger.error("INTERNAL: unhandled %s", type(exc).__name__, exc_info=exc)
    ESTIMATE_OUTCOMES.labels(outcome=ErrorKind.INTERNAL.tag).inc()
    return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE})

def create_app(
    settings: Settings | None = None,
    geocoder: GeocodingClient | None = None,
    roof_insights: RoofInsightClient | None = None,
) -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    Settings are read once here; provider clients may be injected.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.LOG_LEVEL)  # JSON logs + request-id filter

    app = FastAPI(
        title="Roof Estimator API",
        version="1.0.0",
        description="Geocodes an address, measures its roof via building insights, and prices it per square foot.",
    )
    app.state.settings = settings
    app.state.geocoder = geocoder or geocode_client(settings)
    app.state.roof_insights = roof_insights or solar_client(settings)

    if not settings.GOOGLE_MAPS_KEY and (settings.GEO_PROVIDER != "mock" or settings.SOLAR_PROVIDER != "mock"):
        logger.warning("GOOGLE_MAPS_KEY is not set; estimates will fail with a configuration error")

    # CORS: allow a static site to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    app.add_exception_handler(EstimateError, estimate_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Meta routes
    @app.get("/api/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(estimate_router, prefix="/api", tags=["estimate"])

    return app

def run():
    """Console entry point: serve with uvicorn on HOST:PORT."""
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)
