import logging
from fastapi import APIRouter, Depends, Request
from ..core.errors import EstimateError, InternalError
from ..core.metrics import ESTIMATE_OUTCOMES
from ..schemas import EstimateRequest, EstimateResponse, ErrorResponse
from ..services.estimate_service import EstimateService

logger = logging.getLogger(__name__)

router = APIRouter()

def service_dep(request: Request) -> EstimateService:
    # Clients are built once in create_app(); the service itself is stateless.
    return EstimateService(request.app.state.geocoder, request.app.state.roof_insights)

@router.post(
    "/estimate",
    response_model=EstimateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def post_estimate(
    body: EstimateRequest,
    svc: EstimateService = Depends(service_dep),
):
    try:
        payload = await svc.estimate(body)
    except EstimateError as exc:
        ESTIMATE_OUTCOMES.labels(outcome=exc.kind.tag).inc()
        raise
    except Exception as exc:
        ESTIMATE_OUTCOMES.labels(outcome="internal").inc()
        raise InternalError(f"Unexpected failure: {exc!r}") from exc
    ESTIMATE_OUTCOMES.labels(outcome="ok").inc()
    return payload
