from fastapi import APIRouter, Depends, Request, Response
from features.display.services.display_service import DisplayService
from features.weather.models.weather_types import DisplaySummaryResponse
from core.cache import SUMMARY_CACHE_NAMESPACE, cached, clear_cache
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/display",
    tags=["Display"],
    responses={
        503: {"description": "Display not generated yet or weather service unavailable"}
    }
)

def get_display_service(request: Request) -> DisplayService:
    """Get DisplayService instance from app state."""
    return request.app.state.display_service

def get_next_refresh(request: Request):
    scheduler = getattr(request.app.state, "scheduler", None)
    return scheduler.get_next_run_time() if scheduler else None

@router.get(
    "/svg",
    summary="Get the latest display image",
    description="Returns the most recently generated SVG for the e-ink display",
    response_class=Response,
    responses={200: {"content": {"image/svg+xml": {}}}}
)
async def get_display_svg(
    service: DisplayService = Depends(get_display_service)
) -> Response:
    """Get the latest generated SVG."""
    return Response(content=service.get_svg(), media_type="image/svg+xml")

@router.get(
    "/summary",
    response_model=DisplaySummaryResponse,
    summary="Get a summary of the displayed weather",
    description="Returns current conditions with wind, UV and air quality classifications, the forecast and alert status"
)
@cached(namespace=SUMMARY_CACHE_NAMESPACE)
async def get_display_summary(
    request: Request,
    service: DisplayService = Depends(get_display_service)
) -> DisplaySummaryResponse:
    """Get the values shown on the latest display image."""
    summary = service.get_summary()
    return summary.model_copy(update={"next_refresh": get_next_refresh(request)})

@router.post(
    "/refresh",
    response_model=DisplaySummaryResponse,
    summary="Regenerate the display now",
    description="Fetches fresh weather data and regenerates the display image immediately"
)
async def refresh_display(
    request: Request,
    service: DisplayService = Depends(get_display_service)
) -> DisplaySummaryResponse:
    """Fetch fresh data and regenerate the display."""
    summary = await service.handle_refresh_request()
    await clear_cache(namespace=SUMMARY_CACHE_NAMESPACE)
    return summary.model_copy(update={"next_refresh": get_next_refresh(request)})
