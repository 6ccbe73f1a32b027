from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from briefdesk.config.settings import Settings, get_settings
from briefdesk.jobs.daily import run_daily_update
from briefdesk.logging_config import get_logger, log_event
from briefdesk.schemas.run import RunResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "briefdesk is running"


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/run", response_model=RunResponse)
async def run_endpoint(settings: Settings = Depends(get_settings)) -> RunResponse:
    # Overlapping calls are not serialized; the last write wins.
    try:
        result = await run_daily_update(settings)
    except Exception as exc:
        log_event(logger, "error", "run_failed", {"error": str(exc)}, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to update data.", "error": str(exc)},
        ) from exc

    return RunResponse(
        message="Data updated and pushed.",
        last_updated=result.last_updated,
        degraded_sections=result.degraded_sections,
        publish=result.publish,
    )
