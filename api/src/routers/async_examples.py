"""Async endpoint example: waiting without blocking the event loop."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from api.src.config import Settings
from api.src.dependencies import get_app_settings, get_tutorial_metrics
from api.src.models import DelayResponse
from shared.metrics import TutorialMetrics
from shared.tracing import trace_function

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Async"])


@trace_function("async_delay")
async def wait_for(seconds: float) -> float:
    """Sleep on the event loop and return the seconds waited."""
    await asyncio.sleep(seconds)
    return seconds


@router.get(
    "/async-delay",
    response_model=DelayResponse,
    summary="Async Delay",
)
async def read_delayed(
    seconds: float = Query(1.0, ge=0.0, description="Seconds to wait"),
    settings: Settings = Depends(get_app_settings),
    metrics: TutorialMetrics = Depends(get_tutorial_metrics),
) -> DelayResponse:
    """
    Wait asynchronously before answering.

    While this request sleeps, the server keeps handling other requests on
    the same event loop.
    """
    if seconds > settings.max_delay_seconds:
        logger.warning(
            "async_delay_rejected",
            seconds=seconds,
            max_delay_seconds=settings.max_delay_seconds,
        )
        raise HTTPException(
            status_code=422,
            detail=f"seconds must not exceed {settings.max_delay_seconds}",
        )

    waited = await wait_for(seconds)
    metrics.delay_seconds.observe(waited)

    logger.info("async_delay_completed", seconds=waited)
    return DelayResponse(
        message=f"Waited {waited} seconds asynchronously",
        delay_seconds=waited,
    )
