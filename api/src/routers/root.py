"""Root router: the tutorial's Hello World endpoint."""

import structlog
from fastapi import APIRouter

from api.src.models import MessageResponse

logger = structlog.get_logger(__name__)

HELLO_MESSAGE = "Hello World from FastAPI"

router = APIRouter(tags=["Hello World"])


@router.get(
    "/",
    response_model=MessageResponse,
    summary="Hello World",
)
async def read_root() -> MessageResponse:
    """Return the greeting shown in the tutorial's first example."""
    logger.debug("hello_world_requested")
    return MessageResponse(message=HELLO_MESSAGE)
