"""
Items router for the path parameter, query parameter and request body
examples.

Provides REST API endpoints for:
- Reading an item ID from the path with an optional ``q`` query parameter
- Parsing and echoing an item sent as a JSON request body

Items are never stored; the endpoints show how FastAPI converts and
validates input.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status

from api.src.dependencies import get_client_ip, get_correlation_id, get_tutorial_metrics
from api.src.models import (
    ErrorResponse,
    Item,
    ItemCreatedResponse,
    ItemQueryResponse,
)
from shared.metrics import TutorialMetrics

logger = structlog.get_logger(__name__)

ITEM_CREATED_MESSAGE = "Item created successfully"

router = APIRouter(
    prefix="/items",
    tags=["Items"],
    responses={
        422: {"description": "Validation Error"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# PATH AND QUERY PARAMETERS
# ============================================================================


@router.get(
    "/{item_id}",
    response_model=ItemQueryResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Read Item",
    description="""
    Read an item ID from the path and an optional search query.

    **Path Parameters:**
    - item_id: Integer item identifier; non-integers are rejected with 422

    **Query Parameters:**
    - q: Optional free-text query, echoed back as "query"

    **Success Response (200):**
    - item_id: The parsed integer
    - query: The q value, omitted when q is not given
    """,
)
async def read_item(
    item_id: int,
    q: Optional[str] = Query(None, description="Optional search query"),
) -> ItemQueryResponse:
    """Echo the parsed path and query parameters."""
    logger.info("item_read", item_id=item_id, has_query=q is not None)
    return ItemQueryResponse(item_id=item_id, query=q)


# ============================================================================
# REQUEST BODY
# ============================================================================


@router.post(
    "/",
    response_model=ItemCreatedResponse,
    status_code=status.HTTP_200_OK,
    summary="Create Item",
    description="""
    Parse an item from the JSON request body and echo it back.

    **Request Body:**
    - name: Item name (1-100 characters)
    - price: Non-negative number
    - is_offer: Boolean, defaults to false

    **Success Response (200):**
    - message: "Item created successfully"
    - data: The item as parsed by the validation model

    **Error Responses:**
    - 422: Validation error (missing fields, wrong types, negative price)
    """,
)
async def create_item(
    item: Item,
    metrics: TutorialMetrics = Depends(get_tutorial_metrics),
    correlation_id: Optional[str] = Depends(get_correlation_id),
    client_ip: str = Depends(get_client_ip),
) -> ItemCreatedResponse:
    """Validate the request body and return it with a confirmation message."""
    metrics.items_created.labels(is_offer=str(item.is_offer).lower()).inc()

    logger.info(
        "item_created",
        name=item.name,
        price=item.price,
        is_offer=item.is_offer,
        correlation_id=correlation_id,
        client_ip=client_ip,
    )

    return ItemCreatedResponse(message=ITEM_CREATED_MESSAGE, data=item)
