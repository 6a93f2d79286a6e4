"""Data models for the FastAPI service.

This package contains Pydantic models for request/response validation.
"""

from api.src.models.item import (
    DelayResponse,
    ErrorResponse,
    Item,
    ItemCreatedResponse,
    ItemQueryResponse,
    MessageResponse,
)
from api.src.models.system import HealthResponse, HealthStatus, ReadinessResponse

__all__ = [
    "DelayResponse",
    "ErrorResponse",
    "HealthResponse",
    "HealthStatus",
    "Item",
    "ItemCreatedResponse",
    "ItemQueryResponse",
    "MessageResponse",
    "ReadinessResponse",
]
