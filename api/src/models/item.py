"""
Item models used by the tutorial's path, query and request body examples.

Items are illustrative only: they are validated and echoed back, never
stored.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# Request Models
# ============================================================================


class Item(BaseModel):
    """Request body accepted by POST /items/."""
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Item name"
    )
    price: float = Field(
        ...,
        ge=0,
        description="Item price"
    )
    is_offer: bool = Field(
        default=False,
        description="Whether the item is on offer"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank names."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Laptop",
                "price": 999.99,
                "is_offer": True
            }
        }
    }


# ============================================================================
# Response Models
# ============================================================================


class MessageResponse(BaseModel):
    """Plain message response."""
    message: str = Field(..., description="Message text")


class ItemQueryResponse(BaseModel):
    """Response of GET /items/{item_id}."""
    item_id: int = Field(..., description="Item ID taken from the path")
    query: Optional[str] = Field(
        None,
        description="Value of the q query parameter, omitted when not given"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "item_id": 5,
                "query": "somequery"
            }
        }
    }


class ItemCreatedResponse(BaseModel):
    """Response of POST /items/: a confirmation plus the parsed item."""
    message: str = Field(
        default="Item created successfully",
        description="Confirmation message"
    )
    data: Item = Field(..., description="Item as parsed from the request body")


class DelayResponse(BaseModel):
    """Response of GET /async-delay."""
    message: str = Field(..., description="Confirmation message")
    delay_seconds: float = Field(..., ge=0, description="Seconds waited")


class ErrorResponse(BaseModel):
    """Error response schema."""
    detail: str = Field(
        ...,
        min_length=1,
        description="Error message"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "detail": "Internal server error"
            }
        }
    }
