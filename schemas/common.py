"""
schemas/common.py

- Shared response schemas
- Pydantic v2
- Error envelope used by middlewares/error_handler.py: ErrorDetail, ErrorResponse
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class ErrorDetail(BaseModel):
    """Smallest unit: error code + message"""
    code: str = Field(..., description="Error code (e.g. BAD_REQUEST, YEAR_CLOSED, INTERNAL_ERROR)")
    message: str = Field(..., description="Human readable message")


class ErrorResponse(BaseModel):
    """
    Standard error body returned by the global handlers
    - success is always False so clients can branch like on normal envelopes
    """
    success: bool = False
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response time (UTC)"
    )
    latency_ms: Optional[int] = Field(
        default=None, ge=0, description="Request time in ms, when known"
    )

    model_config = ConfigDict(extra="ignore")
