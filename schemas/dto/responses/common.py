"""
Common response DTOs.

CaptchaErrorResponse: body of the default captcha deny response
HealthResponse:       GET /health
"""

from __future__ import annotations

from pydantic import BaseModel


class CaptchaErrorResponse(BaseModel):
    """Body returned to the requester when captcha verification fails."""

    message: str


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str
