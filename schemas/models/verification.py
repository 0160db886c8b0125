"""
Model for the hCaptcha siteverify response.

Only ``success`` drives the gate decision. The remaining fields are kept so
callers that want the hostname, error codes or enterprise score can read
them from the parsed result.

Reference: https://docs.hcaptcha.com/#verify-the-user-response-server-side
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class VerificationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: StrictBool
    challenge_ts: Optional[datetime] = None
    hostname: Optional[str] = None
    credit: bool = False
    error_codes: list[str] = Field(default_factory=list, alias="error-codes")
    # Enterprise only
    score: Optional[float] = None
    score_reason: list[str] = Field(default_factory=list)

    @field_validator("error_codes", "score_reason", mode="before")
    @classmethod
    def _coerce_to_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v
