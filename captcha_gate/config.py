"""
Gate configuration and its defaults.

GateConfig is frozen: CaptchaGate resolves the unset optional fields once,
at construction, and never touches the config again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from fastapi.responses import JSONResponse
from starlette.requests import Request

from config import CaptchaSettings
from infrastructure.captcha.hcaptcha import DEFAULT_VERIFY_URL
from infrastructure.captcha.protocol import CaptchaProvider, ErrorHandler, ErrorHook
from infrastructure.http_client import HttpClient
from schemas.dto.responses.common import CaptchaErrorResponse

DEFAULT_ERROR_STATUS_CODE = 403
DEFAULT_ERROR_MESSAGE = "invalid captcha"
DEFAULT_HTTP_TIMEOUT = 10.0

# Form field the hCaptcha widget submits
RESPONSE_FIELD = "h-captcha-response"

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_ERROR_STATUS_CODE",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_VERIFY_URL",
    "RESPONSE_FIELD",
    "GateConfig",
    "default_error_handler",
]


def default_error_handler(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=DEFAULT_ERROR_STATUS_CODE,
        content=CaptchaErrorResponse(message=DEFAULT_ERROR_MESSAGE).model_dump(),
    )


@dataclass(frozen=True)
class GateConfig:
    # hCaptcha secret to verify captcha responses
    secret: str
    # Sent as ``sitekey`` when non-empty
    site_key: str = ""
    # Sends the caller address as ``remoteip``
    validate_caller_ip: bool = False
    error_handler: Optional[ErrorHandler] = None
    http_client: Optional[HttpClient] = None
    verify_url: str = ""
    # Timeout for the default client; ignored when http_client is given
    timeout: float = DEFAULT_HTTP_TIMEOUT
    trust_proxy_headers: bool = False
    on_error: Optional[ErrorHook] = None
    # Replaces the hCaptcha siteverify exchange; the wire fields above are then unused
    provider: Optional[CaptchaProvider] = None

    @classmethod
    def from_settings(cls, settings: CaptchaSettings, **overrides: Any) -> "GateConfig":
        values: dict[str, Any] = {
            "secret": settings.secret,
            "site_key": settings.site_key,
            "validate_caller_ip": settings.validate_ip,
            "verify_url": settings.verify_url,
            "timeout": settings.timeout_seconds,
            "trust_proxy_headers": settings.trust_proxy_headers,
        }
        values.update(overrides)
        return cls(**values)
