"""
hCaptcha verification gate for FastAPI.
Exposes the gate, its config and the default deny response.
"""

from .config import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_ERROR_STATUS_CODE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_VERIFY_URL,
    RESPONSE_FIELD,
    GateConfig,
    default_error_handler,
)
from .gate import CaptchaGate

__all__ = [
    "CaptchaGate",
    "GateConfig",
    "default_error_handler",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_ERROR_STATUS_CODE",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_VERIFY_URL",
    "RESPONSE_FIELD",
]
