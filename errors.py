"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to consistent JSON responses.

CaptchaRejected is not an AppError: it carries the response already built
by the gate's error handler, and its handler returns that response as-is.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(AppError):
    status_code = 500
    error_code = "configuration_error"


class MissingSecretError(ConfigurationError):
    """Raised when a CaptchaGate is built without an hCaptcha secret."""

    def __init__(self, message: str = "mandatory parameter: secret key is missing") -> None:
        super().__init__(message, field="secret")


class CaptchaRejected(Exception):
    """Raised by the gate dependency on deny; holds the error-handler response."""

    def __init__(self, response: Response) -> None:
        super().__init__("captcha verification failed")
        self.response = response


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )


def register_captcha_handlers(app: FastAPI) -> None:
    """Turn CaptchaRejected into the response the gate already built."""

    @app.exception_handler(CaptchaRejected)
    async def captcha_rejected_handler(
        request: Request, exc: CaptchaRejected
    ) -> Response:
        return exc.response
