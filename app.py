"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI

from captcha_gate import CaptchaGate, GateConfig
from config import AppSettings
from errors import register_captcha_handlers, register_error_handlers
from routes.demo_routes import router as demo_router
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    gate: Optional[CaptchaGate] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    Raises MissingSecretError when no gate is given and HCAPTCHA_SECRET is
    empty, so a misconfigured app never starts serving.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging.log_level, settings.logging.log_format)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    if gate is None:
        gate = CaptchaGate(GateConfig.from_settings(settings.captcha))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "captcha_gate_ready",
            verify_url=gate.config.verify_url,
            validate_caller_ip=gate.config.validate_caller_ip,
        )

        yield

        await gate.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.captcha_gate = gate

    register_error_handlers(app)
    register_captcha_handlers(app)
    app.include_router(demo_router)

    return app
