"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain async functions
used with FastAPI's Depends() system.
"""

from __future__ import annotations

from fastapi import Request

from captcha_gate import CaptchaGate


def get_captcha_gate(request: Request) -> CaptchaGate:
    """Return the CaptchaGate built by create_app()."""
    return request.app.state.captcha_gate


async def require_captcha(request: Request) -> None:
    """Gate a route with the app's CaptchaGate; raises CaptchaRejected on deny."""
    await get_captcha_gate(request)(request)
