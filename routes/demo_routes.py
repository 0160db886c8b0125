"""
Demo routes.

GET  /       : HTML form with the hCaptcha widget
POST /       : protected by the captcha gate; "Good!" when verification passes
GET  /health : liveness check, never gated
"""

from __future__ import annotations

from html import escape

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from dependencies import get_captcha_gate, require_captcha
from schemas.dto.responses.common import HealthResponse

router = APIRouter(tags=["demo"])

_FORM_TEMPLATE = """
<script src="https://js.hcaptcha.com/1/api.js" async defer></script>
<form action="/" method="post">
    <div class="h-captcha" data-sitekey="{site_key}"></div>
    <button type="submit">Login</button>
</form>"""


@router.get("/", response_class=HTMLResponse)
async def login_form(request: Request) -> HTMLResponse:
    site_key = get_captcha_gate(request).config.site_key
    return HTMLResponse(_FORM_TEMPLATE.format(site_key=escape(site_key, quote=True)))


@router.post(
    "/",
    response_class=PlainTextResponse,
    dependencies=[Depends(require_captcha)],
)
async def login() -> PlainTextResponse:
    return PlainTextResponse("Good!")


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy")
