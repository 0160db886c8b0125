"""
CaptchaGate: hCaptcha verification in front of a FastAPI route.

Usage as a dependency::

    gate = CaptchaGate(GateConfig(secret="..."))
    register_captcha_handlers(app)

    @app.post("/", dependencies=[Depends(gate)])
    async def submit(): ...

or as a decorator on a plain ``async def endpoint(request)``::

    @gate.protect
    async def submit(request: Request): ...

Each check is independent: read the token, POST it to siteverify once, allow
iff the reply says ``success: true``. Anything else is a deny, answered by the
configured error handler. The requester is never told why.
"""

from __future__ import annotations

import functools
import inspect
from dataclasses import replace
from typing import Any, Awaitable, Callable, Optional

from starlette.requests import Request
from starlette.responses import Response

from captcha_gate.config import (
    DEFAULT_VERIFY_URL,
    RESPONSE_FIELD,
    GateConfig,
    default_error_handler,
)
from errors import CaptchaRejected, MissingSecretError
from infrastructure.captcha.hcaptcha import HCaptchaProvider, log_verification_error
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.http_client import HttpClient
from shared.ip_utils import get_client_ip
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)


class CaptchaGate:
    def __init__(self, config: GateConfig) -> None:
        if not config.secret or not config.secret.strip():
            raise MissingSecretError()

        # Only close what we created
        self.owns_http_client = config.http_client is None
        self.config = replace(
            config,
            error_handler=config.error_handler or default_error_handler,
            http_client=config.http_client or HttpClient(timeout=config.timeout),
            verify_url=config.verify_url or DEFAULT_VERIFY_URL,
            on_error=config.on_error or log_verification_error,
        )
        self.provider: CaptchaProvider = self.config.provider or HCaptchaProvider(
            self.config.secret,
            self.config.http_client,
            site_key=self.config.site_key,
            validate_caller_ip=self.config.validate_caller_ip,
            verify_url=self.config.verify_url,
            on_error=self.config.on_error,
        )

    async def check(self, request: Request) -> bool:
        """Return True to allow the request, False to deny it."""
        token = await self._read_token(request)

        remote_ip: Optional[str] = None
        if self.config.validate_caller_ip:
            remote_ip = get_client_ip(request, self.config.trust_proxy_headers)

        result = await self.provider.verify(token, remote_ip)
        # Kept for handlers that want hostname, score, etc.
        request.state.captcha_result = result
        if result is None:
            return False

        if not result.success:
            log.warning(
                "hcaptcha_verification_failed",
                error_codes=result.error_codes,
                ip_hash=hash_ip(remote_ip),
            )
            return False

        log.debug("hcaptcha_verified", hostname=result.hostname)
        return True

    async def deny(self, request: Request) -> Response:
        """Build the deny response with the configured error handler."""
        response = self.config.error_handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response

    async def __call__(self, request: Request) -> None:
        if await self.check(request):
            request.state.captcha_verified = True
            return
        raise CaptchaRejected(await self.deny(request))

    def protect(
        self, endpoint: Callable[..., Awaitable[Any]]
    ) -> Callable[..., Awaitable[Any]]:
        """Decorate an endpoint that receives the Request."""

        @functools.wraps(endpoint)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request = _find_request(args, kwargs)
            if not await self.check(request):
                return await self.deny(request)
            request.state.captcha_verified = True
            return await endpoint(*args, **kwargs)

        return wrapper

    async def aclose(self) -> None:
        if self.owns_http_client:
            await self.config.http_client.aclose()

    async def _read_token(self, request: Request) -> str:
        # Absent field or unparseable body: empty token, siteverify rejects it
        try:
            form = await request.form()
        except Exception as e:
            log.debug("hcaptcha_form_unreadable", error_type=type(e).__name__)
            return ""
        value = form.get(RESPONSE_FIELD)
        return value if isinstance(value, str) else ""


def _find_request(args: tuple, kwargs: dict) -> Request:
    for value in (*args, *kwargs.values()):
        if isinstance(value, Request):
            return value
    raise TypeError("protected endpoint must receive the Request")
