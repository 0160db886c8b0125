"""
Shared fixtures.

``make_request`` builds a real Starlette Request carrying a form body.
``siteverify`` builds an httpx.MockTransport that plays the hCaptcha
siteverify endpoint and records every request it receives, so tests can
assert on the exact form body sent over the wire.
"""

from __future__ import annotations

from typing import Callable, Optional
from urllib.parse import urlencode

import httpx
import pytest
from starlette.requests import Request


class FakeSiteverify:
    def __init__(
        self,
        json_body: Optional[dict] = None,
        status_code: int = 200,
        content: Optional[bytes] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.json_body = {"success": True} if json_body is None else json_body
        self.status_code = status_code
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_body(self) -> str:
        return self.requests[-1].content.decode()


@pytest.fixture
def siteverify() -> Callable[..., FakeSiteverify]:
    return FakeSiteverify


@pytest.fixture
def make_request() -> Callable[..., Request]:
    def _make(
        form: Optional[dict] = None,
        client_host: str = "10.0.0.1",
        headers: Optional[dict] = None,
        content_type: str = "application/x-www-form-urlencoded",
        body: Optional[bytes] = None,
    ) -> Request:
        if body is None:
            body = urlencode(form or {}).encode()
        raw_headers = [(b"content-type", content_type.encode())]
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode(), value.encode()))
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/",
            "query_string": b"",
            "headers": raw_headers,
            "client": (client_host, 54321),
        }

        async def receive() -> dict:
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make
