"""CaptchaProvider protocol. The gate depends on this, not the concrete implementation."""

from typing import Any, Awaitable, Callable, Optional, Protocol, Union

from starlette.requests import Request
from starlette.responses import Response

from schemas.models.verification import VerificationResult

# Builds the response sent back when a request is denied
ErrorHandler = Callable[[Request], Union[Response, Awaitable[Response]]]

# Receives (stage, error, context) for transport/status/parse failures
ErrorHook = Callable[[str, Optional[Exception], dict[str, Any]], None]


class CaptchaProvider(Protocol):
    async def verify(
        self, token: str, remote_ip: Optional[str] = None
    ) -> Optional[VerificationResult]: ...
