"""hCaptcha implementation of CaptchaProvider.

Owns the siteverify exchange: one form-encoded POST, one JSON reply.
Every failure along the way (transport, HTTP status, body parsing) is
reported through the ``on_error`` hook and collapses to ``None``, which
the gate treats as deny. The timeout is enforced by HttpClient.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from infrastructure.captcha.protocol import ErrorHook
from infrastructure.http_client import HttpClient
from schemas.models.verification import VerificationResult
from shared.logging import get_logger

log = get_logger(__name__)

DEFAULT_VERIFY_URL = "https://hcaptcha.com/siteverify"


def log_verification_error(
    stage: str, error: Optional[Exception], context: dict[str, Any]
) -> None:
    """Default error hook: a structured error log, nothing else."""
    log.error(
        "hcaptcha_siteverify_error",
        stage=stage,
        error=str(error) if error is not None else None,
        error_type=type(error).__name__ if error is not None else None,
        **context,
    )


class HCaptchaProvider:
    def __init__(
        self,
        secret: str,
        http_client: HttpClient,
        *,
        site_key: str = "",
        validate_caller_ip: bool = False,
        verify_url: str = DEFAULT_VERIFY_URL,
        on_error: ErrorHook = log_verification_error,
    ) -> None:
        self._secret = secret
        self._http = http_client
        self._site_key = site_key
        self._validate_caller_ip = validate_caller_ip
        self._verify_url = verify_url
        self._on_error = on_error

    def build_payload(self, token: str, remote_ip: Optional[str] = None) -> dict[str, str]:
        payload = {"secret": self._secret, "response": token}
        if self._validate_caller_ip:
            payload["remoteip"] = remote_ip or ""
        if self._site_key:
            payload["sitekey"] = self._site_key
        return payload

    async def verify(
        self, token: str, remote_ip: Optional[str] = None
    ) -> Optional[VerificationResult]:
        payload = self.build_payload(token, remote_ip)
        try:
            response = await self._http.post(self._verify_url, data=payload)
        except Exception as e:
            self._report("transport", e)
            return None

        if response.status_code != 200:
            self._report(
                "status",
                None,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            return None

        try:
            return VerificationResult.model_validate_json(response.content)
        except PydanticValidationError as e:
            self._report(
                "parse",
                e,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            return None

    def _report(self, stage: str, error: Optional[Exception], **context: Any) -> None:
        context["verify_url"] = self._verify_url
        try:
            self._on_error(stage, error, context)
        except Exception as hook_error:
            log.error(
                "hcaptcha_error_hook_failed",
                stage=stage,
                error=str(hook_error),
                error_type=type(hook_error).__name__,
            )
