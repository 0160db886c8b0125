"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

hCaptcha keys use the HCAPTCHA_ prefix. The secret is allowed to be empty
here so the settings object can always be built; CaptchaGate refuses to
start without one.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="HCAPTCHA_", extra="ignore"
    )

    # Dashboard: https://dashboard.hcaptcha.com/settings
    secret: str = ""
    site_key: str = ""
    validate_ip: bool = False
    verify_url: str = "https://hcaptcha.com/siteverify"
    timeout_seconds: float = 10.0

    # Only enable behind a proxy that overwrites these headers
    trust_proxy_headers: bool = False


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    app_name: str = "hcaptcha-gate"

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    captcha: Optional[CaptchaSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.captcha is None:
            self.captcha = CaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
