"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import ipaddress
import logging
import ssl
from fnmatch import fnmatch
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import certifi
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dppflows.exceptions import SettingsError

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "dppflows"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )
    http_proxy: str | None = Field(default=None, validation_alias="HTTP_PROXY", description="HTTP proxy URL.")
    https_proxy: str | None = Field(
        default=None,
        validation_alias="HTTPS_PROXY",
        description="HTTPS proxy URL.",
    )
    all_proxy: str | None = Field(default=None, validation_alias="ALL_PROXY", description="All proxy URL.")
    no_proxy: str | None = Field(
        default=None,
        validation_alias="NO_PROXY",
        description="Comma-separated list of hosts, wildcards or CIDR ranges that bypass the proxy.",
    )

    cert_path: str | None = Field(
        default=None,
        validation_alias="CERT_PATH",
        description="Path to a CA bundle used to verify TLS peers.",
    )
    timeout: float = Field(
        default=60.0,
        validation_alias="TIMEOUT",
        description="Transport timeout in seconds for outbound calls.",
    )

    openai_base_url: str | None = Field(
        default=None,
        validation_alias="OPENAI_BASE_URL",
        description="Base URL of an OpenAI-compatible endpoint. Defaults to the public API.",
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias="OPENAI_API_KEY",
        description="API key for the generation provider.",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        validation_alias="OPENAI_MODEL",
        description="Model used by every flow.",
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        validation_alias="SENDGRID_API_KEY",
        description="API key for SendGrid transactional email.",
    )
    sendgrid_from_email: str | None = Field(
        default=None,
        validation_alias="SENDGRID_FROM_EMAIL",
        description="Verified sender address used for outgoing email.",
    )
    sendgrid_base_url: str = Field(
        default="https://api.sendgrid.com",
        validation_alias="SENDGRID_BASE_URL",
        description="SendGrid API root.",
    )

    passport_base_url: str = Field(
        default="https://passportify.online",
        validation_alias="PASSPORT_BASE_URL",
        description="Public root of the passport viewer encoded into QR codes.",
    )
    otp_ttl_minutes: int = Field(
        default=10,
        ge=1,
        validation_alias="OTP_TTL_MINUTES",
        description="Validity window announced in one-time password emails.",
    )

    @field_validator("openai_base_url")
    @classmethod
    def _require_https_outside_localhost(cls, value: str | None) -> str | None:
        """Reject plain-http provider URLs unless they target a local endpoint.

        Args:
            value (str | None): Configured base URL.

        Raises:
            ValueError: If the URL uses http against a remote host.

        Returns:
            str | None: The unchanged URL.
        """
        if not value:
            return value
        parsed = urlparse(value)
        if parsed.scheme == "http" and (parsed.hostname or "") not in _LOCAL_HOSTS:
            raise ValueError("OPENAI_BASE_URL must use https outside local development")  # noqa: TRY003
        return value

    def should_bypass_proxy(self, target_url: str | None) -> bool:
        """Return whether the URL should bypass proxies."""
        return is_no_proxy_target(target_url, self.no_proxy)


def build_ssl_context(settings: Settings) -> ssl.SSLContext:
    """Build a strict SSL context from settings.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        ssl.SSLContext: Configured TLS context.
    """
    ssl_context = ssl.create_default_context(cafile=settings.cert_path or certifi.where())
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    return ssl_context


def _no_proxy_entries(no_proxy: str | None) -> list[str]:
    if not no_proxy:
        return []
    return [entry.strip().lower() for entry in no_proxy.split(",") if entry.strip()]


def _host_matches(host: str, entry: str) -> bool:
    """Match a hostname against one NO_PROXY host entry.

    `example.com` matches the domain and its subdomains, `.example.com`
    only subdomains, and entries containing `*` are shell-style wildcards.
    """
    if "://" in entry:
        entry = urlparse(entry).hostname or ""
    entry = entry.strip("[]")
    if not entry:
        return False
    if "*" in entry:
        return fnmatch(host, entry)
    if entry.startswith("."):
        return host.endswith(entry)
    return host == entry or host.endswith(f".{entry}")


def is_no_proxy_target(target_url: str | None, no_proxy: str | None) -> bool:
    """Return whether the target URL matches a NO_PROXY entry.

    Args:
        target_url (str | None): Target request URL.
        no_proxy (str | None): Raw NO_PROXY value.

    Returns:
        bool: True when proxy must be bypassed.
    """
    if not target_url:
        return False
    hostname = urlparse(target_url).hostname
    if not hostname:
        return False
    host = hostname.lower().strip("[]")

    try:
        host_ip: ipaddress.IPv4Address | ipaddress.IPv6Address | None = ipaddress.ip_address(host)
    except ValueError:
        host_ip = None

    for entry in _no_proxy_entries(no_proxy):
        if entry == "*":
            return True
        try:
            network = ipaddress.ip_network(entry, strict=False)
        except ValueError:
            if _host_matches(host, entry):
                return True
            continue
        if host_ip is not None and host_ip in network:
            return True
    return False


def build_httpx_client_kwargs(
    settings: Settings,
    *,
    target_url: str | None = None,
) -> dict[str, Any]:
    """Build kwargs used for a per-call `httpx.Client`.

    Args:
        settings (Settings): Runtime settings.
        target_url (str | None): Target URL used for NO_PROXY evaluation.

    Returns:
        dict[str, Any]: Arguments for the client constructor.
    """
    kwargs: dict[str, Any] = {
        "verify": build_ssl_context(settings),
        "timeout": settings.timeout,
    }

    proxy_url = settings.https_proxy or settings.http_proxy or settings.all_proxy
    if proxy_url and not settings.should_bypass_proxy(target_url):
        kwargs["proxy"] = proxy_url
    return kwargs


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            try:
                ensure_env_file_exists()
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
