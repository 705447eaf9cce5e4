"""Runtime configuration for the importer.

Relies on pydantic-settings so that environment variables (``HTTP_URL``,
``HTTP_METHOD``, ``SUBSCRIPTION_KEY`` ...) or a ``.env`` file provide the values.
Custom request headers are declared as ``HTTP_HEADER_<ANY>=<Header-Name>: <value>``.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lodging_importer.errors import ConfigurationError
from lodging_importer.services.listing_client import check_header

logger = logging.getLogger(__name__)

HEADER_ENV_PREFIX = "HTTP_HEADER_"
DEFAULT_SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
DEFAULT_ENV_FILE = Path(".env")


def parse_header_declaration(declaration: str, *, source: str = "") -> tuple[str, str]:
    """Split ``"Header-Name: value"`` into a trimmed ``(name, value)`` pair."""
    name, separator, value = declaration.partition(":")
    name = name.strip()
    if not separator or not name:
        label = f" {source}" if source else ""
        raise ConfigurationError(
            f"Invalid header declaration{label}={declaration!r}; expected 'Header-Name: value'"
        )
    value = value.strip()
    check_header(name, value)
    return name, value


def parse_header_declarations(
    environ: Mapping[str, str],
    *,
    prefix: str = HEADER_ENV_PREFIX,
) -> Dict[str, str]:
    """Collect every ``<prefix>*`` entry of ``environ`` as an outbound request header."""
    headers: Dict[str, str] = {}
    for key in sorted(environ):
        if not key.startswith(prefix):
            continue
        name, value = parse_header_declaration(environ[key], source=key)
        headers[name] = value
    return headers


class Settings(BaseSettings):
    """Captures runtime configuration for an import run."""

    http_url: str = Field(default="", description="Listing endpoint; continuation tokens are appended to it")
    http_method: str = Field(default="GET", description="HTTP method used for every page request")
    http_timeout_s: float = Field(default=5.0, description="Per-request timeout in seconds")
    subscription_key: Optional[str] = Field(default=None, description="API subscription key, sent as a header")
    subscription_key_header: str = Field(
        default=DEFAULT_SUBSCRIPTION_KEY_HEADER,
        description="Header name carrying the subscription key",
    )
    custom_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra request headers, normally collected from HTTP_HEADER_* declarations",
    )
    log_level: str = Field(default="INFO")
    log_dir: Optional[Path] = Field(default=None, description="Also write logs to <log_dir>/importer.log")
    output_indent: int = Field(default=4, description="Indentation of the emitted JSON documents")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("http_url", mode="before")
    def _strip_url(cls, value: Optional[str]) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("http_method", mode="before")
    def _normalise_method(cls, value: Optional[str]) -> str:
        if value in (None, ""):
            return "GET"
        return str(value).strip().upper()

    @field_validator("subscription_key", mode="before")
    def _empty_key_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        return value

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("http_timeout_s")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("http_timeout_s must be positive")
        return value

    @field_validator("output_indent")
    def _validate_indent(cls, value: int) -> int:
        if value < 0:
            raise ValueError("output_indent must not be negative")
        return value

    def request_headers(self) -> Dict[str, str]:
        """Headers attached to every page request, custom declarations last."""
        headers: Dict[str, str] = {}
        if self.subscription_key:
            headers[self.subscription_key_header] = self.subscription_key
        headers.update(self.custom_headers)
        return headers


def _declared_environment(env_file: Optional[Path]) -> Dict[str, str]:
    declared: Dict[str, str] = {}
    if env_file is not None and env_file.is_file():
        declared.update({key: value for key, value in dotenv_values(env_file).items() if value is not None})
    elif env_file is not None:
        logger.debug("No env file at %s; using process environment only", env_file)
    # Process environment wins over the .env file.
    declared.update(os.environ)
    return declared


def load_settings(env_file: Optional[Path] = DEFAULT_ENV_FILE, **overrides: Any) -> Settings:
    """Build :class:`Settings` from the environment, ``env_file`` and explicit overrides.

    Raises :class:`ConfigurationError` for invalid values or header declarations.
    """
    declared = _declared_environment(env_file)
    headers = parse_header_declarations(declared)
    headers.update(overrides.pop("custom_headers", None) or {})
    try:
        return Settings(_env_file=env_file, custom_headers=headers, **overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
