"""
Configuration loading for the Store API client.

Sources, in the order callers usually try them:
- ``ClientConfig.from_env()`` for deployed storefronts
- ``load_config("storefront.yaml")`` for local tooling
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigurationError

API_TYPES = ("store-api", "admin-api")

DEFAULT_CONFIG_PATH = "storefront.yaml"


class EnvSettings(BaseSettings):
    """SHOPWARE_* environment variables, optionally from a local .env file."""
    model_config = SettingsConfigDict(
        env_prefix="SHOPWARE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    store_domain: str = ""
    access_token: str = ""
    api_type: str = "store-api"
    context_token: Optional[str] = None
    timeout: float = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the commerce platform."""
    store_domain: str
    access_token: str
    api_type: str = "store-api"
    context_token: Optional[str] = None
    timeout: float = 30.0

    def __post_init__(self):
        if not self.store_domain:
            raise ConfigurationError("store_domain is required")
        if not self.access_token:
            raise ConfigurationError("access_token is required")
        if self.api_type not in API_TYPES:
            raise ConfigurationError(f"Unknown api_type '{self.api_type}', expected one of {API_TYPES}")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

        domain = self.store_domain.rstrip("/")
        if "://" not in domain:
            domain = f"https://{domain}"
        object.__setattr__(self, "store_domain", domain)

    @property
    def base_url(self) -> str:
        """Store domain joined with the API type, e.g. https://shop.example/store-api."""
        return f"{self.store_domain}/{self.api_type}"

    def auth_headers(self) -> dict[str, str]:
        """Headers identifying the sales channel (and the session, if any)."""
        if self.api_type == "admin-api":
            headers = {"Authorization": f"Bearer {self.access_token}"}
        else:
            headers = {"sw-access-key": self.access_token}
        if self.context_token:
            headers["sw-context-token"] = self.context_token
        return headers

    def with_context_token(self, context_token: Optional[str]) -> "ClientConfig":
        return replace(self, context_token=context_token)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """Create config from dictionary."""
        try:
            return cls(
                store_domain=data.get("store_domain", ""),
                access_token=data.get("access_token", ""),
                api_type=data.get("api_type", "store-api"),
                context_token=data.get("context_token"),
                timeout=float(data.get("timeout", 30.0)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Create config from environment variables.

        SHOPWARE_STORE_DOMAIN, SHOPWARE_ACCESS_TOKEN, SHOPWARE_API_TYPE,
        SHOPWARE_CONTEXT_TOKEN, SHOPWARE_TIMEOUT
        """
        try:
            settings = EnvSettings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e
        return cls.from_dict(settings.model_dump())

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        data: dict[str, Any] = {
            "store_domain": self.store_domain,
            "access_token": self.access_token,
            "api_type": self.api_type,
            "timeout": self.timeout,
        }
        if self.context_token:
            data["context_token"] = self.context_token
        return data

    def save(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> ClientConfig | None:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        return None

    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return ClientConfig.from_dict(data)
