# codeops/core/config.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from codeops.core.errors import ConfigError

_TRUTHY = ("1", "true", "yes", "on")

def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None

@dataclass(frozen=True)
class Settings:
    active_provider: Optional[str] = None
    offline_mode: bool = False
    thinking: Optional[str] = None
    http_timeout: float = 180.0
    app_url: str = "https://codeops.local"
    app_title: str = "CodeOps"
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        offline = os.getenv("CODEOPS_OFFLINE", "").strip().lower() in _TRUTHY
        timeout = float(os.getenv("CODEOPS_HTTP_TIMEOUT", "180"))
        return Settings(
            active_provider=_optional_env("CODEOPS_PROVIDER"),
            offline_mode=offline,
            thinking=_optional_env("CODEOPS_THINKING"),
            http_timeout=timeout,
            app_url=os.getenv("CODEOPS_APP_URL", "https://codeops.local"),
            app_title=os.getenv("CODEOPS_APP_TITLE", "CodeOps"),
            log_level=os.getenv("CODEOPS_LOG_LEVEL", "INFO").upper(),
        )

    def require_provider(self) -> str:
        if self.offline_mode:
            raise ConfigError("offline mode is enabled")
        provider = (self.active_provider or "").strip()
        if not provider:
            raise ConfigError(
                "no provider is configured",
                hint="set CODEOPS_PROVIDER",
            )
        return provider

SettingsLoader = Callable[[], Settings]

class CredentialStore(Protocol):
    def get_api_key(self, provider_id: str) -> str:
        ...

def api_key_env_names(provider_id: str) -> tuple:
    safe = re.sub(r"[^A-Za-z0-9]", "_", provider_id).upper()
    return (f"CODEOPS_{safe}_API_KEY", f"{safe}_API_KEY")

class EnvCredentialStore:
    """Reads provider API keys from the process environment."""

    def get_api_key(self, provider_id: str) -> str:
        names = api_key_env_names(provider_id)
        for name in names:
            value = os.getenv(name, "").strip()
            if value:
                return value
        raise ConfigError(
            f"no API key stored for provider {provider_id}",
            hint=f"set {names[0]} or {names[1]}",
        )
