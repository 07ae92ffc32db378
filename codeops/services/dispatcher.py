# codeops/services/dispatcher.py
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import requests as http_requests
from pydantic import BaseModel, ValidationError

from codeops.core import providers
from codeops.core.config import CredentialStore, EnvCredentialStore, Settings
from codeops.core.errors import ConfigError, DecodeError, ProviderError, TransportError
from codeops.models.ide import ChatMessage, OpenRouterModel
from codeops.services.dialects import HttpRequest, dialect_for
from codeops.services.text import shorten_for_error

logger = logging.getLogger(__name__)

class ProviderClient:
    """Sends one chat request to a provider and returns the extracted reply text."""

    def __init__(
        self,
        settings: Settings | None = None,
        credentials: CredentialStore | None = None,
        http: Any = None,
    ):
        self.settings = settings or Settings.from_env()
        self.credentials = credentials or EnvCredentialStore()
        self.http = http or http_requests

    def complete(
        self,
        provider_id: str,
        messages: List[ChatMessage],
        *,
        temperature: float,
        model_override: Optional[str] = None,
        thinking: Optional[str] = None,
    ) -> str:
        provider = providers.resolve(provider_id)
        model = providers.resolve_model(provider, model_override)
        api_key = self._api_key(provider_id) if provider.needs_auth else ""

        dialect = dialect_for(provider_id, self.settings)
        request = dialect.build_request(
            provider,
            model,
            messages,
            temperature=temperature,
            api_key=api_key,
            thinking=thinking,
        )
        logger.info("Dispatching %s request (model=%s) to %s", provider_id, model, request.safe_url)

        status, body = self._send(request, dialect.label)
        return dialect.read_response(request, status, body)

    def _api_key(self, provider_id: str) -> str:
        try:
            return self.credentials.get_api_key(provider_id)
        except ConfigError as e:
            raise ConfigError(f"Failed to get API key: {e}", hint=e.hint) from e

    def _send(self, request: HttpRequest, label: str) -> Tuple[int, str]:
        try:
            resp = self.http.post(
                request.url,
                json=request.json,
                headers=request.headers,
                timeout=self.settings.http_timeout,
            )
        except http_requests.RequestException as e:
            raise TransportError(
                f"{label} request failed to: {request.safe_url}: {request.redact(str(e))}"
            ) from e
        return resp.status_code, resp.text

    def list_openrouter_models(self) -> List[OpenRouterModel]:
        url = f"{providers.OPENROUTER_BASE_URL}/models"
        try:
            resp = self.http.get(url, timeout=self.settings.http_timeout)
        except http_requests.RequestException as e:
            raise TransportError(f"OpenRouter models request failed to: {url}: {e}") from e
        body = resp.text

        if not 200 <= resp.status_code < 300:
            raise ProviderError(
                f"OpenRouter models request failed (status {resp.status_code}): "
                f"{shorten_for_error(body)}",
                status_code=resp.status_code,
            )
        try:
            listing = _ModelListing.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                f"Invalid OpenRouter models JSON response: {shorten_for_error(body)}"
            ) from e
        return listing.data

class _ModelListing(BaseModel):
    data: List[OpenRouterModel] = []
