# codeops/services/orchestrator.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

from codeops.core.config import CredentialStore, EnvCredentialStore, Settings, SettingsLoader
from codeops.models.ide import ActionResult, ChatMessage, ChatResult, OpenRouterModel
from codeops.services.dispatcher import ProviderClient
from codeops.services.prompt_builder import (
    STRUCTURED_ACTIONS,
    build_action_messages,
    build_chat_messages,
)
from codeops.services.structured import action_result, chat_result

logger = logging.getLogger(__name__)

CHAT_TEMPERATURE = 0.4
ACTION_TEMPERATURE = 0.2

class AiService:
    """Entry point for the command layer: chat turns and single-file actions.

    Settings are loaded on every call so a provider switch or the offline
    toggle takes effect without rebuilding the service.
    """

    def __init__(
        self,
        settings_loader: SettingsLoader = Settings.from_env,
        credentials: CredentialStore | None = None,
        http: Any = None,
    ):
        self.settings_loader = settings_loader
        self.credentials = credentials or EnvCredentialStore()
        self.http = http

    def _client(self, settings: Settings) -> ProviderClient:
        return ProviderClient(settings, self.credentials, self.http)

    def chat(
        self,
        messages: List[ChatMessage],
        model_override: Optional[str] = None,
        thinking: Optional[str] = None,
    ) -> ChatResult:
        settings = self.settings_loader()
        provider = settings.require_provider()

        raw = self._client(settings).complete(
            provider,
            build_chat_messages(messages),
            temperature=CHAT_TEMPERATURE,
            model_override=model_override,
            thinking=thinking or settings.thinking,
        )
        return chat_result(raw)

    def run_action(
        self,
        action: str,
        path: Optional[str],
        content: str,
        selection: Optional[str] = None,
        thinking: Optional[str] = None,
    ) -> ActionResult:
        messages = build_action_messages(action, path, content, selection)
        settings = self.settings_loader()
        provider = settings.require_provider()

        logger.info("Running %s action on %s", action, path or "<unsaved buffer>")
        raw = self._client(settings).complete(
            provider,
            messages,
            temperature=ACTION_TEMPERATURE,
            thinking=thinking or settings.thinking,
        )
        if action in STRUCTURED_ACTIONS:
            return action_result(raw)
        return ActionResult(output_text=raw)

    def list_openrouter_models(self) -> List[OpenRouterModel]:
        return self._client(self.settings_loader()).list_openrouter_models()
