# codeops/core/providers.py
from __future__ import annotations

from typing import Dict, Optional

from codeops.core.errors import ConfigError
from codeops.models.ide import ProviderDescriptor

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

def _provider(id: str, base_url: str, default_model: str, needs_auth: bool = True) -> ProviderDescriptor:
    return ProviderDescriptor(
        id=id,
        base_url=base_url,
        default_model=default_model,
        needs_auth=needs_auth,
    )

PROVIDERS: Dict[str, ProviderDescriptor] = {
    p.id: p
    for p in (
        _provider("openai", "https://api.openai.com/v1", "gpt-4o-mini"),
        _provider("anthropic", "https://api.anthropic.com/v1", "claude-3-5-sonnet-20241022"),
        _provider("groq", "https://api.groq.com/openai/v1", "llama-3.1-70b-versatile"),
        _provider("deepseek", "https://api.deepseek.com/v1", "deepseek-chat"),
        _provider("gemini", "https://generativelanguage.googleapis.com/v1beta", "gemini-flash-latest"),
        _provider("pompora", "https://ai.pompora.dev/v1", "pompora"),
        _provider("openrouter", OPENROUTER_BASE_URL, "openrouter/auto"),
        _provider("ollama", "http://127.0.0.1:11434/v1", "llama3.2", needs_auth=False),
        _provider("lmstudio", "http://127.0.0.1:1234/v1", "local-model", needs_auth=False),
        _provider("custom", "https://api.openai.com/v1", "gpt-4o-mini"),
    )
}

def resolve(provider_id: str) -> ProviderDescriptor:
    try:
        return PROVIDERS[provider_id]
    except KeyError:
        raise ConfigError(
            f"Provider not supported: {provider_id}",
            hint="supported providers: " + ", ".join(sorted(PROVIDERS)),
        ) from None

def resolve_model(descriptor: ProviderDescriptor, override: Optional[str] = None) -> str:
    if override is not None and override.strip():
        return override.strip()
    return descriptor.default_model
