# codeops/services/dialects.py
"""Request/response dialects for the supported provider families.

A dialect knows how to shape the outbound request for a provider and how to
pull plain text out of that provider's response envelope. The dispatcher picks
one dialect per call via ``dialect_for`` and then treats them uniformly.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, ValidationError, WrapValidator

from codeops.core.config import Settings
from codeops.core.errors import ContentNotFoundError, DecodeError, ProviderError
from codeops.models.ide import ChatMessage, ProviderDescriptor
from codeops.services.text import shorten_for_error

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 4096
GEMINI_MAX_OUTPUT_TOKENS = 8192
DEFAULT_THINKING = "slow"
NON_JSON_OUTPUT = "non_json_output"

E = TypeVar("E", bound=BaseModel)
T = TypeVar("T")

REDACTED = "***"

@dataclass(frozen=True)
class HttpRequest:
    url: str
    json: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def safe_url(self) -> str:
        # gemini carries the API key in the query string
        return self.url.split("?", 1)[0]

    def redact(self, text: str) -> str:
        """Mask every query-string value of this request that appears in ``text``."""
        for _, value in parse_qsl(urlsplit(self.url).query):
            if value:
                text = text.replace(value, REDACTED)
        return text

# ----- response envelopes -----

def _lenient(value: Any, handler: Any) -> Any:
    # a shape the extractors never read must not fail the whole envelope
    try:
        return handler(value)
    except ValidationError:
        return None

Lenient = Annotated[Optional[T], WrapValidator(_lenient)]

class _FunctionCall(BaseModel):
    arguments: Any = None

class _ToolCall(BaseModel):
    function: Lenient[_FunctionCall] = None

class _OpenAIMessage(BaseModel):
    content: Any = None
    tool_calls: Lenient[List[Lenient[_ToolCall]]] = None
    function_call: Lenient[_FunctionCall] = None

class _OpenAIChoice(BaseModel):
    message: Lenient[_OpenAIMessage] = None
    text: Any = None

class OpenAIEnvelope(BaseModel):
    choices: Lenient[List[Lenient[_OpenAIChoice]]] = None

class _GeminiPart(BaseModel):
    text: Any = None

class _GeminiContent(BaseModel):
    parts: Lenient[List[Lenient[_GeminiPart]]] = None

class _GeminiCandidate(BaseModel):
    content: Lenient[_GeminiContent] = None

class GeminiEnvelope(BaseModel):
    candidates: Lenient[List[Lenient[_GeminiCandidate]]] = None

class PomporaEnvelope(OpenAIEnvelope):
    result: Any = None
    output: Any = None
    error: Any = None

class PomporaFailure(BaseModel):
    error: Any = None
    raw: Any = None

def _non_blank(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None

def message_content(message: _OpenAIMessage) -> Optional[str]:
    content = message.content
    if isinstance(content, str):
        return content.strip() or None
    if not isinstance(content, list):
        return None

    # some OpenAI-compatible providers send [{"type": "text", "text": "..."}]
    out: List[str] = []
    for part in content:
        if isinstance(part, str):
            text = part
        elif isinstance(part, dict) and isinstance(part.get("text"), str):
            text = part["text"]
        else:
            continue
        text = text.strip()
        if text:
            out.append(text)
    return "".join(out) or None

def choice_text(envelope: OpenAIEnvelope) -> Optional[str]:
    if not envelope.choices:
        return None
    first = envelope.choices[0]
    if first is None:
        return None
    message = first.message
    if message is not None:
        content = message_content(message)
        if content:
            return content
        for call in message.tool_calls or []:
            args = _non_blank(call.function.arguments if call and call.function else None)
            if args:
                return args
        if message.function_call is not None:
            args = _non_blank(message.function_call.arguments)
            if args:
                return args
    return _non_blank(first.text)

class Dialect(ABC):
    label = "API"

    @abstractmethod
    def build_request(
        self,
        provider: ProviderDescriptor,
        model: str,
        messages: List[ChatMessage],
        *,
        temperature: float,
        api_key: str,
        thinking: Optional[str] = None,
    ) -> HttpRequest:
        ...

    @abstractmethod
    def extract_text(self, body: str) -> str:
        """Pull the reply text out of a 2xx response body."""

    def read_response(self, request: HttpRequest, status: int, body: str) -> str:
        if not 200 <= status < 300:
            raise self.status_error(request, status, body)
        return self.extract_text(body)

    def status_error(self, request: HttpRequest, status: int, body: str) -> ProviderError:
        logger.warning("%s returned status %s for %s", self.label, status, request.safe_url)
        return ProviderError(
            f"{self.label} request failed (status {status}): {request.safe_url}\n"
            f"{shorten_for_error(body)}",
            status_code=status,
        )

    def decode(self, envelope: Type[E], body: str) -> E:
        try:
            return envelope.model_validate_json(body)
        except ValidationError as e:
            if not any(err["type"] == "json_invalid" for err in e.errors()):
                # well-formed JSON that is not an object
                raise self.not_found(body) from e
            raise DecodeError(
                f"Invalid {self.label} JSON response: {shorten_for_error(body)}"
            ) from e

    def not_found(self, body: str) -> ContentNotFoundError:
        return ContentNotFoundError(
            f"No content found in {self.label} response: {shorten_for_error(body)}"
        )

class OpenAICompatibleDialect(Dialect):
    def __init__(self, extra_headers: Optional[Dict[str, str]] = None):
        self.extra_headers = dict(extra_headers or {})

    def build_request(self, provider, model, messages, *, temperature, api_key, thinking=None):
        headers: Dict[str, str] = {}
        if provider.needs_auth and api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        headers.update(self.extra_headers)
        return HttpRequest(
            url=f"{provider.base_url.rstrip('/')}/chat/completions",
            json={
                "model": model,
                "messages": [m.model_dump() for m in messages],
                "temperature": temperature,
                "max_tokens": DEFAULT_MAX_TOKENS,
            },
            headers=headers,
        )

    def extract_text(self, body: str) -> str:
        text = choice_text(self.decode(OpenAIEnvelope, body))
        if text is None:
            raise self.not_found(body)
        return text

class GeminiDialect(Dialect):
    label = "Gemini API"

    def build_request(self, provider, model, messages, *, temperature, api_key, thinking=None):
        contents = [
            {
                "role": "model" if m.role == "assistant" else m.role,
                "parts": [{"text": m.content}],
            }
            for m in messages
        ]
        return HttpRequest(
            url=f"{provider.base_url}/models/{model}:generateContent?key={api_key}",
            json={
                "contents": contents,
                "generationConfig": {
                    "temperature": temperature,
                    "maxOutputTokens": GEMINI_MAX_OUTPUT_TOKENS,
                },
            },
        )

    def extract_text(self, body: str) -> str:
        envelope = self.decode(GeminiEnvelope, body)
        candidate = envelope.candidates[0] if envelope.candidates else None
        if candidate is not None and candidate.content is not None:
            parts = candidate.content.parts
            part = parts[0] if parts else None
            if part is not None and isinstance(part.text, str):
                return part.text
        raise self.not_found(body)

def flatten_messages(messages: List[ChatMessage]) -> str:
    out: List[str] = []
    for m in messages:
        content = m.content.strip()
        if not content:
            continue
        out.append(f"{m.role.strip()}: {content}")
    return "\n\n".join(out)

class PomporaDialect(Dialect):
    label = "Pompora AI"

    def build_request(self, provider, model, messages, *, temperature, api_key, thinking=None):
        mode = (thinking or "").strip() or DEFAULT_THINKING
        headers: Dict[str, str] = {}
        key = api_key.strip()
        if key:
            headers["Authorization"] = f"Bearer {key}"
            headers["X-API-Key"] = key
        return HttpRequest(
            url=f"{provider.base_url.rstrip('/')}/ai",
            json={"input": flatten_messages(messages), "apiKey": api_key, "thinking": mode},
            headers=headers,
        )

    def read_response(self, request: HttpRequest, status: int, body: str) -> str:
        if not 200 <= status < 300:
            raw = self._non_json_output(body)
            if raw is not None:
                logger.info("Pompora AI returned %s with raw model output; using it", status)
                return raw
            raise self.status_error(request, status, body)
        return self.extract_text(body)

    @staticmethod
    def _non_json_output(body: str) -> Optional[str]:
        try:
            failure = PomporaFailure.model_validate_json(body)
        except ValidationError:
            return None
        if failure.error != NON_JSON_OUTPUT:
            return None
        raw = _non_blank(failure.raw)
        return raw.strip() if raw else None

    def extract_text(self, body: str) -> str:
        envelope = self.decode(PomporaEnvelope, body)

        error = _non_blank(envelope.error)
        if error:
            raise ProviderError(f"Pompora AI error: {error}")

        result = envelope.result
        if isinstance(result, (dict, list)):
            return json.dumps(result, ensure_ascii=False, separators=(",", ":"))
        if _non_blank(result):
            return result.strip()

        output = _non_blank(envelope.output)
        if output:
            return output.strip()

        text = choice_text(envelope)
        if text is not None:
            return text
        raise self.not_found(body)

def dialect_for(provider_id: str, settings: Optional[Settings] = None) -> Dialect:
    if provider_id == "gemini":
        return GeminiDialect()
    if provider_id == "pompora":
        return PomporaDialect()
    headers: Dict[str, str] = {}
    if provider_id == "openrouter":
        settings = settings or Settings()
        headers = {"HTTP-Referer": settings.app_url, "X-Title": settings.app_title}
    return OpenAICompatibleDialect(extra_headers=headers)
