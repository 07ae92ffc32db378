"""Test doubles: a recording stand-in for ``requests`` and an in-memory key store."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from codeops.core.errors import ConfigError


@dataclass
class FakeResponse:
    status_code: int = 200
    text: str = ""


@dataclass
class FakeHttp:
    """Stands in for the ``requests`` module; replies are consumed in order."""

    replies: List[Any] = field(default_factory=list)
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def _next(self) -> FakeResponse:
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": "POST", "url": url, **kwargs})
        return self._next()

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": "GET", "url": url, **kwargs})
        return self._next()

    @property
    def last(self) -> Dict[str, Any]:
        return self.calls[-1]


class DictCredentials:
    def __init__(self, keys: Optional[Dict[str, str]] = None) -> None:
        self.keys = keys or {}

    def get_api_key(self, provider_id: str) -> str:
        try:
            return self.keys[provider_id]
        except KeyError:
            raise ConfigError(f"no API key stored for provider {provider_id}") from None


def json_reply(payload: Any, status: int = 200) -> FakeResponse:
    return FakeResponse(status_code=status, text=json.dumps(payload))


def openai_reply(content: Any, status: int = 200) -> FakeResponse:
    return json_reply({"choices": [{"message": {"role": "assistant", "content": content}}]}, status)
