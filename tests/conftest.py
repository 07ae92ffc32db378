"""Pytest fixtures wiring AiService to in-memory collaborators."""

from __future__ import annotations

from typing import Any, Optional

import pytest
import requests

from codeops.core.config import Settings
from codeops.services.orchestrator import AiService
from tests.helpers import DictCredentials, FakeHttp


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def credentials() -> DictCredentials:
    return DictCredentials(
        {
            "openai": "sk-test",
            "gemini": "gm-test",
            "pompora": "pk-test",
            "openrouter": "or-test",
        }
    )


@pytest.fixture
def make_service(fake_http: FakeHttp, credentials: DictCredentials):
    """Build an AiService whose settings name ``provider`` as active."""

    def _make(provider: Optional[str] = "openai", **overrides: Any) -> AiService:
        settings = Settings(active_provider=provider, **overrides)
        return AiService(lambda: settings, credentials, fake_http)

    return _make


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
