# codeops/core/errors.py
from __future__ import annotations

from typing import Optional

class CodeOpsError(Exception):
    """Base error for a single failed assistant call."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.hint = hint

    def describe(self) -> str:
        msg = str(self)
        if self.hint:
            return f"{msg} ({self.hint})"
        return msg

class ConfigError(CodeOpsError):
    """Offline mode, missing provider, unsupported provider or missing key."""

class TransportError(CodeOpsError):
    """The request could not be sent or its body could not be read."""

class ProviderError(CodeOpsError):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code

class DecodeError(CodeOpsError):
    """The response body is not valid JSON for the expected envelope."""

class ContentNotFoundError(CodeOpsError):
    """Well-formed response without any usable text."""

class UnknownActionError(CodeOpsError):
    def __init__(self, action: str) -> None:
        super().__init__(f"unknown action: {action}")
        self.action = action
