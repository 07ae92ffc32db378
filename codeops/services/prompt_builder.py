# codeops/services/prompt_builder.py
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from codeops.core.errors import UnknownActionError
from codeops.core.prompt import ACTION_SYSTEM_PROMPT, CHAT_SYSTEM_PROMPT, JSON_ONLY_INSTRUCTION
from codeops.models.ide import ChatMessage

# Actions whose reply is a JSON object carrying a whole replacement file.
STRUCTURED_ACTIONS = ("fix", "refactor")

def build_chat_messages(messages: List[ChatMessage]) -> List[ChatMessage]:
    return [ChatMessage(role="system", content=CHAT_SYSTEM_PROMPT), *messages]

def _selection(note: str, selection: Optional[str]) -> str:
    if selection is None:
        return ""
    return f"Selection ({note}):\n{selection}\n\n"

def _explain(content: str, selection: Optional[str]) -> str:
    code = selection if selection is not None else content
    return f"Explain the following code concisely with key points and any risks:\n\n{code}"

def _fix(content: str, selection: Optional[str]) -> str:
    return (
        f"Fix issues in this code. {JSON_ONLY_INSTRUCTION}\n\n"
        f"{_selection('fix this region; keep other code intact', selection)}"
        f"Full file:\n{content}"
    )

def _refactor(content: str, selection: Optional[str]) -> str:
    return (
        "Refactor the code to improve readability/structure without changing behavior. "
        f"{JSON_ONLY_INSTRUCTION}\n\n"
        f"{_selection('refactor this region; keep other code intact', selection)}"
        f"Full file:\n{content}"
    )

def _tests(content: str, selection: Optional[str]) -> str:
    return (
        "Generate a set of high-value tests for this code. Provide:\n"
        "1) Suggested test cases\n"
        "2) Example test code\n"
        "3) Notes on edge cases and mocks\n\n"
        f"{_selection('focus tests for this region', selection)}"
        f"Code:\n{content}"
    )

def _docs(content: str, selection: Optional[str]) -> str:
    return (
        "Write concise documentation for this code: purpose, usage, and gotchas. "
        "Include examples if helpful.\n\n"
        f"{_selection('document this region', selection)}"
        f"Code:\n{content}"
    )

def _commit(content: str, selection: Optional[str]) -> str:
    return (
        "Write a great git commit message for the changes implied by this code. Output:\n"
        "1) A short imperative subject line\n"
        "2) A detailed body (bullets)\n"
        "3) Any breaking changes notes\n\n"
        f"{_selection('summarize changes or intent for this region', selection)}"
        f"Code:\n{content}"
    )

ACTIONS: Dict[str, Callable[[str, Optional[str]], str]] = {
    "explain": _explain,
    "fix": _fix,
    "refactor": _refactor,
    "tests": _tests,
    "docs": _docs,
    "commit": _commit,
}

def build_action_prompt(
    action: str,
    path: Optional[str],
    content: str,
    selection: Optional[str] = None,
) -> str:
    builder = ACTIONS.get(action)
    if builder is None:
        raise UnknownActionError(action)
    path_line = f"File: {path}\n" if path is not None else ""
    return path_line + builder(content, selection)

def build_action_messages(
    action: str,
    path: Optional[str],
    content: str,
    selection: Optional[str] = None,
) -> List[ChatMessage]:
    return [
        ChatMessage(role="system", content=ACTION_SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_action_prompt(action, path, content, selection)),
    ]
