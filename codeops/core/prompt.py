# codeops/core/prompt.py
from __future__ import annotations

import textwrap

from codeops.core.schema import ACTION_OUTPUT_KEYS, CHAT_OUTPUT_SCHEMA

CHAT_SYSTEM_PROMPT = " ".join(
    textwrap.dedent(
        """
        You are a coding assistant inside an editor. Be direct and helpful.
        IMPORTANT: Respond ONLY with a single valid JSON object (no markdown, no code fences).
        Schema: {schema}.
        Never put code in assistant_message; code must only appear inside edits[].content.
        If you have no edits, return {{"assistant_message": <answer>, "edits": []}}.
        """
    ).split("\n")
).strip().format(schema=CHAT_OUTPUT_SCHEMA)

ACTION_SYSTEM_PROMPT = (
    "You are a precise coding assistant inside an editor. "
    "Follow the user instructions exactly."
)

JSON_ONLY_INSTRUCTION = f"Return ONLY valid JSON with keys: {ACTION_OUTPUT_KEYS}."
