# codeops/core/schema.py
from __future__ import annotations

# Shape of the single JSON object the model is asked to answer with in chat.
CHAT_OUTPUT_SCHEMA = (
    '{"assistant_message": string, '
    '"edits": [{"op": "write"|"patch"|"delete"|"rename"|"run", '
    '"path"?: string, "content"?: string, "from"?: string, "to"?: string}], '
    '"summary"?: string }'
)

# Keys requested from fix/refactor actions.
ACTION_OUTPUT_KEYS = "updated_content (full file), summary"
