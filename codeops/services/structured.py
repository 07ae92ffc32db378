# codeops/services/structured.py
from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from codeops.core.errors import ContentNotFoundError
from codeops.models.ide import ActionOutput, ActionResult, ChatOutput, ChatResult
from codeops.services.text import find_first_object, shorten_for_error, strip_code_fences

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)

def parse_structured(raw: str, schema: Type[S]) -> Optional[S]:
    """Decode ``raw`` against ``schema``, digging the first JSON object out of
    prose or a fenced block when the text is not bare JSON."""
    try:
        return schema.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Direct %s decode failed: %s", schema.__name__, e.error_count())

    candidate = find_first_object(strip_code_fences(raw))
    if candidate is None:
        return None
    try:
        return schema.model_validate_json(candidate)
    except ValidationError as e:
        logger.info(
            "Embedded JSON object does not match %s (%d errors); treating reply as plain text",
            schema.__name__,
            e.error_count(),
        )
        return None

def resolve_chat_output(parsed: ChatOutput, raw: str) -> ChatResult:
    if parsed.assistant_message is not None:
        message = parsed.assistant_message
    elif parsed.summary is not None:
        message = parsed.summary
    else:
        message = ""

    if not message.strip() and not parsed.edits:
        raise ContentNotFoundError(f"No content found in API response: {shorten_for_error(raw)}")
    return ChatResult(output_text=message, edits=parsed.edits)

def chat_result(raw: str) -> ChatResult:
    parsed = parse_structured(raw, ChatOutput)
    if parsed is None:
        logger.info("Reply carried no structured chat object; returning it verbatim")
        return ChatResult(output_text=raw)
    return resolve_chat_output(parsed, raw)

def action_result(raw: str) -> ActionResult:
    parsed = parse_structured(raw, ActionOutput)
    if parsed is None:
        return ActionResult(output_text=raw)
    return ActionResult(output_text=parsed.summary or "", updated_content=parsed.updated_content)
