from __future__ import annotations

import pytest

from codeops.core.errors import ContentNotFoundError
from codeops.models.ide import (
    ActionOutput,
    ChatOutput,
    DeleteEdit,
    RenameEdit,
    RunEdit,
    WriteEdit,
)
from codeops.services.structured import action_result, chat_result, parse_structured


def test_parse_direct_json() -> None:
    parsed = parse_structured('{"assistant_message": "hi", "edits": []}', ChatOutput)
    assert parsed is not None
    assert parsed.assistant_message == "hi"
    assert parsed.edits == []


def test_parse_json_inside_prose_and_fence() -> None:
    raw = 'Here you go:\n```json\n{"assistant_message":"Hi!","edits":[]}\n```\nThanks'
    parsed = parse_structured(raw, ChatOutput)
    assert parsed is not None
    assert parsed.assistant_message == "Hi!"


def test_parse_fenced_only_reply() -> None:
    raw = '```json\n{"updated_content": "x = 1\\n", "summary": "done"}\n```'
    parsed = parse_structured(raw, ActionOutput)
    assert parsed == ActionOutput(updated_content="x = 1\n", summary="done")


def test_parse_plain_text_returns_none() -> None:
    assert parse_structured("Sure, happy to help.", ChatOutput) is None


def test_edit_variants_decode_to_tagged_models() -> None:
    raw = (
        '{"assistant_message": "ok", "edits": ['
        '{"op": "write", "path": "a.py", "content": "print(1)"},'
        '{"op": "delete", "path": "b.py"},'
        '{"op": "rename", "from": "c.py", "to": "d.py"},'
        '{"op": "run", "content": "pytest -q"}'
        "]}"
    )
    parsed = parse_structured(raw, ChatOutput)
    assert parsed is not None
    write, delete, rename, run = parsed.edits
    assert isinstance(write, WriteEdit) and write.content == "print(1)"
    assert isinstance(delete, DeleteEdit) and delete.path == "b.py"
    assert isinstance(rename, RenameEdit) and (rename.from_, rename.to) == ("c.py", "d.py")
    assert isinstance(run, RunEdit) and run.path is None
    assert rename.model_dump(by_alias=True) == {"op": "rename", "from": "c.py", "to": "d.py"}


@pytest.mark.parametrize(
    "edit",
    [
        '{"op": "rename", "from": "a.py"}',
        '{"op": "write", "path": "a.py"}',
        '{"op": "delete"}',
        '{"op": "chmod", "path": "a.py"}',
    ],
)
def test_malformed_edit_rejects_structured_output(edit: str) -> None:
    raw = '{"assistant_message": "ok", "edits": [' + edit + "]}"
    assert parse_structured(raw, ChatOutput) is None


def test_chat_result_prefers_assistant_message_then_summary() -> None:
    assert chat_result('{"assistant_message": "a", "summary": "s"}').output_text == "a"
    assert chat_result('{"summary": "s"}').output_text == "s"


def test_chat_result_edits_only_is_valid() -> None:
    result = chat_result('{"edits": [{"op": "delete", "path": "x"}]}')
    assert result.output_text == ""
    assert result.edits == [DeleteEdit(op="delete", path="x")]


def test_chat_result_empty_structured_output_is_an_error() -> None:
    with pytest.raises(ContentNotFoundError) as excinfo:
        chat_result('{"assistant_message": "  ", "edits": []}')
    assert '"assistant_message"' in str(excinfo.value)


def test_chat_result_degrades_to_raw_text() -> None:
    result = chat_result("no json here")
    assert result.output_text == "no json here"
    assert result.edits is None


def test_action_result_uses_summary_and_updated_content() -> None:
    result = action_result('{"updated_content": "new", "summary": "fixed bug"}')
    assert result.output_text == "fixed bug"
    assert result.updated_content == "new"


def test_action_result_falls_back_to_raw_text() -> None:
    result = action_result("I could not fix this.")
    assert result.output_text == "I could not fix this."
    assert result.updated_content is None
