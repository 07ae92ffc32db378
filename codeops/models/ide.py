# codeops/models/ide.py
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

class ChatMessage(BaseModel):
    role: str
    content: str

class ProviderDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    base_url: str
    default_model: str
    needs_auth: bool

# ----- edit operations proposed by the model -----

class _Edit(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

class WriteEdit(_Edit):
    op: Literal["write"]
    path: str
    content: str

class PatchEdit(_Edit):
    op: Literal["patch"]
    path: str
    content: str

class DeleteEdit(_Edit):
    op: Literal["delete"]
    path: str

class RenameEdit(_Edit):
    op: Literal["rename"]
    from_: str = Field(alias="from")
    to: str

class RunEdit(_Edit):
    op: Literal["run"]
    content: str
    path: Optional[str] = None

EditOperation = Annotated[
    Union[WriteEdit, PatchEdit, DeleteEdit, RenameEdit, RunEdit],
    Field(discriminator="op"),
]

# ----- structured output schemas -----

class ChatOutput(BaseModel):
    assistant_message: Optional[str] = None
    edits: Optional[List[EditOperation]] = None
    summary: Optional[str] = None

class ActionOutput(BaseModel):
    updated_content: Optional[str] = None
    summary: Optional[str] = None

# ----- results handed back to callers -----

class ChatResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_text: str
    edits: Optional[List[EditOperation]] = None

class ActionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_text: str
    updated_content: Optional[str] = None

class OpenRouterModel(BaseModel):
    id: str

# ----- command layer requests -----

class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    model: Optional[str] = None
    thinking: Optional[str] = None

class ActionRequest(BaseModel):
    action: str
    path: Optional[str] = None
    content: str
    selection: Optional[str] = None
    thinking: Optional[str] = None
