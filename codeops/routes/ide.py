# codeops/routes/ide.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from codeops.models.ide import (
    ActionRequest,
    ActionResult,
    ChatRequest,
    ChatResult,
    OpenRouterModel,
)
from codeops.services.orchestrator import AiService

router = APIRouter(prefix="/v1/ai")

def get_service() -> AiService:
    return AiService()

@router.post("/chat", response_model=ChatResult)
def ai_chat(req: ChatRequest, service: AiService = Depends(get_service)):
    return service.chat(req.messages, model_override=req.model, thinking=req.thinking)

@router.post("/action", response_model=ActionResult)
def ai_action(req: ActionRequest, service: AiService = Depends(get_service)):
    return service.run_action(
        req.action,
        req.path,
        req.content,
        selection=req.selection,
        thinking=req.thinking,
    )

@router.get("/openrouter/models", response_model=List[OpenRouterModel])
def openrouter_models(service: AiService = Depends(get_service)):
    return service.list_openrouter_models()
