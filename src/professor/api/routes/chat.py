"""/api/chat and /api/clear routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from core.services import Services
from professor.api.deps import get_services
from professor.api.schemas import ChatRequest, ClearRequest

router = APIRouter(prefix="/api")


@router.post("/chat")
def chat(req: ChatRequest, svc: Services = Depends(get_services)):  # noqa: D401
    reply = svc.chat.exchange(
        req.session_id,
        req.message,
        topic_title=req.prompt_title,
        student_id=req.student_id,
    )
    return {"response": reply}


@router.post("/clear")
def clear(req: ClearRequest, svc: Services = Depends(get_services)):  # noqa: D401
    svc.chat.clear(req.session_id)
    return {"success": True}
