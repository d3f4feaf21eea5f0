"""Read-only routes: prompt library and admin analytics."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from core.prompts import get_prompts, resolve_subject
from core.services import Services
from professor.api.deps import get_services

router = APIRouter(prefix="/api")


@router.get("/prompts/{subject}")
def prompts(subject: str):  # noqa: D401
    return {"subject": resolve_subject(subject), "prompts": get_prompts(subject)}


@router.get("/admin/analytics")
def analytics(svc: Services = Depends(get_services)):  # noqa: D401
    return svc.ledger.analytics_view(svc.sessions)
