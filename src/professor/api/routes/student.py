"""/api/student routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from core.services import Services
from professor.api.deps import get_services
from professor.api.schemas import JoinRequest

router = APIRouter(prefix="/api/student")


@router.post("/join")
def join(req: JoinRequest, svc: Services = Depends(get_services)):  # noqa: D401
    student, room = svc.registry.join_class(req.join_code, req.student_name)
    return {"success": True, "studentId": student.id, "class": room.summary()}
