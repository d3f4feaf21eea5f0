"""/api/teacher routes: registration, login, classes, roster."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from core.services import Services
from professor.api.deps import get_services
from professor.api.schemas import CreateClassRequest, LoginRequest, RegisterRequest

router = APIRouter(prefix="/api/teacher")


@router.post("/register")
def register(
    req: RegisterRequest, svc: Services = Depends(get_services)
):  # noqa: D401
    teacher = svc.registry.register_teacher(
        req.name, req.email, req.password, req.school
    )
    return {
        "success": True,
        "teacherId": teacher.id,
        "teacher": teacher.public(),
    }


@router.post("/login")
def login(req: LoginRequest, svc: Services = Depends(get_services)):  # noqa: D401
    teacher = svc.registry.authenticate(req.email, req.password)
    return {"success": True, "teacher": teacher.public()}


@router.post("/create-class")
def create_class(
    req: CreateClassRequest, svc: Services = Depends(get_services)
):  # noqa: D401
    room = svc.registry.create_class(
        req.teacher_id, req.class_name, req.subject, req.description
    )
    return {"success": True, "class": room.public()}


@router.get("/{teacher_id}/classes")
def classes(
    teacher_id: str, svc: Services = Depends(get_services)
):  # noqa: D401
    return {"classes": svc.registry.classes_for_teacher(teacher_id)}


@router.get("/{teacher_id}/students")
def students(
    teacher_id: str, svc: Services = Depends(get_services)
):  # noqa: D401
    return {"students": svc.registry.students_for_teacher(teacher_id)}
