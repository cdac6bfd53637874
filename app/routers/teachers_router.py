# /app/routers/teachers_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..core.deps import RequestContext, get_protected_context
from ..core.http_errors import unwrap_or_raise
from ..models import teacher_model
from ..models.enums import Status
from ..services import teacher_service

router = APIRouter()


@router.get("/search", response_model=List[teacher_model.Teacher], summary="Search Teachers (Active by Default)")
def search_teachers(
    search: Optional[str] = None,
    status: Optional[Status] = None,
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    campus_id: Optional[str] = Query(None, alias="campusId"),
    ctx: RequestContext = Depends(get_protected_context),
):
    params = teacher_model.TeacherSearchParams(search=search, status=status, subjectId=subject_id, campusId=campus_id)
    return unwrap_or_raise(teacher_service.search_teachers(ctx, params))


@router.post("", response_model=teacher_model.Teacher, status_code=status.HTTP_201_CREATED, summary="Create a Teacher")
def create_teacher(teacher_create: teacher_model.TeacherCreate, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(teacher_service.create_teacher(ctx, teacher_create))


@router.get("/{teacher_id}", response_model=Optional[teacher_model.Teacher], summary="Get a Teacher by User ID")
def get_teacher(teacher_id: str, ctx: RequestContext = Depends(get_protected_context)):
    """Returns null for an unknown ID; the edit page turns that into its not-found state."""
    return unwrap_or_raise(teacher_service.get_teacher(ctx, teacher_id))


@router.put("/{teacher_id}", response_model=teacher_model.Teacher, summary="Update a Teacher")
def update_teacher(teacher_id: str, teacher_update: teacher_model.TeacherUpdate, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(teacher_service.update_teacher(ctx, teacher_id, teacher_update))


@router.delete("/{teacher_id}", summary="Delete a Teacher")
def delete_teacher(teacher_id: str, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(teacher_service.delete_teacher(ctx, teacher_id))
