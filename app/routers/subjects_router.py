# /app/routers/subjects_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..core.deps import RequestContext, get_protected_context
from ..core.http_errors import require_found, unwrap_or_raise
from ..models import subject_model
from ..models.enums import Status
from ..services import subject_service

router = APIRouter()


@router.get("/search", response_model=List[subject_model.Subject], summary="Search Subjects (Active by Default)")
def search_subjects(
    search: Optional[str] = None,
    status: Optional[Status] = None,
    class_group_id: Optional[str] = Query(None, alias="classGroupId"),
    ctx: RequestContext = Depends(get_protected_context),
):
    params = subject_model.SubjectSearchParams(search=search, status=status, classGroupId=class_group_id)
    return unwrap_or_raise(subject_service.search_subjects(ctx, params))


@router.post("", response_model=subject_model.Subject, status_code=status.HTTP_201_CREATED, summary="Create a Subject")
def create_subject(subject_create: subject_model.SubjectCreate, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(subject_service.create_subject(ctx, subject_create))


@router.get("/{subject_id}", response_model=subject_model.Subject, summary="Get a Subject")
def get_subject(subject_id: str, ctx: RequestContext = Depends(get_protected_context)):
    found = unwrap_or_raise(subject_service.get_subject(ctx, subject_id))
    return require_found(found, f"Subject with ID {subject_id} not found")


@router.put("/{subject_id}", response_model=subject_model.Subject, summary="Update a Subject")
def update_subject(subject_id: str, subject_update: subject_model.SubjectUpdate, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(subject_service.update_subject(ctx, subject_id, subject_update))


@router.delete("/{subject_id}", summary="Delete a Subject")
def delete_subject(subject_id: str, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(subject_service.delete_subject(ctx, subject_id))
