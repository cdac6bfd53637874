# /app/routers/classes_router.py

"""
HTTP surface of the `class.*` procedures.

Every endpoint requires a caller. The router validates the input shape,
hands the request context to the class service, and turns a failed result
into the matching HTTP error.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..core.deps import RequestContext, get_protected_context
from ..core.http_errors import require_found, unwrap_or_raise
from ..models import analytics_model, class_model, gradebook_model
from ..models.enums import Status
from ..services import class_service

router = APIRouter()


# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.ClassRecord], summary="List All Classes")
def list_classes(ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.list_classes(ctx))


@router.post("", response_model=class_model.ClassRecord, status_code=status.HTTP_201_CREATED, summary="Create a Class")
def create_class(class_create: class_model.ClassCreate, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.create_class(ctx, class_create))


@router.get("/search", response_model=List[class_model.ClassSearchResult], summary="Search Classes (Active by Default)")
def search_classes(
    class_group_id: Optional[str] = Query(None, alias="classGroupId"),
    search: Optional[str] = None,
    teacher_id: Optional[str] = Query(None, alias="teacherId"),
    status: Optional[Status] = None,
    campus_id: Optional[str] = Query(None, alias="campusId"),
    ctx: RequestContext = Depends(get_protected_context),
):
    params = class_model.ClassSearchParams(
        classGroupId=class_group_id, search=search, teacherId=teacher_id, status=status, campusId=campus_id
    )
    return unwrap_or_raise(class_service.search_classes(ctx, params))


@router.get("/filter", response_model=List[class_model.ClassDetails], summary="Filter Classes Without Defaults")
def filter_classes(
    search: Optional[str] = None,
    status: Optional[Status] = None,
    class_group_id: Optional[str] = Query(None, alias="classGroupId"),
    teacher_id: Optional[str] = Query(None, alias="teacherId"),
    ctx: RequestContext = Depends(get_protected_context),
):
    params = class_model.ClassFilterParams(search=search, status=status, classGroupId=class_group_id, teacherId=teacher_id)
    return unwrap_or_raise(class_service.filter_classes(ctx, params))


@router.get("/mine", response_model=List[class_model.ClassRecord], summary="Get the Caller's Classes")
def get_teacher_classes(ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.get_teacher_classes(ctx))


# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=Optional[class_model.ClassDetails], summary="Get a Class Overview")
def get_class(class_id: str, ctx: RequestContext = Depends(get_protected_context)):
    """Returns null for an unknown ID, like the other plain lookups."""
    return unwrap_or_raise(class_service.get_class(ctx, class_id))


@router.get("/{class_id}/schedule", response_model=class_model.ClassDetails, summary="Get a Class with its Timetables")
def get_class_schedule(class_id: str, ctx: RequestContext = Depends(get_protected_context)):
    found = unwrap_or_raise(class_service.get_class_schedule(ctx, class_id))
    return require_found(found, f"Class with ID {class_id} not found")


@router.get("/{class_id}/details", response_model=class_model.ClassDetails, summary="Get a Class with Full Details")
def get_class_details(class_id: str, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.get_class_details(ctx, class_id))


@router.put("/{class_id}", response_model=class_model.ClassRecord, summary="Update a Class")
def update_class(class_id: str, class_update: class_model.ClassCreate, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.update_class(ctx, class_id, class_update))


@router.delete("/{class_id}", summary="Delete a Class")
def delete_class(class_id: str, ctx: RequestContext = Depends(get_protected_context)):
    """Answers with the deleted row; an unknown ID is a 404, never a silent success."""
    return unwrap_or_raise(class_service.delete_class(ctx, class_id))


@router.get("/{class_id}/students", response_model=List[class_model.StudentRef], summary="Get the Students of a Class")
def get_students(class_id: str, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.get_students(ctx, class_id))


@router.get("/{class_id}/gradebook", response_model=gradebook_model.GradeBookView, summary="Get (or Initialize) the Class Gradebook")
def get_gradebook(class_id: str, ctx: RequestContext = Depends(get_protected_context)):
    return unwrap_or_raise(class_service.get_gradebook(ctx, class_id))


# --- ANALYTICS ENDPOINTS ---

@router.get("/{class_id}/analytics/history", response_model=analytics_model.HistoricalAnalytics, summary="Historical Enrolment")
def get_historical_analytics(
    class_id: str,
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    ctx: RequestContext = Depends(get_protected_context),
):
    return unwrap_or_raise(class_service.get_historical_analytics(ctx, class_id, start_date, end_date))


@router.get("/{class_id}/analytics/performance", response_model=analytics_model.PerformanceTrends, summary="Performance Trends")
def get_performance_trends(
    class_id: str,
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    ctx: RequestContext = Depends(get_protected_context),
):
    return unwrap_or_raise(class_service.get_performance_trends(ctx, class_id, start_date, end_date))


@router.get("/{class_id}/analytics/attendance", response_model=analytics_model.AttendanceStats, summary="Attendance Statistics")
def get_attendance_stats(
    class_id: str,
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    ctx: RequestContext = Depends(get_protected_context),
):
    return unwrap_or_raise(class_service.get_attendance_stats(ctx, class_id, start_date, end_date))
