# /app/services/class_service.py

"""
This service module holds the `class.*` procedures.

Each procedure takes the per-request context and an already validated input,
talks to the store through `ctx.db`, and returns a `Result`. Store failures
are logged here and mapped onto the error taxonomy with the original
exception attached as the cause; nothing is raised to the caller.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..core.deps import RequestContext
from ..core.errors import ErrorKind, Result, store_failure, unauthorized
from ..models import analytics_model, class_model, gradebook_model
from ..models.enums import Status
from .class_helpers import analytics, assembly, crud
from .gradebook_service import create_gradebook_service, to_gradebook_view

logger = logging.getLogger(__name__)


# --- Queries ---

def search_classes(ctx: RequestContext, params: class_model.ClassSearchParams) -> Result[List[class_model.ClassSearchResult]]:
    """Classes matching the filters, ordered by name. Status defaults to ACTIVE."""
    try:
        classes = ctx.db.search_classes(
            status=(params.status or Status.ACTIVE).value,
            search=params.search,
            class_group_id=params.classGroupId,
            teacher_id=params.teacherId,
            campus_id=params.campusId,
        )
        return Result.ok([assembly.class_search_result(c) for c in classes])
    except Exception as e:
        return store_failure("Failed to fetch classes", e, logger)


def filter_classes(ctx: RequestContext, params: class_model.ClassFilterParams) -> Result[List[class_model.ClassDetails]]:
    """The plain `search` procedure: filters pass straight through, no status default."""
    try:
        classes = ctx.db.filter_classes(
            status=params.status.value if params.status else None,
            search=params.search,
            class_group_id=params.classGroupId,
            teacher_id=params.teacherId,
        )
        return Result.ok([assembly.class_details(c) for c in classes])
    except Exception as e:
        return store_failure("Failed to search classes", e, logger)


def get_class(ctx: RequestContext, class_id: str) -> Result[Optional[class_model.ClassDetails]]:
    """The class overview, or an ok result holding None when the ID is unknown."""
    try:
        cls = ctx.db.get_class_overview(class_id)
        return Result.ok(assembly.class_details(cls) if cls is not None else None)
    except Exception as e:
        return store_failure("Failed to fetch class", e, logger)


def get_class_schedule(ctx: RequestContext, class_id: str) -> Result[Optional[class_model.ClassDetails]]:
    """getById: the class with its timetables expanded down to each period's subject, room and teacher."""
    try:
        cls = ctx.db.get_class_full_details(class_id)
        return Result.ok(assembly.class_details(cls, include_submissions=True) if cls is not None else None)
    except Exception as e:
        return store_failure("Failed to fetch class", e, logger)


def get_class_details(ctx: RequestContext, class_id: str) -> Result[class_model.ClassDetails]:
    try:
        cls = ctx.db.get_class_full_details(class_id)
    except Exception as e:
        return store_failure("Failed to fetch class details", e, logger)
    if cls is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Class not found")
    return Result.ok(assembly.class_details(cls, include_submissions=True, include_calendar=True))


def list_classes(ctx: RequestContext) -> Result[List[class_model.ClassRecord]]:
    if ctx.user is None:
        return unauthorized()
    try:
        logger.debug("Listing classes for %s (source=%s)", ctx.user_id, ctx.source)
        return Result.ok([assembly.class_record(c) for c in ctx.db.get_all_classes()])
    except Exception as e:
        return store_failure("Failed to list classes", e, logger)


def get_teacher_classes(ctx: RequestContext) -> Result[List[class_model.ClassRecord]]:
    """Classes the caller teaches. An anonymous caller simply teaches nothing."""
    if ctx.user is None:
        return Result.ok([])
    try:
        return Result.ok([assembly.class_record(c) for c in ctx.db.get_classes_for_teacher_user(ctx.user_id)])
    except Exception as e:
        return store_failure("Failed to fetch teacher classes", e, logger)


def get_students(ctx: RequestContext, class_id: str) -> Result[List[class_model.StudentRef]]:
    try:
        return Result.ok([assembly.student_ref(s) for s in ctx.db.get_students_by_class_id(class_id)])
    except Exception as e:
        return store_failure("Failed to fetch students", e, logger)


# --- Mutations ---

def create_class(ctx: RequestContext, class_data: class_model.ClassCreate) -> Result[class_model.ClassRecord]:
    try:
        assignments = crud.build_teacher_assignments(ctx.db, class_data.teacherIds, class_data.classTutorId)
        new_class = ctx.db.add_class(crud.build_class_record(class_data), assignments)
        logger.info("Created class %s (%s) with %d teachers", new_class.id, new_class.name, len(assignments))
        return Result.ok(assembly.class_record(new_class))
    except Exception as e:
        return store_failure("Failed to create class", e, logger)


def update_class(ctx: RequestContext, class_id: str, class_data: class_model.ClassCreate) -> Result[class_model.ClassRecord]:
    try:
        assignments = None
        if class_data.teacherIds is not None:
            assignments = crud.build_teacher_assignments(ctx.db, class_data.teacherIds, class_data.classTutorId)
        updated = ctx.db.update_class(class_id, crud.build_update_fields(class_data), assignments)
        return Result.ok(assembly.class_record(updated))
    except Exception as e:
        return store_failure("Failed to update class", e, logger)


def delete_class(ctx: RequestContext, class_id: str) -> Result[dict]:
    """Deleting an unknown ID surfaces the store's not-found failure."""
    try:
        deleted = ctx.db.delete_class(class_id)
        logger.info("Deleted class %s", class_id)
        return Result.ok(deleted)
    except Exception as e:
        return store_failure("Failed to delete class", e, logger)


# --- Analytics ---

def get_historical_analytics(ctx: RequestContext, class_id: str, start: datetime, end: datetime) -> Result[analytics_model.HistoricalAnalytics]:
    try:
        students = ctx.db.get_students_created_between(class_id, start, end)
        return Result.ok(analytics.historical_analytics(students))
    except Exception as e:
        return store_failure("Failed to fetch historical analytics", e, logger)


def get_performance_trends(ctx: RequestContext, class_id: str, start: datetime, end: datetime) -> Result[analytics_model.PerformanceTrends]:
    try:
        activities = ctx.db.get_activities_for_class(class_id, start, end)
        return Result.ok(analytics.performance_trends(activities))
    except Exception as e:
        return store_failure("Failed to fetch performance trends", e, logger)


def get_attendance_stats(ctx: RequestContext, class_id: str, start: datetime, end: datetime) -> Result[analytics_model.AttendanceStats]:
    try:
        records = ctx.db.get_attendance_for_class(class_id, start, end)
        return Result.ok(analytics.attendance_stats(records))
    except Exception as e:
        return store_failure("Failed to fetch attendance stats", e, logger)


# --- Gradebook ---

def get_gradebook(ctx: RequestContext, class_id: str) -> Result[gradebook_model.GradeBookView]:
    """
    Reads the class gradebook, creating it on the first read. If it is still
    missing after initialization the result is NOT_FOUND.
    """
    try:
        gradebook = ctx.db.get_gradebook_by_class_id(class_id)
        if gradebook is None:
            create_gradebook_service(ctx.db).initialize_gradebook(class_id, created_by=ctx.user_id)
            gradebook = ctx.db.get_gradebook_by_class_id(class_id)
            if gradebook is None:
                return Result.fail(ErrorKind.NOT_FOUND, "Failed to initialize gradebook")
        return Result.ok(to_gradebook_view(gradebook))
    except Exception as e:
        return store_failure("Failed to fetch gradebook", e, logger)
