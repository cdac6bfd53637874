# /app/services/teacher_service.py

"""
The `teacher.*` procedures. A teacher is a `User` with a `TeacherProfile`;
responses flatten the profile's link rows into plain ID lists.
"""

import logging
from typing import List, Optional

from ..core.deps import RequestContext
from ..core.errors import Result, store_failure
from ..db.models.user_models import User
from ..models import teacher_model
from ..models.enums import Status

logger = logging.getLogger(__name__)

_USER_FIELDS = {"name": "name", "email": "email", "phoneNumber": "phone_number", "status": "status"}
_PROFILE_FIELDS = {"teacherType": "teacher_type", "specialization": "specialization"}
_NOT_NULL = {"status", "teacher_type", "name"}


def to_teacher(user: User) -> teacher_model.Teacher:
    profile = user.teacher_profile
    profile_view = None
    if profile is not None:
        profile_view = teacher_model.TeacherProfileView(
            id=profile.id,
            teacherType=profile.teacher_type,
            specialization=profile.specialization,
            subjectIds=[link.subject_id for link in profile.subjects],
            classIds=[link.class_id for link in profile.classes],
            campusIds=[link.campus_id for link in profile.campuses],
        )
    return teacher_model.Teacher(
        id=user.id,
        name=user.name,
        email=user.email,
        phoneNumber=user.phone_number,
        status=user.status,
        teacherProfile=profile_view,
    )


def _columns(data: dict, mapping: dict) -> dict:
    """
    Renames API fields to column names, unwrapping enum values. An explicit
    null for a non-nullable column is dropped rather than written.
    """
    return {
        column: getattr(data[field], "value", data[field])
        for field, column in mapping.items()
        if field in data and (data[field] is not None or column not in _NOT_NULL)
    }


def get_teacher(ctx: RequestContext, user_id: str) -> Result[Optional[teacher_model.Teacher]]:
    try:
        user = ctx.db.get_teacher(user_id)
        return Result.ok(to_teacher(user) if user is not None else None)
    except Exception as e:
        return store_failure("Failed to fetch teacher", e, logger)


def search_teachers(ctx: RequestContext, params: teacher_model.TeacherSearchParams) -> Result[List[teacher_model.Teacher]]:
    try:
        users = ctx.db.search_teachers(
            status=(params.status or Status.ACTIVE).value,
            search=params.search,
            subject_id=params.subjectId,
            campus_id=params.campusId,
        )
        return Result.ok([to_teacher(u) for u in users])
    except Exception as e:
        return store_failure("Failed to fetch teachers", e, logger)


def create_teacher(ctx: RequestContext, teacher_data: teacher_model.TeacherCreate) -> Result[teacher_model.Teacher]:
    data = teacher_data.model_dump()
    try:
        user = ctx.db.add_teacher(
            user_record={**_columns(data, _USER_FIELDS), "role": "TEACHER"},
            profile_record=_columns(data, _PROFILE_FIELDS),
            subject_ids=teacher_data.subjectIds,
            class_ids=teacher_data.classIds,
            campus_ids=teacher_data.campusIds,
        )
        logger.info("Created teacher %s", user.id)
        return Result.ok(to_teacher(user))
    except Exception as e:
        return store_failure("Failed to create teacher", e, logger)


def update_teacher(ctx: RequestContext, user_id: str, teacher_update: teacher_model.TeacherUpdate) -> Result[teacher_model.Teacher]:
    """Applies only the fields that were sent; a missing profile is created on demand."""
    data = teacher_update.model_dump(exclude_unset=True)
    try:
        user = ctx.db.update_teacher(
            user_id,
            _columns(data, _USER_FIELDS),
            _columns(data, _PROFILE_FIELDS),
            subject_ids=data.get("subjectIds"),
            class_ids=data.get("classIds"),
            campus_ids=data.get("campusIds"),
        )
        return Result.ok(to_teacher(user))
    except Exception as e:
        return store_failure("Failed to update teacher", e, logger)


def delete_teacher(ctx: RequestContext, user_id: str) -> Result[dict]:
    try:
        return Result.ok(ctx.db.delete_teacher(user_id))
    except Exception as e:
        return store_failure("Failed to delete teacher", e, logger)
