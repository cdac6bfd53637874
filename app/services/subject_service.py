# /app/services/subject_service.py

import logging
from typing import List, Optional

from ..core.deps import RequestContext
from ..core.errors import Result, store_failure
from ..db.models.subject_models import Subject
from ..models import subject_model
from ..models.enums import Status

logger = logging.getLogger(__name__)


def to_subject(subject: Subject) -> subject_model.Subject:
    return subject_model.Subject(
        id=subject.id,
        code=subject.code,
        name=subject.name,
        description=subject.description,
        status=subject.status,
        classGroupIds=[link.class_group_id for link in subject.class_group_links],
    )


def search_subjects(ctx: RequestContext, params: subject_model.SubjectSearchParams) -> Result[List[subject_model.Subject]]:
    """Subjects matching the filters, ordered by name. Status defaults to ACTIVE."""
    try:
        subjects = ctx.db.search_subjects(
            status=(params.status or Status.ACTIVE).value,
            search=params.search,
            class_group_id=params.classGroupId,
        )
        return Result.ok([to_subject(s) for s in subjects])
    except Exception as e:
        return store_failure("Failed to fetch subjects", e, logger)


def get_subject(ctx: RequestContext, subject_id: str) -> Result[Optional[subject_model.Subject]]:
    try:
        subject = ctx.db.get_subject_by_id(subject_id)
        return Result.ok(to_subject(subject) if subject is not None else None)
    except Exception as e:
        return store_failure("Failed to fetch subject", e, logger)


def create_subject(ctx: RequestContext, subject_data: subject_model.SubjectCreate) -> Result[subject_model.Subject]:
    record = subject_data.model_dump(exclude={"classGroupIds"})
    record["status"] = subject_data.status.value
    try:
        return Result.ok(to_subject(ctx.db.add_subject(record, subject_data.classGroupIds)))
    except Exception as e:
        return store_failure("Failed to create subject", e, logger)


def update_subject(ctx: RequestContext, subject_id: str, subject_update: subject_model.SubjectUpdate) -> Result[subject_model.Subject]:
    data = subject_update.model_dump(exclude_unset=True)
    class_group_ids = data.pop("classGroupIds", None)
    for field in ("status", "code", "name"):
        if field in data and data[field] is None:
            data.pop(field)
    if "status" in data:
        data["status"] = data["status"].value
    try:
        return Result.ok(to_subject(ctx.db.update_subject(subject_id, data, class_group_ids)))
    except Exception as e:
        return store_failure("Failed to update subject", e, logger)


def delete_subject(ctx: RequestContext, subject_id: str) -> Result[dict]:
    try:
        return Result.ok(ctx.db.delete_subject(subject_id))
    except Exception as e:
        return store_failure("Failed to delete subject", e, logger)
