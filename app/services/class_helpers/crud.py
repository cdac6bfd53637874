# /app/services/class_helpers/crud.py

"""
Record building for class writes: turns a validated `ClassCreate` into the
column dict and the teacher-assignment rows the repository persists.
"""

from typing import Dict, List, Optional

from ...models import class_model
from ...models.enums import Status
from ..database_service import DatabaseService


def build_class_record(class_data: class_model.ClassCreate) -> Dict:
    """Column values for a new class. Optional relations are only connected when supplied."""
    record = {
        "name": class_data.name,
        "class_group_id": class_data.classGroupId,
        "campus_id": class_data.campusId,
        "capacity": class_data.capacity,
        "status": class_data.status.value,
        "description": class_data.description,
    }
    if class_data.buildingId:
        record["building_id"] = class_data.buildingId
    if class_data.roomId:
        record["room_id"] = class_data.roomId
    return record


def build_update_fields(class_data: class_model.ClassCreate) -> Dict:
    """
    Column values for updateClass. Scalars and the class group are always
    replaced; campus, building and room are only reconnected when given.
    """
    fields = {
        "name": class_data.name,
        "capacity": class_data.capacity,
        "status": class_data.status.value,
        "description": class_data.description,
        "class_group_id": class_data.classGroupId,
    }
    if class_data.campusId:
        fields["campus_id"] = class_data.campusId
    if class_data.buildingId:
        fields["building_id"] = class_data.buildingId
    if class_data.roomId:
        fields["room_id"] = class_data.roomId
    return fields


def build_teacher_assignments(
    db: DatabaseService,
    teacher_ids: Optional[List[str]],
    class_tutor_id: Optional[str],
) -> List[Dict]:
    """
    Resolves user IDs (the listed teachers plus the class tutor) to teacher
    profiles. User IDs without a profile are skipped. The tutor's row is
    flagged as the class teacher.
    """
    user_ids = [uid for uid in [*(teacher_ids or []), class_tutor_id] if uid]
    profiles = db.get_teacher_profiles_by_user_ids(list(dict.fromkeys(user_ids)))
    return [
        {
            "teacher_id": profile.id,
            "is_class_teacher": profile.user_id == class_tutor_id,
            "status": Status.ACTIVE.value,
        }
        for profile in profiles
    ]
