# /app/services/database_helpers/class_repository_sql.py

"""
This module contains the SQLAlchemy queries for the Class table and its
direct relations. It is the only place that decides how deep a class query
eager-loads: each use case picks one of the fixed loader sets below instead
of pulling an unbounded object graph.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import selectinload

from app.db.errors import RecordNotFoundError
from app.db.models.class_models import Class, ClassGroup, Calendar, TeacherClass
from app.db.models.user_models import StudentProfile, TeacherProfile
from app.db.models.activity_models import ClassActivity
from app.db.models.timetable_models import Timetable, Period

from .base_repository_sql import BaseRepositorySQL, sync_links


# --- Loader Sets (one per use case) ---

RECORD_OPTIONS = (
    selectinload(Class.class_group).selectinload(ClassGroup.program),
    selectinload(Class.campus),
    selectinload(Class.building),
    selectinload(Class.room),
    selectinload(Class.teachers).selectinload(TeacherClass.teacher).selectinload(TeacherProfile.user),
)

SEARCH_OPTIONS = RECORD_OPTIONS + (
    selectinload(Class.students).selectinload(StudentProfile.user),
)

_PERIOD_OPTIONS = (
    selectinload(Class.timetables).selectinload(Timetable.periods).selectinload(Period.subject),
    selectinload(Class.timetables).selectinload(Timetable.periods).selectinload(Period.classroom),
    selectinload(Class.timetables).selectinload(Timetable.periods)
    .selectinload(Period.teacher).selectinload(TeacherProfile.user),
)

DETAIL_OPTIONS = SEARCH_OPTIONS + _PERIOD_OPTIONS + (
    selectinload(Class.activities),
)

FULL_DETAIL_OPTIONS = SEARCH_OPTIONS + _PERIOD_OPTIONS + (
    selectinload(Class.activities).selectinload(ClassActivity.submissions),
    selectinload(Class.class_group).selectinload(ClassGroup.calendar).selectinload(Calendar.events),
)


class ClassRepositorySQL(BaseRepositorySQL):

    # --- Reads ---

    def get_class_by_id(self, class_id: str, options=RECORD_OPTIONS) -> Optional[Class]:
        return self.db.query(Class).options(*options).filter(Class.id == class_id).first()

    def search_classes(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        class_group_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
        campus_id: Optional[str] = None,
        options=SEARCH_OPTIONS,
    ) -> List[Class]:
        """
        Every filter is optional and only applied when given. `search` is a
        case-insensitive substring match on the class name.
        """
        query = self.db.query(Class).options(*options)
        if status:
            query = query.filter(Class.status == status)
        if search:
            query = query.filter(Class.name.icontains(search, autoescape=True))
        if class_group_id:
            query = query.filter(Class.class_group_id == class_group_id)
        if teacher_id:
            query = query.filter(Class.teachers.any(TeacherClass.teacher_id == teacher_id))
        if campus_id:
            query = query.filter(Class.campus_id == campus_id)
        return query.order_by(Class.name.asc()).all()

    def get_all_classes(self) -> List[Class]:
        return self.db.query(Class).options(*RECORD_OPTIONS).order_by(Class.name.asc()).all()

    def get_classes_for_teacher_user(self, user_id: str) -> List[Class]:
        """Classes where the given user is an assigned teacher."""
        return (
            self.db.query(Class)
            .options(*RECORD_OPTIONS)
            .filter(Class.teachers.any(TeacherClass.teacher.has(TeacherProfile.user_id == user_id)))
            .order_by(Class.name.asc())
            .all()
        )

    def get_students_by_class_id(self, class_id: str) -> List[StudentProfile]:
        return (
            self.db.query(StudentProfile)
            .options(selectinload(StudentProfile.user))
            .filter(StudentProfile.class_id == class_id)
            .all()
        )

    def get_students_created_between(self, class_id: str, start: datetime, end: datetime) -> List[StudentProfile]:
        return (
            self.db.query(StudentProfile)
            .options(selectinload(StudentProfile.user))
            .filter(
                StudentProfile.class_id == class_id,
                StudentProfile.created_at >= start,
                StudentProfile.created_at <= end,
            )
            .order_by(StudentProfile.created_at.asc(), StudentProfile.id.asc())
            .all()
        )

    # --- Writes ---

    def add_class(self, record: Dict, assignments: List[Dict]) -> Class:
        """
        Creates a class together with its teacher assignments in one commit.
        Relations are connected purely by the IDs in `record`; the store's
        foreign keys reject IDs that do not exist.
        """
        new_class = Class(**record)
        new_class.teachers = [TeacherClass(**a) for a in assignments]
        self.db.add(new_class)
        self._commit()
        return self.get_class_by_id(new_class.id)

    def update_class(self, class_id: str, data: Dict, assignments: Optional[List[Dict]] = None) -> Class:
        db_class = self.db.query(Class).filter(Class.id == class_id).first()
        if db_class is None:
            raise RecordNotFoundError("Class", class_id)

        for key, value in data.items():
            setattr(db_class, key, value)

        if assignments is not None:
            by_teacher = {a["teacher_id"]: a for a in assignments}
            db_class.teachers = sync_links(
                db_class.teachers, list(by_teacher), "teacher_id",
                lambda teacher_id: TeacherClass(**by_teacher[teacher_id]),
            )
            for link in db_class.teachers:
                link.is_class_teacher = by_teacher[link.teacher_id]["is_class_teacher"]

        self._commit()
        return self.get_class_by_id(class_id)

    def delete_class(self, class_id: str) -> Dict:
        """
        Deletes a class and returns its column values as they were.
        A missing ID is a store failure, never a silent no-op.
        """
        db_class = self.db.query(Class).filter(Class.id == class_id).first()
        if db_class is None:
            raise RecordNotFoundError("Class", class_id)
        snapshot = {c.name: getattr(db_class, c.name) for c in db_class.__table__.columns}
        self.db.delete(db_class)
        self._commit()
        return snapshot
