# /app/services/database_helpers/analytics_repository_sql.py

from datetime import datetime
from typing import List

from sqlalchemy.orm import selectinload

from app.db.models.activity_models import ClassActivity, Attendance
from app.db.models.user_models import StudentProfile

from .base_repository_sql import BaseRepositorySQL


class AnalyticsRepositorySQL(BaseRepositorySQL):
    """Read-only queries feeding the class analytics reductions."""

    def get_attendance_for_class(self, class_id: str, start: datetime, end: datetime) -> List[Attendance]:
        return (
            self.db.query(Attendance)
            .join(StudentProfile, Attendance.student_id == StudentProfile.id)
            .filter(
                StudentProfile.class_id == class_id,
                Attendance.date >= start,
                Attendance.date <= end,
            )
            .order_by(Attendance.date.asc())
            .all()
        )

    def get_activities_for_class(self, class_id: str, start: datetime, end: datetime) -> List[ClassActivity]:
        return (
            self.db.query(ClassActivity)
            .options(selectinload(ClassActivity.submissions), selectinload(ClassActivity.subject))
            .filter(
                ClassActivity.class_id == class_id,
                ClassActivity.created_at >= start,
                ClassActivity.created_at <= end,
            )
            .order_by(ClassActivity.created_at.asc(), ClassActivity.id.asc())
            .all()
        )
