# /app/services/database_service.py

from datetime import datetime
from typing import Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db
# Registers every model with the mapper before the first query runs.
from app.db import base  # noqa: F401

# --- Repository Imports ---
from .database_helpers.class_repository_sql import (
    ClassRepositorySQL,
    SEARCH_OPTIONS,
    DETAIL_OPTIONS,
    FULL_DETAIL_OPTIONS,
)
from .database_helpers.teacher_repository_sql import TeacherRepositorySQL
from .database_helpers.subject_repository_sql import SubjectRepositorySQL
from .database_helpers.gradebook_repository_sql import GradeBookRepositorySQL
from .database_helpers.analytics_repository_sql import AnalyticsRepositorySQL


class DatabaseService:
    """
    The store handle carried by every request context. It owns one SQL
    repository per entity family and exposes their queries as a flat facade.
    """

    def __init__(self, db_session: Session):
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.class_repo = ClassRepositorySQL(db_session)
        self.teacher_repo = TeacherRepositorySQL(db_session)
        self.subject_repo = SubjectRepositorySQL(db_session)
        self.gradebook_repo = GradeBookRepositorySQL(db_session)
        self.analytics_repo = AnalyticsRepositorySQL(db_session)

    # --- CLASS METHODS (DELEGATED) ---
    def search_classes(self, **filters) -> List: return self.class_repo.search_classes(options=SEARCH_OPTIONS, **filters)
    def filter_classes(self, **filters) -> List: return self.class_repo.search_classes(options=DETAIL_OPTIONS, **filters)
    def get_all_classes(self) -> List: return self.class_repo.get_all_classes()
    def get_class_overview(self, class_id: str): return self.class_repo.get_class_by_id(class_id, options=DETAIL_OPTIONS)
    def get_class_full_details(self, class_id: str): return self.class_repo.get_class_by_id(class_id, options=FULL_DETAIL_OPTIONS)
    def get_classes_for_teacher_user(self, user_id: str) -> List: return self.class_repo.get_classes_for_teacher_user(user_id)
    def add_class(self, class_record: Dict, assignments: List[Dict]): return self.class_repo.add_class(class_record, assignments)
    def update_class(self, class_id: str, data: Dict, assignments: Optional[List[Dict]] = None): return self.class_repo.update_class(class_id, data, assignments)
    def delete_class(self, class_id: str) -> Dict: return self.class_repo.delete_class(class_id)
    def get_students_by_class_id(self, class_id: str) -> List: return self.class_repo.get_students_by_class_id(class_id)
    def get_students_created_between(self, class_id: str, start: datetime, end: datetime) -> List: return self.class_repo.get_students_created_between(class_id, start, end)

    # --- TEACHER & USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.teacher_repo.get_user_by_id(user_id)
    def get_teacher(self, user_id: str): return self.teacher_repo.get_teacher(user_id)
    def search_teachers(self, **filters) -> List: return self.teacher_repo.search_teachers(**filters)
    def get_teacher_profiles_by_user_ids(self, user_ids: List[str]) -> List: return self.teacher_repo.get_profiles_by_user_ids(user_ids)
    def add_teacher(self, user_record: Dict, profile_record: Dict, subject_ids: List[str], class_ids: List[str], campus_ids: List[str]):
        return self.teacher_repo.add_teacher(user_record, profile_record, subject_ids, class_ids, campus_ids)
    def update_teacher(self, user_id: str, user_fields: Dict, profile_fields: Dict, **links):
        return self.teacher_repo.update_teacher(user_id, user_fields, profile_fields, **links)
    def delete_teacher(self, user_id: str) -> Dict: return self.teacher_repo.delete_teacher(user_id)

    # --- SUBJECT METHODS (DELEGATED) ---
    def get_subject_by_id(self, subject_id: str): return self.subject_repo.get_subject_by_id(subject_id)
    def search_subjects(self, **filters) -> List: return self.subject_repo.search_subjects(**filters)
    def add_subject(self, record: Dict, class_group_ids: List[str]): return self.subject_repo.add_subject(record, class_group_ids)
    def update_subject(self, subject_id: str, data: Dict, class_group_ids: Optional[List[str]] = None): return self.subject_repo.update_subject(subject_id, data, class_group_ids)
    def delete_subject(self, subject_id: str) -> Dict: return self.subject_repo.delete_subject(subject_id)

    # --- GRADEBOOK METHODS (DELEGATED) ---
    def get_gradebook_by_class_id(self, class_id: str): return self.gradebook_repo.get_gradebook_by_class_id(class_id)
    def get_class_for_gradebook(self, class_id: str): return self.gradebook_repo.get_class_for_gradebook(class_id)
    def get_assessment_system_by_name(self, name: str): return self.gradebook_repo.get_assessment_system_by_name(name)
    def add_assessment_system(self, system): return self.gradebook_repo.add_assessment_system(system)
    def add_gradebook(self, gradebook): return self.gradebook_repo.add_gradebook(gradebook)

    # --- ANALYTICS METHODS (DELEGATED) ---
    def get_attendance_for_class(self, class_id: str, start: datetime, end: datetime) -> List: return self.analytics_repo.get_attendance_for_class(class_id, start, end)
    def get_activities_for_class(self, class_id: str, start: datetime, end: datetime) -> List: return self.analytics_repo.get_activities_for_class(class_id, start, end)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
