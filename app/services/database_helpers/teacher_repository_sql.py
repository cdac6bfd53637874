# /app/services/database_helpers/teacher_repository_sql.py

"""
This module contains the SQLAlchemy queries for users and their teacher
profiles, including the subject, campus and class link rows a profile owns.
"""

from typing import Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from app.db.errors import RecordNotFoundError
from app.db.models.class_models import TeacherClass
from app.db.models.user_models import User, TeacherProfile, TeacherSubject, TeacherCampus

from .base_repository_sql import BaseRepositorySQL, sync_links

PROFILE_OPTIONS = (
    selectinload(User.teacher_profile).selectinload(TeacherProfile.subjects),
    selectinload(User.teacher_profile).selectinload(TeacherProfile.campuses),
    selectinload(User.teacher_profile).selectinload(TeacherProfile.classes),
)


class TeacherRepositorySQL(BaseRepositorySQL):

    # --- User Methods ---

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    # --- Teacher Reads ---

    def get_teacher(self, user_id: str) -> Optional[User]:
        """The user with its teacher profile and link rows, or None."""
        return self.db.query(User).options(*PROFILE_OPTIONS).filter(User.id == user_id).first()

    def search_teachers(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        subject_id: Optional[str] = None,
        campus_id: Optional[str] = None,
    ) -> List[User]:
        query = self.db.query(User).options(*PROFILE_OPTIONS).filter(User.teacher_profile.has())
        if status:
            query = query.filter(User.status == status)
        if search:
            query = query.filter(or_(
                User.name.icontains(search, autoescape=True),
                User.email.icontains(search, autoescape=True),
            ))
        if subject_id:
            query = query.filter(User.teacher_profile.has(
                TeacherProfile.subjects.any(TeacherSubject.subject_id == subject_id)
            ))
        if campus_id:
            query = query.filter(User.teacher_profile.has(
                TeacherProfile.campuses.any(TeacherCampus.campus_id == campus_id)
            ))
        return query.order_by(User.name.asc()).all()

    def get_profiles_by_user_ids(self, user_ids: List[str]) -> List[TeacherProfile]:
        if not user_ids:
            return []
        return self.db.query(TeacherProfile).filter(TeacherProfile.user_id.in_(user_ids)).all()

    # --- Teacher Writes ---

    def add_teacher(
        self,
        user_record: Dict,
        profile_record: Dict,
        subject_ids: List[str],
        class_ids: List[str],
        campus_ids: List[str],
    ) -> User:
        """Creates the user and its teacher profile with all links in one commit."""
        new_user = User(**user_record)
        profile = TeacherProfile(**profile_record)
        self._apply_links(profile, subject_ids, class_ids, campus_ids)
        new_user.teacher_profile = profile
        self.db.add(new_user)
        self._commit()
        return self.get_teacher(new_user.id)

    def update_teacher(
        self,
        user_id: str,
        user_fields: Dict,
        profile_fields: Dict,
        subject_ids: Optional[List[str]] = None,
        class_ids: Optional[List[str]] = None,
        campus_ids: Optional[List[str]] = None,
    ) -> User:
        """
        Applies a partial update. A user without a profile gets one created
        on demand; link lists passed as None are left untouched.
        """
        db_user = self.get_teacher(user_id)
        if db_user is None:
            raise RecordNotFoundError("User", user_id)

        for key, value in user_fields.items():
            setattr(db_user, key, value)

        profile = db_user.teacher_profile
        if profile is None:
            profile = TeacherProfile()
            db_user.teacher_profile = profile
        for key, value in profile_fields.items():
            setattr(profile, key, value)
        self._apply_links(profile, subject_ids, class_ids, campus_ids)

        self._commit()
        return self.get_teacher(user_id)

    def delete_teacher(self, user_id: str) -> Dict:
        db_user = self.db.query(User).filter(User.id == user_id).first()
        if db_user is None:
            raise RecordNotFoundError("User", user_id)
        snapshot = {c.name: getattr(db_user, c.name) for c in db_user.__table__.columns}
        self.db.delete(db_user)
        self._commit()
        return snapshot

    @staticmethod
    def _apply_links(profile: TeacherProfile, subject_ids, class_ids, campus_ids):
        if subject_ids is not None:
            profile.subjects = sync_links(
                profile.subjects, subject_ids, "subject_id", lambda sid: TeacherSubject(subject_id=sid)
            )
        if class_ids is not None:
            profile.classes = sync_links(
                profile.classes, class_ids, "class_id", lambda cid: TeacherClass(class_id=cid)
            )
        if campus_ids is not None:
            profile.campuses = sync_links(
                profile.campuses, campus_ids, "campus_id", lambda cid: TeacherCampus(campus_id=cid)
            )
