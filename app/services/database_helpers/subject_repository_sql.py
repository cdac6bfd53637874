# /app/services/database_helpers/subject_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from app.db.errors import RecordNotFoundError
from app.db.models.subject_models import Subject, ClassGroupSubject

from .base_repository_sql import BaseRepositorySQL, sync_links


class SubjectRepositorySQL(BaseRepositorySQL):

    def get_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        return (
            self.db.query(Subject)
            .options(selectinload(Subject.class_group_links))
            .filter(Subject.id == subject_id)
            .first()
        )

    def search_subjects(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        class_group_id: Optional[str] = None,
    ) -> List[Subject]:
        """Case-insensitive `search` over both the subject name and its code."""
        query = self.db.query(Subject).options(selectinload(Subject.class_group_links))
        if status:
            query = query.filter(Subject.status == status)
        if search:
            query = query.filter(or_(
                Subject.name.icontains(search, autoescape=True),
                Subject.code.icontains(search, autoescape=True),
            ))
        if class_group_id:
            query = query.filter(Subject.class_group_links.any(ClassGroupSubject.class_group_id == class_group_id))
        return query.order_by(Subject.name.asc()).all()

    def add_subject(self, record: Dict, class_group_ids: List[str]) -> Subject:
        new_subject = Subject(**record)
        new_subject.class_group_links = [ClassGroupSubject(class_group_id=cg) for cg in dict.fromkeys(class_group_ids)]
        self.db.add(new_subject)
        self._commit()
        return self.get_subject_by_id(new_subject.id)

    def update_subject(self, subject_id: str, data: Dict, class_group_ids: Optional[List[str]] = None) -> Subject:
        db_subject = self.get_subject_by_id(subject_id)
        if db_subject is None:
            raise RecordNotFoundError("Subject", subject_id)
        for key, value in data.items():
            setattr(db_subject, key, value)
        if class_group_ids is not None:
            db_subject.class_group_links = sync_links(
                db_subject.class_group_links, class_group_ids, "class_group_id",
                lambda cg: ClassGroupSubject(class_group_id=cg),
            )
        self._commit()
        return self.get_subject_by_id(subject_id)

    def delete_subject(self, subject_id: str) -> Dict:
        db_subject = self.db.query(Subject).filter(Subject.id == subject_id).first()
        if db_subject is None:
            raise RecordNotFoundError("Subject", subject_id)
        snapshot = {c.name: getattr(db_subject, c.name) for c in db_subject.__table__.columns}
        self.db.delete(db_subject)
        self._commit()
        return snapshot
