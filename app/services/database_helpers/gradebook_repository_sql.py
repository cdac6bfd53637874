# /app/services/database_helpers/gradebook_repository_sql.py

"""
This module contains the SQLAlchemy queries behind class gradebooks and the
assessment systems they grade with.
"""

from typing import Optional

from sqlalchemy.orm import selectinload

from app.db.models.class_models import Class, ClassGroup, Program
from app.db.models.gradebook_models import (
    AssessmentSystem,
    TermStructure,
    AcademicTerm,
    GradeBook,
    SubjectGradeRecord,
)
from app.db.models.subject_models import ClassGroupSubject

from .base_repository_sql import BaseRepositorySQL

GRADEBOOK_OPTIONS = (
    selectinload(GradeBook.assessment_system),
    selectinload(GradeBook.term_structure)
    .selectinload(TermStructure.academic_terms)
    .selectinload(AcademicTerm.assessment_periods),
    selectinload(GradeBook.subject_records).selectinload(SubjectGradeRecord.subject),
)


class GradeBookRepositorySQL(BaseRepositorySQL):

    def get_gradebook_by_class_id(self, class_id: str) -> Optional[GradeBook]:
        return (
            self.db.query(GradeBook)
            .options(*GRADEBOOK_OPTIONS)
            .filter(GradeBook.class_id == class_id)
            .first()
        )

    def get_class_for_gradebook(self, class_id: str) -> Optional[Class]:
        """The class with just enough of its group loaded to seed a gradebook."""
        return (
            self.db.query(Class)
            .options(
                selectinload(Class.class_group).selectinload(ClassGroup.program).selectinload(Program.assessment_system),
                selectinload(Class.class_group).selectinload(ClassGroup.subject_links).selectinload(ClassGroupSubject.subject),
            )
            .filter(Class.id == class_id)
            .first()
        )

    def get_assessment_system_by_name(self, name: str) -> Optional[AssessmentSystem]:
        return self.db.query(AssessmentSystem).filter(AssessmentSystem.name == name).first()

    def add_assessment_system(self, system: AssessmentSystem) -> AssessmentSystem:
        """Commits a new assessment system. A taken name raises IntegrityError after the rollback."""
        self.db.add(system)
        self._commit()
        return system

    def add_gradebook(self, gradebook: GradeBook) -> GradeBook:
        """
        Persists a fully built gradebook graph in a single commit. A second
        gradebook for the same class violates the unique `class_id` and the
        IntegrityError propagates after the rollback.
        """
        self.db.add(gradebook)
        self._commit()
        return gradebook
