# /app/services/gradebook_service.py

"""
This module defines the GradeBookService, which lazily creates the gradebook
of a class the first time it is read.

A class has at most one gradebook. Two guards keep it that way when first
reads race: initialization for a given class runs under a per-class lock,
and the insert itself is conditional on the unique `class_id`, so a losing
writer rolls back and reads the winner's gradebook instead.

Per-class locks only live while some caller holds or waits on them.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from ..db.models.gradebook_models import GradeBook, SubjectGradeRecord, TermStructure
from ..models import gradebook_model
from .assessment_service import AssessmentService
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

_locks_guard = threading.Lock()
# class_id -> [lock, number of callers holding or waiting on it]
_class_locks: Dict[str, List] = {}


@contextmanager
def class_lock(class_id: str):
    """Holds the process-wide lock serializing gradebook creation for one class."""
    with _locks_guard:
        entry = _class_locks.setdefault(class_id, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _class_locks[class_id]


def empty_term_grades(term_structure: TermStructure) -> Dict[str, Dict[str, None]]:
    """A blank `{term_id: {period_id: None}}` grid, freshly built for each record."""
    return {
        term.id: {period.id: None for period in term.assessment_periods}
        for term in term_structure.academic_terms
    }


class GradeBookService:
    def __init__(self, db: DatabaseService, assessment_service: AssessmentService):
        self.db = db
        self.assessment_service = assessment_service

    def initialize_gradebook(self, class_id: str, created_by: Optional[str] = None) -> Optional[GradeBook]:
        """
        Creates the gradebook of `class_id` with its term structure,
        assessment periods and one record per subject of the class group.

        Returns the existing gradebook if there already is one, and None if
        the class does not exist.
        """
        existing = self.db.get_gradebook_by_class_id(class_id)
        if existing is not None:
            return existing

        target_class = self.db.get_class_for_gradebook(class_id)
        if target_class is None:
            logger.warning("Cannot initialize gradebook: class %s does not exist", class_id)
            return None

        with class_lock(class_id):
            existing = self.db.get_gradebook_by_class_id(class_id)
            if existing is not None:
                return existing

            group = target_class.class_group
            assessment_system = self.assessment_service.resolve_assessment_system(group.program)
            term_structure = self.assessment_service.build_term_structure(name=f"{target_class.name} Terms")

            gradebook = GradeBook(
                class_id=class_id,
                assessment_system=assessment_system,
                term_structure=term_structure,
                created_by=created_by,
                subject_records=[
                    SubjectGradeRecord(subject_id=link.subject_id, term_grades=empty_term_grades(term_structure))
                    for link in group.subject_links
                ],
            )

            try:
                self.db.add_gradebook(gradebook)
            except IntegrityError:
                winner = self.db.get_gradebook_by_class_id(class_id)
                if winner is None:
                    raise
                # Another process won the race for this class.
                logger.info("Gradebook for class %s already created elsewhere, reusing it", class_id)
                return winner

            logger.info(
                "Initialized gradebook for class %s with %d subject records",
                class_id, len(gradebook.subject_records),
            )
            return self.db.get_gradebook_by_class_id(class_id)


def create_gradebook_service(db: DatabaseService) -> GradeBookService:
    return GradeBookService(db, AssessmentService(db))


def to_gradebook_view(gradebook: GradeBook) -> gradebook_model.GradeBookView:
    system = gradebook.assessment_system
    structure = gradebook.term_structure
    return gradebook_model.GradeBookView(
        id=gradebook.id,
        classId=gradebook.class_id,
        assessmentSystem=gradebook_model.AssessmentSystemView(
            id=system.id,
            name=system.name,
            type=system.type,
            maxScore=system.max_score,
            passingScore=system.passing_score,
        ),
        termStructure=gradebook_model.TermStructureView(
            id=structure.id,
            name=structure.name,
            academicYear=structure.academic_year,
            startDate=structure.start_date,
            endDate=structure.end_date,
            academicTerms=[
                gradebook_model.AcademicTermView(
                    id=term.id,
                    name=term.name,
                    order=term.order,
                    startDate=term.start_date,
                    endDate=term.end_date,
                    assessmentPeriods=[
                        gradebook_model.AssessmentPeriodView(
                            id=period.id,
                            name=period.name,
                            order=period.order,
                            weight=period.weight,
                            startDate=period.start_date,
                            endDate=period.end_date,
                        )
                        for period in term.assessment_periods
                    ],
                )
                for term in structure.academic_terms
            ],
        ),
        subjectRecords=[
            gradebook_model.SubjectRecordView(
                id=record.id,
                subjectId=record.subject_id,
                subjectName=record.subject.name,
                termGrades=record.term_grades or {},
            )
            for record in gradebook.subject_records
        ],
        createdAt=gradebook.created_at,
    )
