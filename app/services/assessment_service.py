# /app/services/assessment_service.py

"""
This module defines the AssessmentService, which owns the grading scaffolding
a new gradebook is built on: the assessment system that scores it and the
academic calendar (terms and assessment periods) that buckets its grades.

The shared default assessment system is persisted as soon as it is first
needed. Everything else is only built here, and the GradeBookService
persists the whole gradebook graph in one transaction.
"""

import datetime
import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from ..db.base_class import new_id
from ..db.models.class_models import Program
from ..db.models.gradebook_models import AssessmentSystem, TermStructure, AcademicTerm, AssessmentPeriod
from ..models.enums import AssessmentSystemType
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

DEFAULT_ASSESSMENT_SYSTEM_NAME = "Default Marking Scheme"

# Academic years start on this month/day.
ACADEMIC_YEAR_START = (9, 1)

# (term name, (start month, start day), (end month, end day), year offset of the end)
DEFAULT_TERMS: List[Tuple[str, Tuple[int, int], Tuple[int, int], int]] = [
    ("Term 1", (9, 1), (1, 31), 1),
    ("Term 2", (2, 1), (6, 30), 1),
]

# (period name, weight). Each term is split in two at its midpoint.
DEFAULT_PERIODS: List[Tuple[str, float]] = [
    ("Mid-Term", 40.0),
    ("Final", 60.0),
]


def academic_year_start(today: datetime.date) -> int:
    month, day = ACADEMIC_YEAR_START
    return today.year if (today.month, today.day) >= (month, day) else today.year - 1


class AssessmentService:
    def __init__(self, db: DatabaseService, today: Optional[datetime.date] = None):
        self.db = db
        self.today = today or datetime.date.today()

    def resolve_assessment_system(self, program: Optional[Program]) -> AssessmentSystem:
        """
        The program's own assessment system when it pins one, otherwise the
        shared default, persisted on first use. Names are unique, so when
        two first uses race the loser reads back the winner's row.
        """
        if program is not None and program.assessment_system is not None:
            return program.assessment_system

        existing = self.db.get_assessment_system_by_name(DEFAULT_ASSESSMENT_SYSTEM_NAME)
        if existing is not None:
            return existing

        logger.info("Creating default assessment system '%s'", DEFAULT_ASSESSMENT_SYSTEM_NAME)
        try:
            return self.db.add_assessment_system(AssessmentSystem(
                id=new_id("asy"),
                name=DEFAULT_ASSESSMENT_SYSTEM_NAME,
                description="Percentage marks out of 100 with a pass mark of 50.",
                type=AssessmentSystemType.MARKING_SCHEME.value,
                max_score=100,
                passing_score=50,
            ))
        except IntegrityError:
            winner = self.db.get_assessment_system_by_name(DEFAULT_ASSESSMENT_SYSTEM_NAME)
            if winner is None:
                raise
            return winner

    def build_term_structure(self, name: str) -> TermStructure:
        """
        A term structure for the current academic year: the default terms,
        each holding the default assessment periods. IDs are assigned up
        front so callers can key grade records by term and period.
        """
        first_year = academic_year_start(self.today)
        terms = []
        for order, (term_name, (sm, sd), (em, ed), end_offset) in enumerate(DEFAULT_TERMS, start=1):
            start_year = first_year if sm >= ACADEMIC_YEAR_START[0] else first_year + 1
            start = datetime.date(start_year, sm, sd)
            end = datetime.date(first_year + end_offset, em, ed)
            terms.append(AcademicTerm(
                id=new_id("trm"),
                name=term_name,
                order=order,
                start_date=start,
                end_date=end,
                assessment_periods=self.build_assessment_periods(start, end),
            ))

        return TermStructure(
            id=new_id("tst"),
            name=name,
            academic_year=f"{first_year}-{first_year + 1}",
            start_date=terms[0].start_date,
            end_date=terms[-1].end_date,
            academic_terms=terms,
        )

    @staticmethod
    def build_assessment_periods(start: datetime.date, end: datetime.date) -> List[AssessmentPeriod]:
        """Splits [start, end] into consecutive periods, one per default period."""
        count = len(DEFAULT_PERIODS)
        span = (end - start).days + 1
        periods = []
        period_start = start
        for order, (period_name, weight) in enumerate(DEFAULT_PERIODS, start=1):
            if order == count:
                period_end = end
            else:
                period_end = start + datetime.timedelta(days=span * order // count - 1)
            periods.append(AssessmentPeriod(
                id=new_id("apd"),
                name=period_name,
                order=order,
                weight=weight,
                start_date=period_start,
                end_date=period_end,
            ))
            period_start = period_end + datetime.timedelta(days=1)
        return periods
