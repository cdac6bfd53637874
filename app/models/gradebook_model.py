# /app/models/gradebook_model.py

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class AssessmentSystemView(BaseModel):
    id: str
    name: str
    type: str
    maxScore: float
    passingScore: float


class AssessmentPeriodView(BaseModel):
    id: str
    name: str
    order: int
    weight: float
    startDate: date
    endDate: date


class AcademicTermView(BaseModel):
    id: str
    name: str
    order: int
    startDate: date
    endDate: date
    assessmentPeriods: List[AssessmentPeriodView] = []


class TermStructureView(BaseModel):
    id: str
    name: str
    academicYear: str
    startDate: date
    endDate: date
    academicTerms: List[AcademicTermView] = []


class SubjectRecordView(BaseModel):
    id: str
    subjectId: str
    subjectName: str
    termGrades: Dict[str, Any] = {}


class GradeBookView(BaseModel):
    id: str
    classId: str
    assessmentSystem: AssessmentSystemView
    termStructure: TermStructureView
    subjectRecords: List[SubjectRecordView] = []
    createdAt: Optional[datetime] = None
