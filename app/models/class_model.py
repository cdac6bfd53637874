# /app/models/class_model.py

"""
Data contracts for the `class.*` procedures.

Responses are flat DTOs assembled by the class service from explicit
repository queries; none of them mirror the ORM object graph directly.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .enums import Status


# --- Inputs ---

class ClassCreate(BaseModel):
    """Input for createClass, and the `data` half of updateClass."""
    name: str = Field(..., min_length=1, description="Name is required")
    classGroupId: str = Field(..., min_length=1, description="Class Group is required")
    campusId: str = Field(..., min_length=1, description="Campus is required")
    buildingId: Optional[str] = None
    roomId: Optional[str] = None
    capacity: int = Field(..., ge=1, description="Capacity must be at least 1")
    status: Status
    classTutorId: Optional[str] = Field(default=None, description="User ID of the class teacher.")
    teacherIds: Optional[List[str]] = Field(default=None, description="User IDs of the teachers to assign.")
    description: Optional[str] = None


class ClassSearchParams(BaseModel):
    """Filters for searchClasses. A missing status means ACTIVE."""
    classGroupId: Optional[str] = None
    search: Optional[str] = None
    teacherId: Optional[str] = None
    status: Optional[Status] = None
    campusId: Optional[str] = None


class ClassFilterParams(BaseModel):
    """Filters for the plain `search` procedure. Applied as given, no defaults."""
    search: Optional[str] = None
    status: Optional[Status] = None
    classGroupId: Optional[str] = None
    teacherId: Optional[str] = None


# --- Building Blocks ---

class EntityRef(BaseModel):
    id: str
    name: str


class ClassGroupRef(BaseModel):
    id: str
    name: str
    programId: str
    programName: Optional[str] = None


class TeacherAssignment(BaseModel):
    teacherId: str = Field(..., description="Teacher profile ID.")
    userId: str
    name: Optional[str] = None
    email: Optional[str] = None
    isClassTeacher: bool = False
    status: Status


class StudentRef(BaseModel):
    id: str = Field(..., description="Student profile ID.")
    userId: str
    name: Optional[str] = None
    email: Optional[str] = None
    classId: Optional[str] = None
    createdAt: Optional[datetime] = None


class SubmissionView(BaseModel):
    id: str
    studentId: str
    obtainedMarks: Optional[float] = None
    totalMarks: Optional[float] = None


class ActivityView(BaseModel):
    id: str
    title: str
    type: str
    subjectId: str
    createdAt: Optional[datetime] = None
    submissions: Optional[List[SubmissionView]] = None


class PeriodView(BaseModel):
    id: str
    dayOfWeek: int
    startTime: str
    endTime: str
    subject: Optional[EntityRef] = None
    classroom: Optional[EntityRef] = None
    teacher: Optional[EntityRef] = None


class TimetableView(BaseModel):
    id: str
    name: str
    periods: List[PeriodView] = []


class CalendarEventView(BaseModel):
    id: str
    title: str
    startDate: datetime
    endDate: Optional[datetime] = None


# --- Responses ---

class ClassRecord(BaseModel):
    """What create/update/list return: the class with its direct relations."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    capacity: int
    status: Status
    classGroup: ClassGroupRef
    campus: Optional[EntityRef] = None
    building: Optional[EntityRef] = None
    room: Optional[EntityRef] = None
    teachers: List[TeacherAssignment] = []
    createdAt: Optional[datetime] = None


class ClassSearchResult(ClassRecord):
    students: List[StudentRef] = []


class ClassDetails(ClassRecord):
    """
    getClass / getById / getClassDetails. Which optional blocks are filled
    depends on the procedure: submissions and calendar events only come
    with getClassDetails.
    """
    students: List[StudentRef] = []
    activities: List[ActivityView] = []
    timetables: List[TimetableView] = []
    calendarEvents: Optional[List[CalendarEventView]] = None
