# /app/models/teacher_model.py

from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import Status, TeacherType


class TeacherProfileView(BaseModel):
    id: str
    teacherType: TeacherType
    specialization: Optional[str] = None
    subjectIds: List[str] = []
    classIds: List[str] = []
    campusIds: List[str] = []


class Teacher(BaseModel):
    """
    A teacher as returned by teacher.getById: the core user identity plus the
    profile flattened into ID lists. `teacherProfile` is null for a user that
    was never given one.
    """
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    status: Status
    teacherProfile: Optional[TeacherProfileView] = None


class TeacherCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    status: Status = Status.ACTIVE
    teacherType: TeacherType = TeacherType.CLASS
    specialization: Optional[str] = None
    subjectIds: List[str] = []
    classIds: List[str] = []
    campusIds: List[str] = []


class TeacherUpdate(BaseModel):
    """Partial update. Only fields that were sent are applied."""
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    status: Optional[Status] = None
    teacherType: Optional[TeacherType] = None
    specialization: Optional[str] = None
    subjectIds: Optional[List[str]] = None
    classIds: Optional[List[str]] = None
    campusIds: Optional[List[str]] = None


class TeacherSearchParams(BaseModel):
    search: Optional[str] = None
    status: Optional[Status] = None
    subjectId: Optional[str] = None
    campusId: Optional[str] = None
