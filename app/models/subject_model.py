# /app/models/subject_model.py

from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import Status


class Subject(BaseModel):
    id: str
    code: str
    name: str
    description: Optional[str] = None
    status: Status
    classGroupIds: List[str] = []


class SubjectCreate(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: Status = Status.ACTIVE
    classGroupIds: List[str] = []


class SubjectUpdate(BaseModel):
    code: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[Status] = None
    classGroupIds: Optional[List[str]] = None


class SubjectSearchParams(BaseModel):
    """A missing status means ACTIVE."""
    search: Optional[str] = None
    status: Optional[Status] = None
    classGroupId: Optional[str] = None
