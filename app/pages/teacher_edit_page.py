# /app/pages/teacher_edit_page.py

"""
Server-side loader for `/dashboard/{role}/teacher/{id}/edit`.

It fetches the teacher, the active subjects and the active classes
concurrently, then settles on one of three states: success (a form
view-model with display defaults filled in), not-found, or error.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from ..models.enums import Status, TeacherType
from .api_client import ProcedureClient

logger = logging.getLogger(__name__)


class PageState(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


class TeacherFormData(BaseModel):
    name: str = ""
    email: str = ""
    phoneNumber: str = ""
    teacherType: TeacherType = TeacherType.CLASS
    specialization: str = ""
    campusIds: List[str] = []
    subjectIds: List[str] = []
    classIds: List[str] = []


class Option(BaseModel):
    id: str
    name: str
    status: Status


class EditTeacherPage(BaseModel):
    state: PageState
    role: str
    teacherId: str = ""
    message: Optional[str] = None
    initialData: Optional[TeacherFormData] = None
    subjects: List[Option] = []
    classes: List[Option] = []


def sanitize_teacher(teacher: dict) -> TeacherFormData:
    """Maps nulls and a missing profile onto the form's empty defaults."""
    profile = teacher.get("teacherProfile") or {}
    return TeacherFormData(
        name=teacher.get("name") or "",
        email=teacher.get("email") or "",
        phoneNumber=teacher.get("phoneNumber") or "",
        teacherType=profile.get("teacherType") or TeacherType.CLASS,
        specialization=profile.get("specialization") or "",
        campusIds=profile.get("campusIds") or [],
        subjectIds=profile.get("subjectIds") or [],
        classIds=profile.get("classIds") or [],
    )


def error_message(error: BaseException) -> str:
    if isinstance(error, Exception) and str(error):
        return str(error)
    return "Unknown error"


async def _fetch_all(*fetches):
    """
    Runs `fetches` concurrently and returns their results in order. When one
    fails, the ones still running are cancelled and awaited before the error
    propagates, so none outlives the client they share.
    """
    tasks = [asyncio.ensure_future(fetch) for fetch in fetches]
    try:
        return await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


async def load_edit_teacher_page(client: ProcedureClient, role: str, teacher_id: str) -> EditTeacherPage:
    if not teacher_id or not teacher_id.strip():
        return EditTeacherPage(state=PageState.NOT_FOUND, role=role, message="Invalid teacher ID")

    try:
        teacher, subjects, classes = await _fetch_all(
            client.get_teacher(teacher_id),
            client.search_subjects(status=Status.ACTIVE.value),
            client.search_classes(status=Status.ACTIVE.value),
        )
    except Exception as e:
        logger.error("Error loading teacher %s: %s", teacher_id, e, exc_info=e)
        return EditTeacherPage(
            state=PageState.ERROR,
            role=role,
            teacherId=teacher_id,
            message=f"Error loading teacher data: {error_message(e)}",
        )

    if not teacher:
        return EditTeacherPage(state=PageState.NOT_FOUND, role=role, teacherId=teacher_id, message="Teacher not found")

    return EditTeacherPage(
        state=PageState.SUCCESS,
        role=role,
        teacherId=teacher_id,
        initialData=sanitize_teacher(teacher),
        subjects=[Option(id=s["id"], name=s["name"], status=s["status"]) for s in subjects],
        classes=[Option(id=c["id"], name=c["name"], status=c["status"]) for c in classes],
    )
