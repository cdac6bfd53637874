# /tests/test_teacher_edit_page.py

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import Request

from app.core import config
from app.main import app
from app.models.enums import TeacherType
from app.pages.api_client import ProcedureCallError, ProcedureClient, forwarded_headers, get_procedure_client
from app.pages.teacher_edit_page import PageState, load_edit_teacher_page, sanitize_teacher


def _in_process_client(headers):
    """A procedure client that calls this app directly instead of over the network."""
    return ProcedureClient(base_url="http://testserver", headers=headers, transport=httpx.ASGITransport(app=app))


@pytest.fixture
def in_process_pages(override_db):
    async def _client(request: Request):
        async with _in_process_client(request.headers) as client:
            yield client

    app.dependency_overrides[get_procedure_client] = _client
    yield


# --- Loader States ---

@pytest.mark.asyncio
async def test_loads_teacher_with_active_options(override_db, school, make_class):
    active_class = make_class("9A")
    make_class("9Z", status="ARCHIVED")

    async with _in_process_client({config.USER_HEADER: school.admin}) as client:
        page = await load_edit_teacher_page(client, role="admin", teacher_id=school.alice)

    assert page.state is PageState.SUCCESS
    assert page.initialData.name == "Alice Teacher"
    assert page.initialData.teacherType is TeacherType.SUBJECT
    assert page.initialData.subjectIds == [school.math]
    assert [s.name for s in page.subjects] == ["Mathematics", "Physics"]
    assert [c.id for c in page.classes] == [active_class]


@pytest.mark.asyncio
async def test_teacher_without_profile_gets_form_defaults(override_db, school):
    async with _in_process_client({config.USER_HEADER: school.admin}) as client:
        page = await load_edit_teacher_page(client, role="admin", teacher_id=school.admin)

    data = page.initialData
    assert page.state is PageState.SUCCESS
    assert data.phoneNumber == ""
    assert data.teacherType is TeacherType.CLASS
    assert data.specialization == ""
    assert (data.campusIds, data.subjectIds, data.classIds) == ([], [], [])


@pytest.mark.asyncio
async def test_unknown_teacher_is_not_found(override_db, school):
    async with _in_process_client({config.USER_HEADER: school.admin}) as client:
        page = await load_edit_teacher_page(client, role="admin", teacher_id="usr_missing")

    assert page.state is PageState.NOT_FOUND
    assert page.message == "Teacher not found"


@pytest.mark.asyncio
async def test_blank_id_is_rejected_without_fetching():
    client = AsyncMock(spec=ProcedureClient)

    page = await load_edit_teacher_page(client, role="admin", teacher_id="  ")

    assert page.state is PageState.NOT_FOUND
    assert page.message == "Invalid teacher ID"
    client.get_teacher.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_fetch_renders_error_message():
    client = AsyncMock(spec=ProcedureClient)
    client.get_teacher.side_effect = ProcedureCallError("Failed to fetch teacher", 500, "INTERNAL_SERVER_ERROR")
    client.search_subjects.return_value = []
    client.search_classes.return_value = []

    page = await load_edit_teacher_page(client, role="admin", teacher_id="usr_1")

    assert page.state is PageState.ERROR
    assert page.message == "Error loading teacher data: Failed to fetch teacher"


@pytest.mark.asyncio
async def test_failed_fetch_cancels_the_fetches_still_running():
    subjects_cancelled = asyncio.Event()

    async def slow_subjects(**filters):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            subjects_cancelled.set()
            raise
        return []

    client = AsyncMock(spec=ProcedureClient)
    client.get_teacher.side_effect = ProcedureCallError("Failed to fetch teacher", 500, "INTERNAL_SERVER_ERROR")
    client.search_subjects.side_effect = slow_subjects
    client.search_classes.return_value = []

    page = await load_edit_teacher_page(client, role="admin", teacher_id="usr_1")

    assert page.state is PageState.ERROR
    assert subjects_cancelled.is_set()
    assert [t for t in asyncio.all_tasks() if t is not asyncio.current_task() and not t.done()] == []


@pytest.mark.asyncio
async def test_unrecognizable_error_is_unknown():
    client = AsyncMock(spec=ProcedureClient)
    client.search_classes.side_effect = Exception()

    page = await load_edit_teacher_page(client, role="admin", teacher_id="usr_1")

    assert page.message == "Error loading teacher data: Unknown error"


@pytest.mark.asyncio
async def test_missing_identity_surfaces_the_unauthorized_message(override_db, school):
    async with _in_process_client({}) as client:
        page = await load_edit_teacher_page(client, role="admin", teacher_id=school.alice)

    assert page.state is PageState.ERROR
    assert page.message == "Error loading teacher data: You must be logged in to access this resource"


# --- Helpers ---

def test_forwarded_headers_tag_the_source():
    headers = forwarded_headers({"host": "example.test", "Content-Length": "12", config.USER_HEADER: "usr_1"})

    assert headers == {config.USER_HEADER: "usr_1", config.SOURCE_HEADER: "rsc"}


def test_sanitize_teacher_replaces_nulls():
    data = sanitize_teacher({"name": None, "email": "e@x.test", "teacherProfile": {"specialization": None, "subjectIds": None}})

    assert data.name == ""
    assert data.email == "e@x.test"
    assert data.specialization == ""
    assert data.subjectIds == []


# --- Rendered Page ---

def test_edit_page_renders_the_form(client, school, in_process_pages):
    response = client.get(f"/dashboard/admin/teacher/{school.alice}/edit")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert 'value="Alice Teacher"' in response.text
    assert f'value="{school.math}" checked' in response.text
    assert 'value="SUBJECT" selected' in response.text


def test_edit_page_renders_not_found(client, in_process_pages):
    response = client.get("/dashboard/admin/teacher/usr_missing/edit")

    assert response.status_code == 200
    assert "Teacher not found" in response.text
    assert "<form" not in response.text
