# /tests/test_subject_service.py

from app.core.errors import ErrorKind
from app.models.enums import Status
from app.models.subject_model import SubjectCreate, SubjectSearchParams, SubjectUpdate
from app.services import subject_service


def test_search_subjects_defaults_to_active(ctx):
    names = [s.name for s in subject_service.search_subjects(ctx, SubjectSearchParams()).value]

    assert names == ["Mathematics", "Physics"]


def test_search_subjects_by_code_and_group(ctx, school):
    by_code = subject_service.search_subjects(ctx, SubjectSearchParams(search="phy")).value
    archived = subject_service.search_subjects(ctx, SubjectSearchParams(status=Status.ARCHIVED)).value
    by_group = subject_service.search_subjects(ctx, SubjectSearchParams(classGroupId=school.group)).value

    assert [s.code for s in by_code] == ["PHY"]
    assert [s.code for s in archived] == ["LAT"]
    assert sorted(s.code for s in by_group) == ["MATH", "PHY"]


def test_create_and_get_subject(ctx, school):
    created = subject_service.create_subject(
        ctx, SubjectCreate(code="CHEM", name="Chemistry", classGroupIds=[school.group])
    ).value

    fetched = subject_service.get_subject(ctx, created.id).value

    assert fetched.name == "Chemistry"
    assert fetched.status is Status.ACTIVE
    assert fetched.classGroupIds == [school.group]


def test_create_subject_with_duplicate_code_is_internal_error(ctx):
    result = subject_service.create_subject(ctx, SubjectCreate(code="MATH", name="Maths Again"))

    assert result.error.kind is ErrorKind.INTERNAL_SERVER_ERROR
    assert result.error.message == "Failed to create subject"


def test_update_subject(ctx, school):
    updated = subject_service.update_subject(
        ctx, school.physics, SubjectUpdate(name="Applied Physics", status=Status.INACTIVE, classGroupIds=[])
    ).value

    assert updated.name == "Applied Physics"
    assert updated.code == "PHY"
    assert updated.status is Status.INACTIVE
    assert updated.classGroupIds == []


def test_delete_subject(ctx, school):
    deleted = subject_service.delete_subject(ctx, school.retired).value

    assert deleted["code"] == "LAT"
    assert subject_service.get_subject(ctx, school.retired).value is None


def test_missing_subject(ctx):
    assert subject_service.get_subject(ctx, "sub_missing").value is None
    assert subject_service.update_subject(ctx, "sub_missing", SubjectUpdate(name="X")).error.kind is ErrorKind.NOT_FOUND
    assert subject_service.delete_subject(ctx, "sub_missing").error.kind is ErrorKind.NOT_FOUND
