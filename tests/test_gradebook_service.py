# /tests/test_gradebook_service.py

import datetime
import threading
import time
from unittest.mock import patch

import pytest

from app.core.deps import RequestContext
from app.core.errors import ErrorKind
from app.db.base import AcademicTerm, AssessmentPeriod, AssessmentSystem, GradeBook, Program, TermStructure
from app.services import class_service
from app.services.assessment_service import (
    DEFAULT_ASSESSMENT_SYSTEM_NAME,
    AssessmentService,
    academic_year_start,
)
from app.services import gradebook_service
from app.services.database_helpers.gradebook_repository_sql import GradeBookRepositorySQL
from app.services.database_service import DatabaseService
from app.services.gradebook_service import GradeBookService


def gradebook_count(session, class_id):
    return session.query(GradeBook).filter(GradeBook.class_id == class_id).count()


@pytest.fixture
def class_id(make_class):
    return make_class("Gradebook 9A")


# --- Lazy Initialization ---

def test_first_read_creates_the_gradebook(ctx, school, class_id):
    result = class_service.get_gradebook(ctx, class_id)

    assert result.is_ok
    gradebook = result.value
    assert gradebook.classId == class_id
    assert gradebook.assessmentSystem.name == DEFAULT_ASSESSMENT_SYSTEM_NAME
    assert sorted(r.subjectName for r in gradebook.subjectRecords) == ["Mathematics", "Physics"]

    terms = gradebook.termStructure.academicTerms
    assert [t.name for t in terms] == ["Term 1", "Term 2"]
    assert [p.name for p in terms[0].assessmentPeriods] == ["Mid-Term", "Final"]

    grades = gradebook.subjectRecords[0].termGrades
    assert set(grades) == {t.id for t in terms}
    assert grades[terms[1].id] == {p.id: None for p in terms[1].assessmentPeriods}


def test_gradebook_is_created_only_once(ctx, db_service, session, class_id):
    with patch.object(db_service, "add_gradebook", wraps=db_service.add_gradebook) as add_spy:
        first = class_service.get_gradebook(ctx, class_id).value
        second = class_service.get_gradebook(ctx, class_id).value

    assert first.id == second.id
    assert add_spy.call_count == 1
    assert gradebook_count(session, class_id) == 1


def test_default_assessment_system_is_shared(ctx, db_service, session, make_class):
    first = class_service.get_gradebook(ctx, make_class("9A")).value
    second = class_service.get_gradebook(ctx, make_class("9B")).value

    assert first.assessmentSystem.id == second.assessmentSystem.id
    assert session.query(AssessmentSystem).count() == 1


def test_program_assessment_system_wins(ctx, session, school, class_id):
    rubric = AssessmentSystem(name="Lab Rubric", type="RUBRIC", max_score=4, passing_score=2)
    session.get(Program, school.program).assessment_system = rubric
    session.commit()

    gradebook = class_service.get_gradebook(ctx, class_id).value

    assert gradebook.assessmentSystem.name == "Lab Rubric"
    assert gradebook.assessmentSystem.maxScore == 4


def test_gradebook_for_unknown_class_is_not_found(ctx):
    result = class_service.get_gradebook(ctx, "cls_missing")

    assert result.error.kind is ErrorKind.NOT_FOUND
    assert result.error.message == "Failed to initialize gradebook"


def test_store_failure_while_reading_gradebook(ctx, db_service, class_id):
    with patch.object(db_service, "get_gradebook_by_class_id", side_effect=RuntimeError("disk gone")):
        result = class_service.get_gradebook(ctx, class_id)

    assert result.error.kind is ErrorKind.INTERNAL_SERVER_ERROR
    assert result.error.message == "Failed to fetch gradebook"


def test_reads_of_missing_classes_leave_no_class_locks(ctx):
    for n in range(50):
        class_service.get_gradebook(ctx, f"cls_missing_{n}")

    assert not [key for key in gradebook_service._class_locks if key.startswith("cls_missing_")]


def test_class_lock_is_released_after_initialization(ctx, class_id):
    assert class_service.get_gradebook(ctx, class_id).is_ok

    assert class_id not in gradebook_service._class_locks


def test_subject_records_get_their_own_grade_grids(db_service, class_id):
    real_add = db_service.add_gradebook
    grids = []

    def capture_grids(gradebook):
        grids.extend(record.term_grades for record in gradebook.subject_records)
        return real_add(gradebook)

    service = GradeBookService(db_service, AssessmentService(db_service))
    with patch.object(db_service, "add_gradebook", side_effect=capture_grids):
        service.initialize_gradebook(class_id)

    first, second = grids
    term_id = next(iter(first))
    assert first == second
    assert first is not second
    assert first[term_id] is not second[term_id]


def test_deleting_the_class_removes_its_term_structure(ctx, session, class_id):
    assert class_service.get_gradebook(ctx, class_id).is_ok

    assert class_service.delete_class(ctx, class_id).is_ok

    assert session.query(GradeBook).count() == 0
    assert session.query(TermStructure).count() == 0
    assert session.query(AcademicTerm).count() == 0
    assert session.query(AssessmentPeriod).count() == 0
    assert session.query(AssessmentSystem).count() == 1


# --- Racing Initializations ---

def test_losing_writer_reuses_the_winners_gradebook(db_service, session_factory, class_id):
    real_add = db_service.add_gradebook

    def add_after_competitor(gradebook):
        # Another process commits its gradebook between our existence check and our insert.
        other_db = DatabaseService(session_factory())
        try:
            assessment = AssessmentService(other_db)
            other_db.add_gradebook(GradeBook(
                class_id=class_id,
                assessment_system=assessment.resolve_assessment_system(None),
                term_structure=assessment.build_term_structure("Competitor Terms"),
            ))
        finally:
            other_db.session.close()
        return real_add(gradebook)

    service = GradeBookService(db_service, AssessmentService(db_service))
    with patch.object(db_service, "add_gradebook", side_effect=add_after_competitor):
        gradebook = service.initialize_gradebook(class_id)

    assert gradebook.term_structure.name == "Competitor Terms"
    assert gradebook_count(db_service.session, class_id) == 1


def test_concurrent_first_reads_create_one_gradebook(session_factory, school, class_id):
    workers = 5
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def read_gradebook():
        session = session_factory()
        try:
            ctx = RequestContext(db=DatabaseService(session))
            barrier.wait()
            result = class_service.get_gradebook(ctx, class_id)
            with results_lock:
                results.append(result)
        finally:
            session.close()

    threads = [threading.Thread(target=read_gradebook) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert len(results) == workers
    assert all(r.is_ok for r in results)
    assert len({r.value.id for r in results}) == 1

    check = session_factory()
    try:
        assert gradebook_count(check, class_id) == 1
    finally:
        check.close()


def test_concurrent_first_reads_of_different_classes_share_the_default_system(session_factory, session, make_class):
    class_ids = [make_class(f"Race {n}") for n in range(3)]
    barrier = threading.Barrier(len(class_ids))
    results = []
    results_lock = threading.Lock()
    real_lookup = GradeBookRepositorySQL.get_assessment_system_by_name

    def slow_lookup(repo, name):
        # Widens the gap between looking the default up and creating it.
        found = real_lookup(repo, name)
        time.sleep(0.2)
        return found

    def read_gradebook(target_id):
        thread_session = session_factory()
        try:
            ctx = RequestContext(db=DatabaseService(thread_session))
            barrier.wait()
            result = class_service.get_gradebook(ctx, target_id)
            with results_lock:
                results.append(result)
        finally:
            thread_session.close()

    with patch.object(GradeBookRepositorySQL, "get_assessment_system_by_name", slow_lookup):
        threads = [threading.Thread(target=read_gradebook, args=(cid,)) for cid in class_ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

    assert len(results) == len(class_ids)
    assert all(r.is_ok for r in results)
    assert len({r.value.assessmentSystem.id for r in results}) == 1
    assert session.query(AssessmentSystem).count() == 1
    assert not [cid for cid in class_ids if cid in gradebook_service._class_locks]


# --- Academic Calendar ---

@pytest.mark.parametrize("today, expected", [
    (datetime.date(2024, 9, 1), 2024),
    (datetime.date(2024, 8, 31), 2023),
    (datetime.date(2025, 1, 15), 2024),
])
def test_academic_year_start(today, expected):
    assert academic_year_start(today) == expected


def test_term_structure_for_the_current_year(db_service):
    structure = AssessmentService(db_service, today=datetime.date(2024, 11, 5)).build_term_structure("9A Terms")

    assert structure.academic_year == "2024-2025"
    assert structure.start_date == datetime.date(2024, 9, 1)
    assert structure.end_date == datetime.date(2025, 6, 30)
    assert [(t.start_date, t.end_date) for t in structure.academic_terms] == [
        (datetime.date(2024, 9, 1), datetime.date(2025, 1, 31)),
        (datetime.date(2025, 2, 1), datetime.date(2025, 6, 30)),
    ]


def test_assessment_periods_cover_the_term():
    start, end = datetime.date(2025, 2, 1), datetime.date(2025, 6, 30)

    periods = AssessmentService.build_assessment_periods(start, end)

    assert periods[0].start_date == start
    assert periods[-1].end_date == end
    assert periods[1].start_date == periods[0].end_date + datetime.timedelta(days=1)
    assert sum(p.weight for p in periods) == 100
