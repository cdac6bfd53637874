# /tests/conftest.py

import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core import config
from app.core.deps import RequestContext
from app.db.base import (
    Base,
    Building,
    Calendar,
    CalendarEvent,
    Campus,
    Class,
    ClassGroup,
    ClassGroupSubject,
    Program,
    Room,
    StudentProfile,
    Subject,
    TeacherProfile,
    TeacherSubject,
    User,
)
from app.db.database import build_engine, get_db
from app.main import app
from app.services.database_service import DatabaseService


# --- Database Fixtures ---

@pytest.fixture
def engine(tmp_path):
    """
    A fresh SQLite file per test. A file (not :memory:) lets several
    sessions and threads talk to the same database.
    """
    test_engine = build_engine(f"sqlite:///{tmp_path / 'school.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def db_service(session):
    return DatabaseService(session)


# --- Seed Data ---

@pytest.fixture
def school(session):
    """
    A small school: one campus with a room, a program with a class group
    teaching Mathematics and Physics, an admin, and two teachers.
    """
    campus = Campus(name="North Campus", code="N1")
    building = Building(name="Main Block", campus=campus)
    room = Room(number="101", capacity=30, building=building)
    program = Program(name="Secondary")
    calendar = Calendar(
        name="2024-2025",
        events=[CalendarEvent(title="Sports Day", start_date=datetime.datetime(2024, 10, 4, 9, 0))],
    )
    group = ClassGroup(name="Grade 9", program=program, calendar=calendar)
    math = Subject(code="MATH", name="Mathematics")
    physics = Subject(code="PHY", name="Physics")
    retired = Subject(code="LAT", name="Latin", status="ARCHIVED")
    group.subject_links = [ClassGroupSubject(subject=math), ClassGroupSubject(subject=physics)]

    admin = User(name="Ada Admin", email="ada@school.test", role="ADMIN")
    alice = User(
        name="Alice Teacher",
        email="alice@school.test",
        phone_number="555-0101",
        role="TEACHER",
        teacher_profile=TeacherProfile(
            teacher_type="SUBJECT",
            specialization="Algebra",
            subjects=[TeacherSubject(subject=math)],
        ),
    )
    bob = User(
        name="Bob Teacher",
        email="bob@school.test",
        role="TEACHER",
        teacher_profile=TeacherProfile(teacher_type="CLASS"),
    )

    session.add_all([campus, building, room, program, calendar, group, math, physics, retired, admin, alice, bob])
    session.commit()

    return SimpleNamespace(
        campus=campus.id,
        building=building.id,
        room=room.id,
        program=program.id,
        group=group.id,
        math=math.id,
        physics=physics.id,
        retired=retired.id,
        admin=admin.id,
        alice=alice.id,
        alice_profile=alice.teacher_profile.id,
        bob=bob.id,
        bob_profile=bob.teacher_profile.id,
    )


@pytest.fixture
def make_class(session, school):
    """Inserts a class straight into the store and returns its ID."""
    def _make(name="9A", status="ACTIVE", capacity=30, **columns):
        new_class = Class(
            name=name,
            capacity=capacity,
            status=status,
            class_group_id=school.group,
            campus_id=school.campus,
            **columns,
        )
        session.add(new_class)
        session.commit()
        return new_class.id
    return _make


@pytest.fixture
def make_student(session):
    """Inserts a student user with a profile in `class_id` and returns the profile ID."""
    counter = {"n": 0}

    def _make(class_id, name=None, created_at=None):
        counter["n"] += 1
        profile = StudentProfile(class_id=class_id)
        if created_at is not None:
            profile.created_at = created_at
        user = User(
            name=name or f"Student {counter['n']}",
            email=f"student{counter['n']}@school.test",
            role="STUDENT",
            student_profile=profile,
        )
        session.add(user)
        session.commit()
        return profile.id
    return _make


# --- Request Contexts ---

@pytest.fixture
def ctx(db_service, session, school):
    """A context whose caller is the admin."""
    return RequestContext(db=db_service, user=session.get(User, school.admin))


@pytest.fixture
def anonymous_ctx(db_service):
    return RequestContext(db=db_service)


# --- HTTP Fixtures ---

@pytest.fixture
def override_db(session_factory):
    """Points every request at the test database, one session per request."""
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db, school):
    """A client that identifies itself as the admin on every request."""
    return TestClient(app, headers={config.USER_HEADER: school.admin})


@pytest.fixture
def anonymous_client(override_db):
    return TestClient(app)
