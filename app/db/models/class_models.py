# /app/db/models/class_models.py

"""
This module defines the SQLAlchemy ORM models for the academic grouping of a
school: programs, class groups (with their calendar), the `Class` itself and
the `TeacherClass` assignment rows that link teachers to classes.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, id_factory
from ...models.enums import Status


class Program(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("prg"))
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)
    # A program may pin the assessment system its gradebooks use.
    assessment_system_id = Column(String, ForeignKey("assessment_systems.id", ondelete="SET NULL"), nullable=True)

    assessment_system = relationship("AssessmentSystem")
    class_groups = relationship("ClassGroup", back_populates="program")


class Calendar(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("cal"))
    name = Column(String, nullable=False)

    events = relationship("CalendarEvent", back_populates="calendar", cascade="all, delete-orphan")


class CalendarEvent(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("evt"))
    calendar_id = Column(String, ForeignKey("calendars.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)

    calendar = relationship("Calendar", back_populates="events")


class ClassGroup(Base):
    """A grouping of classes under a shared program/curriculum."""
    id = Column(String, primary_key=True, index=True, default=id_factory("cgp"))
    name = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)
    program_id = Column(String, ForeignKey("programs.id"), nullable=False, index=True)
    calendar_id = Column(String, ForeignKey("calendars.id", ondelete="SET NULL"), nullable=True)

    program = relationship("Program", back_populates="class_groups")
    calendar = relationship("Calendar")
    classes = relationship("Class", back_populates="class_group")
    subject_links = relationship("ClassGroupSubject", back_populates="class_group", cascade="all, delete-orphan")


class Class(Base):
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True, default=id_factory("cls"))
    name = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    capacity = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default=Status.ACTIVE.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_group_id = Column(String, ForeignKey("class_groups.id"), nullable=False, index=True)
    campus_id = Column(String, ForeignKey("campuses.id"), nullable=False, index=True)
    building_id = Column(String, ForeignKey("buildings.id"), nullable=True)
    room_id = Column(String, ForeignKey("rooms.id"), nullable=True)

    class_group = relationship("ClassGroup", back_populates="classes")
    campus = relationship("Campus")
    building = relationship("Building")
    room = relationship("Room")

    teachers = relationship("TeacherClass", back_populates="class_", cascade="all, delete-orphan")
    # Deleting a class detaches its students, it never deletes them.
    students = relationship("StudentProfile", back_populates="class_")
    activities = relationship("ClassActivity", back_populates="class_", cascade="all, delete-orphan")
    timetables = relationship("Timetable", back_populates="class_", cascade="all, delete-orphan")
    gradebook = relationship("GradeBook", back_populates="class_", uselist=False, cascade="all, delete-orphan")


class TeacherClass(Base):
    """Assignment of a teacher profile to a class, optionally as its class teacher."""
    __tablename__ = "teacher_classes"
    __table_args__ = (UniqueConstraint("teacher_id", "class_id"),)

    id = Column(String, primary_key=True, default=id_factory("tcl"))
    teacher_id = Column(String, ForeignKey("teacher_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    is_class_teacher = Column(Boolean, nullable=False, default=False)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)

    teacher = relationship("TeacherProfile", back_populates="classes")
    class_ = relationship("Class", back_populates="teachers")
