# /app/db/models/user_models.py

"""
This module defines the SQLAlchemy ORM models for people: the `User` identity
record and the role-specific `TeacherProfile` and `StudentProfile` that hang
off it.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, id_factory
from ...models.enums import Status, TeacherType


class User(Base):
    """Core identity. Name, email and phone number are optional at this level."""
    id = Column(String, primary_key=True, index=True, default=id_factory("usr"))
    name = Column(String, nullable=True, index=True)
    email = Column(String, nullable=True, unique=True, index=True)
    phone_number = Column(String, nullable=True)
    role = Column(String, nullable=True)
    status = Column(String, nullable=False, default=Status.ACTIVE.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher_profile = relationship(
        "TeacherProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    student_profile = relationship(
        "StudentProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class TeacherProfile(Base):
    """
    Extended teacher attributes. Subject and campus associations live in
    their own link tables; class assignments are `TeacherClass` rows.
    """
    id = Column(String, primary_key=True, index=True, default=id_factory("tch"))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    teacher_type = Column(String, nullable=False, default=TeacherType.CLASS.value)
    specialization = Column(String, nullable=True)

    user = relationship("User", back_populates="teacher_profile")
    subjects = relationship("TeacherSubject", back_populates="teacher", cascade="all, delete-orphan")
    campuses = relationship("TeacherCampus", back_populates="teacher", cascade="all, delete-orphan")
    classes = relationship("TeacherClass", back_populates="teacher", cascade="all, delete-orphan")


class TeacherSubject(Base):
    __table_args__ = (UniqueConstraint("teacher_id", "subject_id"),)

    id = Column(String, primary_key=True, default=id_factory("tsb"))
    teacher_id = Column(String, ForeignKey("teacher_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)

    teacher = relationship("TeacherProfile", back_populates="subjects")
    subject = relationship("Subject")


class TeacherCampus(Base):
    __tablename__ = "teacher_campuses"
    __table_args__ = (UniqueConstraint("teacher_id", "campus_id"),)

    id = Column(String, primary_key=True, default=id_factory("tcp"))
    teacher_id = Column(String, ForeignKey("teacher_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    campus_id = Column(String, ForeignKey("campuses.id", ondelete="CASCADE"), nullable=False, index=True)

    teacher = relationship("TeacherProfile", back_populates="campuses")
    campus = relationship("Campus")


class StudentProfile(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("stu"))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    class_id = Column(String, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User", back_populates="student_profile")
    class_ = relationship("Class", back_populates="students")
    attendance = relationship("Attendance", back_populates="student", cascade="all, delete-orphan")
