# /app/db/models/activity_models.py

"""
This module defines the SQLAlchemy ORM models that feed the class analytics:
graded `ClassActivity` rows with their `ActivitySubmission`s, and daily
`Attendance` marks per student.
"""

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, id_factory
from ...models.enums import ActivityType, AttendanceStatus


class ClassActivity(Base):
    __tablename__ = "class_activities"

    id = Column(String, primary_key=True, index=True, default=id_factory("act"))
    title = Column(String, nullable=False)
    type = Column(String, nullable=False, default=ActivityType.ASSIGNMENT.value)
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    class_ = relationship("Class", back_populates="activities")
    subject = relationship("Subject")
    submissions = relationship("ActivitySubmission", back_populates="activity", cascade="all, delete-orphan")


class ActivitySubmission(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("sbm"))
    activity_id = Column(String, ForeignKey("class_activities.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("student_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    obtained_marks = Column(Float, nullable=True)
    total_marks = Column(Float, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())

    activity = relationship("ClassActivity", back_populates="submissions")
    student = relationship("StudentProfile")


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (UniqueConstraint("student_id", "date"),)

    id = Column(String, primary_key=True, index=True, default=id_factory("att"))
    student_id = Column(String, ForeignKey("student_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String, nullable=False, default=AttendanceStatus.PRESENT.value)
    notes = Column(String, nullable=True)

    student = relationship("StudentProfile", back_populates="attendance")
