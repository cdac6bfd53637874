# /app/db/models/gradebook_models.py

"""
This module defines the SQLAlchemy ORM models behind a class gradebook: the
assessment system that grades it, the term structure (terms and their
assessment periods) that buckets assessments, the `GradeBook` itself and its
per-subject records.
"""

from sqlalchemy import Column, String, Integer, Float, Date, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, id_factory
from ...models.enums import AssessmentSystemType, Status


class AssessmentSystem(Base):
    """Assessment systems are looked up by name, so names are unique."""
    id = Column(String, primary_key=True, index=True, default=id_factory("asy"))
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=True)
    type = Column(String, nullable=False, default=AssessmentSystemType.MARKING_SCHEME.value)
    max_score = Column(Float, nullable=False, default=100)
    passing_score = Column(Float, nullable=False, default=50)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)


class TermStructure(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("tst"))
    name = Column(String, nullable=False)
    academic_year = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)

    academic_terms = relationship(
        "AcademicTerm", back_populates="term_structure", cascade="all, delete-orphan",
        order_by="AcademicTerm.order",
    )


class AcademicTerm(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("trm"))
    term_structure_id = Column(String, ForeignKey("term_structures.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    order = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    term_structure = relationship("TermStructure", back_populates="academic_terms")
    assessment_periods = relationship(
        "AssessmentPeriod", back_populates="academic_term", cascade="all, delete-orphan",
        order_by="AssessmentPeriod.order",
    )


class AssessmentPeriod(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("apd"))
    academic_term_id = Column(String, ForeignKey("academic_terms.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    order = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    academic_term = relationship("AcademicTerm", back_populates="assessment_periods")


class GradeBook(Base):
    """
    One gradebook per class. The unique `class_id` is what keeps concurrent
    lazy initializations from ever producing a second row.
    """
    __tablename__ = "gradebooks"

    id = Column(String, primary_key=True, index=True, default=id_factory("gbk"))
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    assessment_system_id = Column(String, ForeignKey("assessment_systems.id"), nullable=False)
    term_structure_id = Column(String, ForeignKey("term_structures.id"), nullable=False, unique=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_ = relationship("Class", back_populates="gradebook")
    assessment_system = relationship("AssessmentSystem")
    # Each gradebook owns its term structure, which goes when the gradebook does.
    term_structure = relationship("TermStructure", cascade="all, delete-orphan", single_parent=True)
    subject_records = relationship("SubjectGradeRecord", back_populates="gradebook", cascade="all, delete-orphan")


class SubjectGradeRecord(Base):
    __table_args__ = (UniqueConstraint("gradebook_id", "subject_id"),)

    id = Column(String, primary_key=True, index=True, default=id_factory("sgr"))
    gradebook_id = Column(String, ForeignKey("gradebooks.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False)
    # {"<academic_term_id>": {"<assessment_period_id>": score}}
    term_grades = Column(JSON, nullable=False, default=dict)

    gradebook = relationship("GradeBook", back_populates="subject_records")
    subject = relationship("Subject")
