# /app/db/models/subject_models.py

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base, id_factory
from ...models.enums import Status


class Subject(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("sub"))
    code = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default=Status.ACTIVE.value, index=True)

    class_group_links = relationship("ClassGroupSubject", back_populates="subject", cascade="all, delete-orphan")


class ClassGroupSubject(Base):
    """The subjects taught across a class group; gradebooks get one record per link."""
    __table_args__ = (UniqueConstraint("class_group_id", "subject_id"),)

    id = Column(String, primary_key=True, default=id_factory("cgs"))
    class_group_id = Column(String, ForeignKey("class_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)

    class_group = relationship("ClassGroup", back_populates="subject_links")
    subject = relationship("Subject", back_populates="class_group_links")
