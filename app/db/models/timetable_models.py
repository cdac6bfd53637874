# /app/db/models/timetable_models.py

from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base, id_factory


class Timetable(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("ttb"))
    name = Column(String, nullable=False)
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)

    class_ = relationship("Class", back_populates="timetables")
    periods = relationship(
        "Period", back_populates="timetable", cascade="all, delete-orphan",
        order_by="Period.day_of_week",
    )


class Period(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("prd"))
    timetable_id = Column(String, ForeignKey("timetables.id", ondelete="CASCADE"), nullable=False, index=True)
    # 1 = Monday ... 7 = Sunday
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String, nullable=False)  # "HH:MM"
    end_time = Column(String, nullable=False)

    subject_id = Column(String, ForeignKey("subjects.id"), nullable=False)
    teacher_id = Column(String, ForeignKey("teacher_profiles.id", ondelete="SET NULL"), nullable=True)
    classroom_id = Column(String, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True)

    timetable = relationship("Timetable", back_populates="periods")
    subject = relationship("Subject")
    teacher = relationship("TeacherProfile")
    classroom = relationship("Room")
