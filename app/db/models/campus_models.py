# /app/db/models/campus_models.py

from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base, id_factory
from ...models.enums import Status


class Campus(Base):
    __tablename__ = "campuses"

    id = Column(String, primary_key=True, index=True, default=id_factory("cmp"))
    name = Column(String, nullable=False, index=True)
    code = Column(String, nullable=True, unique=True)
    status = Column(String, nullable=False, default=Status.ACTIVE.value)

    buildings = relationship("Building", back_populates="campus", cascade="all, delete-orphan")


class Building(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("bld"))
    name = Column(String, nullable=False)
    campus_id = Column(String, ForeignKey("campuses.id", ondelete="CASCADE"), nullable=False, index=True)

    campus = relationship("Campus", back_populates="buildings")
    rooms = relationship("Room", back_populates="building", cascade="all, delete-orphan")


class Room(Base):
    id = Column(String, primary_key=True, index=True, default=id_factory("rom"))
    number = Column(String, nullable=False)
    capacity = Column(Integer, nullable=True)
    building_id = Column(String, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False, index=True)

    building = relationship("Building", back_populates="rooms")
