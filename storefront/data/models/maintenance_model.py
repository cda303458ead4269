"""SQLAlchemy ORM model for the maintenance settings row."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Text

from .base import Base


class MaintenanceSettingsModel(Base):
    __tablename__ = "maintenance_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    is_enabled = Column(Boolean, default=False, nullable=False)
    maintenance_start = Column(DateTime(timezone=True), nullable=True)
    maintenance_end = Column(DateTime(timezone=True), nullable=True)
    message = Column(Text, nullable=True)
