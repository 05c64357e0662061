"""Appointment model definitions."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from agenda.core import config
from agenda.database import Base


class Appointment(Base):
    """Represents a professional's appointment with a client."""
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    professional_id = Column(Integer, nullable=False, index=True)
    client_id = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    # HH:MM:SS+-HH:MM
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    color = Column(String, nullable=False, default=config.DEFAULT_APPOINTMENT_COLOR)
    cancelled = Column(Boolean, nullable=False, default=False)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
