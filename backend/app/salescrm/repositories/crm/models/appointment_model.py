"""SQLAlchemy model for sales call appointments."""

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from salescrm.repositories.crm.database import Base
from salescrm.repositories.crm.models.enums import AppointmentStatus
from salescrm.services.clock import local_now


class Appointment(Base):  # type: ignore[misc]
    """
    Represents a call between a closer and a lead.

    Attributes:
        lead_id (int): Lead attending the call. A lead has at most one appointment.
        closer_id (int): User conducting the call.
        scheduled_at (timestamp): Local time of the call.
        status (AppointmentStatus): SCHEDULED, COMPLETED or a NO_SHOW variant.
        no_show_reason (str): Free text reason, kept only for no-shows.
        showed_up (bool): Whether the lead attended, reported by the closer.
        call_duration (int): Length of the call in minutes.
    """

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Integer, ForeignKey("leads.id"), nullable=False, unique=True)
    closer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    scheduled_at = Column(TIMESTAMP(timezone=False), nullable=False, index=True)
    status = Column(
        Enum(AppointmentStatus, native_enum=False, length=32),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )
    no_show_reason = Column(String(255), nullable=True)
    showed_up = Column(Boolean, nullable=True)
    call_duration = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=local_now)
    updated_at = Column(TIMESTAMP(timezone=False), nullable=True, onupdate=local_now)

    lead = relationship("Lead", back_populates="appointment")
    closer = relationship("User", back_populates="appointments")
    deal = relationship("Deal", back_populates="appointment", uselist=False)
