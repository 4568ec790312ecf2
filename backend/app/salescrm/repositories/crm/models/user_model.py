"""SQLAlchemy model for CRM users (closers and admins)."""

from sqlalchemy import Column, Enum, Integer, Numeric, String, TIMESTAMP
from sqlalchemy.orm import relationship

from salescrm.repositories.crm.database import Base
from salescrm.repositories.crm.models.enums import UserRole
from salescrm.services.clock import local_now


class User(Base):  # type: ignore[misc]
    """
    Represents a sales rep or administrator.

    ``total_calls``, ``total_wins`` and ``total_revenue`` are denormalized
    counters. They are only changed inside the transaction of the write that
    triggers them.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(160), nullable=False, unique=True)
    role = Column(
        Enum(UserRole, native_enum=False, length=16),
        nullable=False,
        default=UserRole.CLOSER,
    )
    total_calls = Column(Integer, nullable=False, default=0)
    total_wins = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=False), default=local_now)

    appointments = relationship("Appointment", back_populates="closer")
    deals = relationship("Deal", back_populates="closer")
