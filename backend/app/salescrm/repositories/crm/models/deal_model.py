"""SQLAlchemy models for deals and the payments recorded against them."""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from salescrm.repositories.crm.database import Base
from salescrm.repositories.crm.models.enums import DealStatus, PaymentType
from salescrm.services.clock import local_now


class Deal(Base):  # type: ignore[misc]
    """
    Represents the commercial outcome of an appointment.

    ``total_value`` is the contracted value: ``full_amount`` for FULL deals,
    ``down_payment + monthly_rate * number_of_rates`` for INSTALLMENTS.
    ``closed_at`` is set only while the deal is WON.
    """

    __tablename__ = "deals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    appointment_id = Column(
        Integer, ForeignKey("appointments.id"), nullable=False, unique=True
    )
    closer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(
        Enum(DealStatus, native_enum=False, length=32),
        nullable=False,
        default=DealStatus.PENDING,
    )
    payment_type = Column(
        Enum(PaymentType, native_enum=False, length=16), nullable=False
    )
    product_price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    total_value = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    full_amount = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    down_payment = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    monthly_rate = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    number_of_rates = Column(Integer, nullable=True)
    follow_up_date = Column(TIMESTAMP(timezone=False), nullable=True)
    lost_reason = Column(String(255), nullable=True)
    closed_at = Column(TIMESTAMP(timezone=False), nullable=True, index=True)
    created_at = Column(TIMESTAMP(timezone=False), default=local_now)
    updated_at = Column(TIMESTAMP(timezone=False), nullable=True, onupdate=local_now)

    appointment = relationship("Appointment", back_populates="deal")
    closer = relationship("User", back_populates="deals")
    payments = relationship(
        "Payment",
        back_populates="deal",
        order_by="Payment.paid_at",
        cascade="all, delete",
    )

    @property
    def lead_name(self) -> str:
        return self.appointment.lead.name

    @property
    def closer_name(self) -> str:
        return self.closer.name


class Payment(Base):  # type: ignore[misc]
    """A payment received for a deal."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    deal_id = Column(Integer, ForeignKey("deals.id"), nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    paid_at = Column(TIMESTAMP(timezone=False), nullable=False, default=local_now)
    note = Column(String(255), nullable=True)

    deal = relationship("Deal", back_populates="payments")
