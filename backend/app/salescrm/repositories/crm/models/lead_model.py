"""SQLAlchemy model for leads captured by campaigns."""

from sqlalchemy import Column, ForeignKey, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship

from salescrm.repositories.crm.database import Base
from salescrm.services.clock import local_now


class Lead(Base):  # type: ignore[misc]
    """Represents a potential customer coming from a campaign."""

    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id"), nullable=False)
    first_name = Column(String(80), nullable=False)
    last_name = Column(String(80), nullable=False)
    phone = Column(String(32), nullable=False)
    email = Column(String(160), nullable=True)
    source = Column(String(32), nullable=False, default="FACEBOOK")
    facebook_id = Column(String(64), nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=local_now)
    updated_at = Column(TIMESTAMP(timezone=False), nullable=True, onupdate=local_now)

    campaign = relationship("Campaign", back_populates="leads")
    appointment = relationship("Appointment", back_populates="lead", uselist=False)

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"
