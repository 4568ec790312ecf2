"""SQLAlchemy model for marketing campaigns that generate leads."""

from sqlalchemy import Column, Enum, Integer, Numeric, String, TIMESTAMP
from sqlalchemy.orm import relationship

from salescrm.repositories.crm.database import Base
from salescrm.repositories.crm.models.enums import CampaignStatus
from salescrm.services.clock import local_now


class Campaign(Base):  # type: ignore[misc]
    """Represents an ad campaign and its budget window."""

    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(160), nullable=False)
    budget = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    start_date = Column(TIMESTAMP(timezone=False), nullable=False)
    end_date = Column(TIMESTAMP(timezone=False), nullable=True)
    status = Column(
        Enum(CampaignStatus, native_enum=False, length=16),
        nullable=False,
        default=CampaignStatus.ACTIVE,
    )
    facebook_id = Column(String(64), nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=local_now)
    updated_at = Column(TIMESTAMP(timezone=False), nullable=True, onupdate=local_now)

    leads = relationship("Lead", back_populates="campaign")
