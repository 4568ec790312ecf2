"""This module defines the DailyStats model, one aggregate row per calendar day."""

from sqlalchemy import Column, Date, Float, Integer, Numeric, UniqueConstraint

from salescrm.repositories.crm.database import Base


class DailyStats(Base):  # type: ignore[misc]
    """Aggregated sales figures for a single local calendar day."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    total_leads = Column(Integer, nullable=False, default=0)
    total_calls = Column(Integer, nullable=False, default=0)
    total_wins = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    show_up_rate = Column(Float, nullable=False, default=0)
    conversion_rate = Column(Float, nullable=False, default=0)

    __table_args__ = (UniqueConstraint("date", name="uq_daily_stats_date"),)
