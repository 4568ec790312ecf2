"""Response models for the reporting endpoints."""

from typing import Dict, List

from pydantic import BaseModel, Field

from salescrm.repositories.crm.schemas.appointment_schema import (
    AppointmentWithRelations,
)


class CloserStats(BaseModel):
    """Deal outcome figures for a single closer."""

    id: int
    name: str
    total_deals: int = Field(..., description="Deals in the selected range.")
    won: int
    lost: int = Field(..., description="LOST deals, every loss subtype included.")
    follow_up: int
    conversion_rate: float = Field(..., description="Won deals over all deals, in %.")
    revenue: float = Field(..., description="Recognized revenue of the won deals.")
    avg_deal_value: float


class RevenueReport(BaseModel):
    total_revenue: float
    total_deals: int
    avg_deal_value: float


class NoShowReport(BaseModel):
    """No-show appointments grouped by the reason given."""

    total: int
    by_reason: Dict[str, int]
    details: List[AppointmentWithRelations]
