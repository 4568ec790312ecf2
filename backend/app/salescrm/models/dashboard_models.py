"""Response models for the admin and closer dashboards."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from salescrm.repositories.crm.models.enums import AppointmentStatus
from salescrm.repositories.crm.schemas.appointment_schema import AppointmentResponse
from salescrm.repositories.crm.schemas.daily_stats_schema import DailyStatsValues
from salescrm.repositories.crm.schemas.deal_schema import DealResponse
from salescrm.repositories.crm.schemas.lead_schema import LeadResponse
from salescrm.repositories.crm.schemas.user_schema import (
    CloserCounters,
    UserResponse,
)


class RankedCloser(UserResponse):
    conversion_rate: float = Field(..., description="Cached wins over cached calls, in %.")


class TodayDeal(BaseModel):
    id: int
    value: float
    closer: str
    closed_at: Optional[datetime]


class AdminDashboard(BaseModel):
    """Aggregate view for the admin dashboard."""

    closer_ranking: List[RankedCloser]
    today_stats: DailyStatsValues
    today_cashflow: float = Field(..., description="Total value of deals won today.")
    show_up_rate: float = Field(..., description="Show-up rate over the trailing window.")
    today_deals: List[TodayDeal]


class AppointmentWithLead(AppointmentResponse):
    lead: LeadResponse
    deal: Optional[DealResponse] = None


class CloserDetails(UserResponse):
    """A closer with their most recent activity."""

    appointments: List[AppointmentWithLead]
    deals: List[DealResponse]


class DashboardLead(BaseModel):
    name: str
    phone: str
    campaign: str


class DashboardAppointment(BaseModel):
    id: int
    time: datetime
    lead: DashboardLead
    status: AppointmentStatus


class FollowUp(BaseModel):
    id: int
    follow_up_date: Optional[datetime]
    lead_name: str
    product_price: float


class CloserDashboard(BaseModel):
    """Task view for a closer: today's calls and pending follow-ups."""

    todays_appointments: List[DashboardAppointment]
    follow_ups: List[FollowUp]
    stats: CloserCounters


class LeadCallSheet(BaseModel):
    """What a closer needs on screen during the call."""

    id: int
    name: str
    phone: str
    email: Optional[str]
    campaign: Optional[str]
    source: str
    notes: str
