"""Pydantic schemas for appointments."""

import datetime as dt
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, NonNegativeInt, StringConstraints

from salescrm.repositories.crm.models.enums import AppointmentStatus
from salescrm.repositories.crm.schemas.common import LocalDatetime
from salescrm.repositories.crm.schemas.deal_schema import DealResponse
from salescrm.repositories.crm.schemas.lead_schema import LeadResponse
from salescrm.repositories.crm.schemas.user_schema import CloserSummary


class AppointmentCreate(BaseModel):
    """Payload required to book a call for a lead."""

    lead_id: int
    closer_id: int
    scheduled_at: LocalDatetime
    notes: Optional[str] = None


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus
    no_show_reason: Optional[Annotated[str, StringConstraints(max_length=255)]] = None


class AppointmentComplete(BaseModel):
    """Call report submitted by the closer once the appointment is over."""

    status: AppointmentStatus
    showed_up: bool
    call_duration: Optional[NonNegativeInt] = None
    notes: Optional[str] = None
    no_show_reason: Optional[Annotated[str, StringConstraints(max_length=255)]] = None


class AppointmentFilter(BaseModel):
    """Query filters accepted by the appointment listing."""

    date: Optional[dt.date] = None
    status: Optional[AppointmentStatus] = None
    closer_id: Optional[int] = None


class AppointmentResponse(BaseModel):
    """Response model for a stored appointment."""

    id: int
    lead_id: int
    closer_id: int
    scheduled_at: datetime
    status: AppointmentStatus
    no_show_reason: Optional[str]
    showed_up: Optional[bool]
    call_duration: Optional[int]
    notes: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {
        "from_attributes": True,
    }


class AppointmentWithRelations(AppointmentResponse):
    lead: LeadResponse
    closer: CloserSummary
    deal: Optional[DealResponse] = None
