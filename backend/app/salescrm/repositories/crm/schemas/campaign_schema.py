"""Pydantic schemas for campaigns."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    PositiveFloat,
    StringConstraints,
    field_validator,
    model_validator,
)

from salescrm.repositories.crm.models.enums import CampaignStatus
from salescrm.repositories.crm.schemas.common import LocalDatetime


class CampaignBase(BaseModel):
    """Shared attributes for campaigns."""

    name: Annotated[str, StringConstraints(min_length=1, max_length=160)]
    budget: PositiveFloat
    start_date: LocalDatetime
    end_date: Optional[LocalDatetime] = None
    facebook_id: Optional[Annotated[str, StringConstraints(max_length=64)]] = None


class CampaignCreate(CampaignBase):
    """Payload required to create a new campaign."""

    @model_validator(mode="after")
    def check_dates(self) -> "CampaignCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class CampaignUpdate(BaseModel):
    """Fields allowed to update for an existing campaign."""

    name: Optional[Annotated[str, StringConstraints(min_length=1, max_length=160)]] = None
    budget: Optional[PositiveFloat] = None
    end_date: Optional[LocalDatetime] = None
    status: Optional[CampaignStatus] = None

    @field_validator("name", "budget", "status")
    @classmethod
    def reject_null(cls, value):  # type: ignore[no-untyped-def]
        # Omit a field to keep it; only end_date may be cleared.
        if value is None:
            raise ValueError("field cannot be null")
        return value


class CampaignResponse(CampaignBase):
    """Response model for a stored campaign."""

    id: int
    status: CampaignStatus
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {
        "from_attributes": True,
    }


class CampaignListItem(CampaignResponse):
    lead_count: int


class CampaignStats(BaseModel):
    """Funnel counters for the leads of a campaign."""

    total_leads: int
    appointments: int
    deals_won: int
    no_shows: int


class CampaignStatsResponse(BaseModel):
    campaign: CampaignResponse
    stats: CampaignStats
