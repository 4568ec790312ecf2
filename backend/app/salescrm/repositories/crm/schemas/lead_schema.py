"""Pydantic schemas for leads."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, StringConstraints, field_validator


class LeadBase(BaseModel):
    """Shared attributes for leads."""

    first_name: Annotated[str, StringConstraints(min_length=1, max_length=80)]
    last_name: Annotated[str, StringConstraints(min_length=1, max_length=80)]
    phone: Annotated[str, StringConstraints(min_length=5, max_length=32)]
    email: Optional[
        Annotated[str, StringConstraints(max_length=160, pattern=r"^[^@\s]+@[^@\s]+$")]
    ] = None
    source: Annotated[str, StringConstraints(min_length=1, max_length=32)] = "FACEBOOK"
    facebook_id: Optional[Annotated[str, StringConstraints(max_length=64)]] = None


class LeadCreate(LeadBase):
    """Payload required to create a new lead."""

    campaign_id: int


class LeadUpdate(BaseModel):
    """Fields allowed to update for an existing lead."""

    first_name: Optional[Annotated[str, StringConstraints(min_length=1, max_length=80)]] = None
    last_name: Optional[Annotated[str, StringConstraints(min_length=1, max_length=80)]] = None
    phone: Optional[Annotated[str, StringConstraints(min_length=5, max_length=32)]] = None
    email: Optional[
        Annotated[str, StringConstraints(max_length=160, pattern=r"^[^@\s]+@[^@\s]+$")]
    ] = None
    source: Optional[Annotated[str, StringConstraints(min_length=1, max_length=32)]] = None

    @field_validator("first_name", "last_name", "phone", "source")
    @classmethod
    def reject_null(cls, value):  # type: ignore[no-untyped-def]
        if value is None:
            raise ValueError("field cannot be null")
        return value


class LeadFilter(BaseModel):
    """Query filters accepted by the lead listing."""

    campaign_id: Optional[int] = None
    source: Optional[str] = None


class LeadResponse(LeadBase):
    """Response model for a stored lead."""

    id: int
    campaign_id: int
    name: str
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {
        "from_attributes": True,
    }
