"""Pydantic schemas for CRM users."""

from typing import Annotated

from pydantic import BaseModel, StringConstraints

from salescrm.repositories.crm.models.enums import UserRole


class UserCreate(BaseModel):
    """Payload required to register a closer or admin."""

    name: Annotated[str, StringConstraints(min_length=1, max_length=120)]
    email: Annotated[
        str, StringConstraints(min_length=3, max_length=160, pattern=r"^[^@\s]+@[^@\s]+$")
    ]
    role: UserRole = UserRole.CLOSER


class CloserSummary(BaseModel):
    """Minimal closer reference embedded in other responses."""

    id: int
    name: str

    model_config = {
        "from_attributes": True,
    }


class UserResponse(CloserSummary):
    """Response model for a stored user, including its cached counters."""

    email: str
    role: UserRole
    total_calls: int
    total_wins: int
    total_revenue: float


class CloserCounters(BaseModel):
    total_calls: int
    total_wins: int
    total_revenue: float

    model_config = {
        "from_attributes": True,
    }
