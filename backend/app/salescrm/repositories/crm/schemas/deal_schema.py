"""
Pydantic schemas for deals and payments.

Creation payloads are checked for a coherent payment plan: installment deals
need a monthly rate and a number of rates, full payment deals fall back to
the product price when no explicit amount is given.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import (
    BaseModel,
    NonNegativeFloat,
    PositiveFloat,
    PositiveInt,
    StringConstraints,
    computed_field,
    model_validator,
)

from salescrm.repositories.crm.models.enums import DealStatus, PaymentType
from salescrm.repositories.crm.schemas.common import LocalDatetime
from salescrm.services.metrics import payments_total


class DealCreate(BaseModel):
    """Payload required to register the outcome of an appointment."""

    appointment_id: int
    closer_id: Optional[int] = None
    status: DealStatus = DealStatus.WON
    product_price: NonNegativeFloat
    payment_type: PaymentType
    full_amount: Optional[NonNegativeFloat] = None
    down_payment: Optional[NonNegativeFloat] = None
    monthly_rate: Optional[NonNegativeFloat] = None
    number_of_rates: Optional[PositiveInt] = None
    lost_reason: Optional[Annotated[str, StringConstraints(max_length=255)]] = None
    follow_up_date: Optional[LocalDatetime] = None
    record_down_payment: bool = False

    @model_validator(mode="after")
    def check_payment_plan(self) -> "DealCreate":
        if self.payment_type == PaymentType.INSTALLMENTS:
            if self.monthly_rate is None or self.number_of_rates is None:
                raise ValueError(
                    "installment deals need monthly_rate and number_of_rates"
                )
            if self.down_payment is None:
                self.down_payment = 0.0
        elif self.full_amount is None:
            self.full_amount = self.product_price
        return self


class DealUpdate(BaseModel):
    """Status change for an existing deal."""

    status: DealStatus
    lost_reason: Optional[Annotated[str, StringConstraints(max_length=255)]] = None
    follow_up_date: Optional[LocalDatetime] = None


class DealFilter(BaseModel):
    """Query filters accepted by the deal listing."""

    status: Optional[DealStatus] = None
    closer_id: Optional[int] = None


class PaymentCreate(BaseModel):
    amount: PositiveFloat
    note: Optional[Annotated[str, StringConstraints(max_length=255)]] = None
    paid_at: Optional[LocalDatetime] = None


class PaymentResponse(BaseModel):
    id: int
    deal_id: int
    amount: float
    paid_at: datetime
    note: Optional[str]

    model_config = {
        "from_attributes": True,
    }


class DealResponse(BaseModel):
    """Response model for a stored deal and its payments."""

    id: int
    appointment_id: int
    closer_id: int
    status: DealStatus
    payment_type: PaymentType
    product_price: float
    total_value: float
    full_amount: Optional[float]
    down_payment: Optional[float]
    monthly_rate: Optional[float]
    number_of_rates: Optional[int]
    follow_up_date: Optional[datetime]
    lost_reason: Optional[str]
    closed_at: Optional[datetime]
    created_at: datetime
    payments: List[PaymentResponse] = []

    model_config = {
        "from_attributes": True,
    }

    @computed_field  # type: ignore[prop-decorator]
    @property
    def paid_amount(self) -> float:
        return payments_total(self.payments)


class DealListItem(DealResponse):
    lead_name: str
    closer_name: str
