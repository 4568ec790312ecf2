"""Deal and payment endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salescrm.controllers.errors import service_errors
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.schemas.deal_schema import (
    DealCreate,
    DealFilter,
    DealListItem,
    DealResponse,
    DealUpdate,
    PaymentCreate,
    PaymentResponse,
)
from salescrm.services.deals_services import DealService, get_deal_service

deals_router = APIRouter(prefix="/api/deals", tags=["Deals"])


@deals_router.get("", response_model=List[DealListItem])
def list_deals(
    filters: DealFilter = Depends(),
    db: Session = Depends(get_db),
    service: DealService = Depends(get_deal_service),
) -> List[DealListItem]:
    return [DealListItem.model_validate(deal) for deal in service.list(db, filters)]


@deals_router.post("", response_model=DealResponse, status_code=status.HTTP_201_CREATED)
def create_deal(
    deal_in: DealCreate,
    db: Session = Depends(get_db),
    service: DealService = Depends(get_deal_service),
) -> DealResponse:
    """
    Register a deal for an appointment.

    The deal, its initial payment and the closer counters are written in a
    single transaction.
    """
    with service_errors():
        deal = service.create(db, deal_in)
    return DealResponse.model_validate(deal)


@deals_router.get("/{deal_id}", response_model=DealListItem)
def get_deal(
    deal_id: int,
    db: Session = Depends(get_db),
    service: DealService = Depends(get_deal_service),
) -> DealListItem:
    with service_errors():
        deal = service.get(db, deal_id)
    return DealListItem.model_validate(deal)


@deals_router.put("/{deal_id}", response_model=DealListItem)
def update_deal(
    deal_id: int,
    deal_update: DealUpdate,
    db: Session = Depends(get_db),
    service: DealService = Depends(get_deal_service),
) -> DealListItem:
    with service_errors():
        deal = service.update_status(db, deal_id, deal_update)
    return DealListItem.model_validate(deal)


@deals_router.post(
    "/{deal_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_payment(
    deal_id: int,
    payment_in: PaymentCreate,
    db: Session = Depends(get_db),
    service: DealService = Depends(get_deal_service),
) -> PaymentResponse:
    with service_errors():
        payment = service.add_payment(db, deal_id, payment_in)
    return PaymentResponse.model_validate(payment)
