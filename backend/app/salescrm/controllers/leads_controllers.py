"""Lead endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salescrm.controllers.errors import service_errors
from salescrm.models.lead_models import LeadDetail, LeadListItem
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.schemas.lead_schema import (
    LeadCreate,
    LeadFilter,
    LeadResponse,
    LeadUpdate,
)
from salescrm.services.leads_services import LeadService, get_lead_service

leads_router = APIRouter(prefix="/api/leads", tags=["Leads"])


@leads_router.get("", response_model=List[LeadListItem])
def list_leads(
    filters: LeadFilter = Depends(),
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> List[LeadListItem]:
    return [LeadListItem.model_validate(lead) for lead in service.list(db, filters)]


@leads_router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
def create_lead(
    lead_in: LeadCreate,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> LeadResponse:
    with service_errors():
        lead = service.create(db, lead_in)
    return LeadResponse.model_validate(lead)


@leads_router.get("/{lead_id}", response_model=LeadDetail)
def get_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> LeadDetail:
    """
    Return a lead with everything attached to it.

    Args:
        lead_id (int): Lead identifier.

    Returns:
        LeadDetail: Lead, campaign, appointment with closer, deal and payments.
    """
    with service_errors():
        lead = service.get(db, lead_id)
    return LeadDetail.model_validate(lead)


@leads_router.put("/{lead_id}", response_model=LeadResponse)
def update_lead(
    lead_id: int,
    lead_update: LeadUpdate,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> LeadResponse:
    with service_errors():
        lead = service.update(db, lead_id, lead_update)
    return LeadResponse.model_validate(lead)
