"""Service layer helpers for leads."""

from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.repositories.crm.crud.campaign_crud import CRUDCampaign
from salescrm.repositories.crm.crud.lead_crud import CRUDLead
from salescrm.repositories.crm.models.lead_model import Lead
from salescrm.repositories.crm.schemas.lead_schema import (
    LeadCreate,
    LeadFilter,
    LeadUpdate,
)
from salescrm.services.exceptions import NotFoundError


class LeadService:
    """Provide higher-level operations for campaign leads."""

    def __init__(self, repository: CRUDLead, campaigns: CRUDCampaign) -> None:
        self.repository = repository
        self.campaigns = campaigns

    def list(self, db: Session, filters: LeadFilter) -> List[Lead]:
        return self.repository.list(db, filters)

    def get(self, db: Session, lead_id: int) -> Lead:
        lead = self.repository.get(db, lead_id)
        if lead is None:
            raise NotFoundError("Lead", lead_id)
        return lead

    def create(self, db: Session, lead_in: LeadCreate) -> Lead:
        if self.campaigns.get(db, lead_in.campaign_id) is None:
            raise NotFoundError("Campaign", lead_in.campaign_id)
        return self.repository.create(db, lead_in)

    def update(self, db: Session, lead_id: int, lead_update: LeadUpdate) -> Lead:
        lead = self.get(db, lead_id)
        return self.repository.update(db, lead, lead_update)


def get_lead_service(
    repository: CRUDLead = Depends(),
    campaigns: CRUDCampaign = Depends(),
) -> LeadService:
    return LeadService(repository, campaigns)
