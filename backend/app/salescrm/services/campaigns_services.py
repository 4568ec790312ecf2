"""Service layer helpers for campaigns."""

from typing import List, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.repositories.crm.crud.campaign_crud import CRUDCampaign
from salescrm.repositories.crm.models.campaign_model import Campaign
from salescrm.repositories.crm.models.enums import DealStatus
from salescrm.repositories.crm.schemas.campaign_schema import (
    CampaignCreate,
    CampaignStats,
    CampaignUpdate,
)
from salescrm.services.exceptions import NotFoundError
from salescrm.services.metrics import is_no_show


class CampaignService:
    """Provide higher-level operations for campaigns."""

    def __init__(self, repository: CRUDCampaign) -> None:
        self.repository = repository

    def list(self, db: Session) -> List[Tuple[Campaign, int]]:
        return self.repository.list_with_lead_counts(db)

    def get(self, db: Session, campaign_id: int) -> Campaign:
        campaign = self.repository.get(db, campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)
        return campaign

    def create(self, db: Session, campaign_in: CampaignCreate) -> Campaign:
        return self.repository.create(db, campaign_in)

    def update(
        self, db: Session, campaign_id: int, campaign_update: CampaignUpdate
    ) -> Campaign:
        campaign = self.get(db, campaign_id)
        end_date = campaign_update.end_date
        if end_date is not None and end_date < campaign.start_date:
            raise ValueError("end_date must not be before start_date")
        return self.repository.update(db, campaign, campaign_update)

    def stats(self, db: Session, campaign_id: int) -> Tuple[Campaign, CampaignStats]:
        """Count how far the leads of a campaign went down the funnel."""
        campaign = self.get(db, campaign_id)
        appointments = [lead.appointment for lead in campaign.leads if lead.appointment]
        stats = CampaignStats(
            total_leads=len(campaign.leads),
            appointments=len(appointments),
            deals_won=sum(
                1
                for appointment in appointments
                if appointment.deal and appointment.deal.status == DealStatus.WON
            ),
            no_shows=sum(1 for a in appointments if is_no_show(a.status)),
        )
        return campaign, stats


def get_campaign_service(repository: CRUDCampaign = Depends()) -> CampaignService:
    return CampaignService(repository)
