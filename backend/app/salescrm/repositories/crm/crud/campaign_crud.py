"""CRUD helpers for campaigns."""

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from salescrm.repositories.crm.models.campaign_model import Campaign
from salescrm.repositories.crm.models.lead_model import Lead
from salescrm.repositories.crm.schemas.campaign_schema import (
    CampaignCreate,
    CampaignUpdate,
)


class CRUDCampaign:
    """Database access for campaigns."""

    def get(self, db: Session, campaign_id: int) -> Optional[Campaign]:
        return db.query(Campaign).filter(Campaign.id == campaign_id).first()

    def list_with_lead_counts(self, db: Session) -> List[Tuple[Campaign, int]]:
        """Return every campaign, newest first, with the number of its leads."""
        rows = (
            db.query(Campaign, func.count(Lead.id))
            .outerjoin(Lead, Lead.campaign_id == Campaign.id)
            .group_by(Campaign.id)
            .order_by(Campaign.created_at.desc(), Campaign.id.desc())
            .all()
        )
        return [(campaign, count) for campaign, count in rows]

    def create(self, db: Session, campaign_in: CampaignCreate) -> Campaign:
        campaign = Campaign(**campaign_in.model_dump())
        db.add(campaign)
        db.commit()
        db.refresh(campaign)
        return campaign

    def update(
        self,
        db: Session,
        campaign: Campaign,
        campaign_update: CampaignUpdate,
    ) -> Campaign:
        data = campaign_update.model_dump(exclude_unset=True)
        for field, value in data.items():
            setattr(campaign, field, value)
        db.add(campaign)
        db.commit()
        db.refresh(campaign)
        return campaign
