"""Campaign endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salescrm.controllers.errors import service_errors
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.schemas.campaign_schema import (
    CampaignCreate,
    CampaignListItem,
    CampaignResponse,
    CampaignStatsResponse,
    CampaignUpdate,
)
from salescrm.services.campaigns_services import (
    CampaignService,
    get_campaign_service,
)

campaigns_router = APIRouter(prefix="/api/campaigns", tags=["Campaigns"])


@campaigns_router.get("", response_model=List[CampaignListItem])
def list_campaigns(
    db: Session = Depends(get_db),
    service: CampaignService = Depends(get_campaign_service),
) -> List[CampaignListItem]:
    """Return every campaign, newest first, with its number of leads."""
    return [
        CampaignListItem(
            **CampaignResponse.model_validate(campaign).model_dump(),
            lead_count=lead_count,
        )
        for campaign, lead_count in service.list(db)
    ]


@campaigns_router.post(
    "", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED
)
def create_campaign(
    campaign_in: CampaignCreate,
    db: Session = Depends(get_db),
    service: CampaignService = Depends(get_campaign_service),
) -> CampaignResponse:
    campaign = service.create(db, campaign_in)
    return CampaignResponse.model_validate(campaign)


@campaigns_router.get("/{campaign_id}", response_model=CampaignResponse)
def get_campaign(
    campaign_id: int,
    db: Session = Depends(get_db),
    service: CampaignService = Depends(get_campaign_service),
) -> CampaignResponse:
    with service_errors():
        campaign = service.get(db, campaign_id)
    return CampaignResponse.model_validate(campaign)


@campaigns_router.put("/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    campaign_id: int,
    campaign_update: CampaignUpdate,
    db: Session = Depends(get_db),
    service: CampaignService = Depends(get_campaign_service),
) -> CampaignResponse:
    with service_errors():
        campaign = service.update(db, campaign_id, campaign_update)
    return CampaignResponse.model_validate(campaign)


@campaigns_router.get("/{campaign_id}/stats", response_model=CampaignStatsResponse)
def get_campaign_stats(
    campaign_id: int,
    db: Session = Depends(get_db),
    service: CampaignService = Depends(get_campaign_service),
) -> CampaignStatsResponse:
    """Funnel counters (leads, appointments, won deals, no-shows) of a campaign."""
    with service_errors():
        campaign, stats = service.stats(db, campaign_id)
    return CampaignStatsResponse(
        campaign=CampaignResponse.model_validate(campaign), stats=stats
    )
