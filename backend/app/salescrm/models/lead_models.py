"""Composite lead views returned by the lead endpoints."""

from typing import Optional

from salescrm.repositories.crm.schemas.appointment_schema import AppointmentResponse
from salescrm.repositories.crm.schemas.campaign_schema import CampaignResponse
from salescrm.repositories.crm.schemas.deal_schema import DealResponse
from salescrm.repositories.crm.schemas.lead_schema import LeadResponse
from salescrm.repositories.crm.schemas.user_schema import CloserSummary


class LeadListItem(LeadResponse):
    campaign: CampaignResponse
    appointment: Optional[AppointmentResponse] = None


class LeadAppointment(AppointmentResponse):
    closer: CloserSummary
    deal: Optional[DealResponse] = None


class LeadDetail(LeadResponse):
    """A lead with its campaign, appointment, closer, deal and payments."""

    campaign: CampaignResponse
    appointment: Optional[LeadAppointment] = None
