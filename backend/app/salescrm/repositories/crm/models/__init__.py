"""Import every model so ``Base.metadata`` knows all tables."""

from salescrm.repositories.crm.models.appointment_model import Appointment
from salescrm.repositories.crm.models.campaign_model import Campaign
from salescrm.repositories.crm.models.daily_stats_model import DailyStats
from salescrm.repositories.crm.models.deal_model import Deal, Payment
from salescrm.repositories.crm.models.lead_model import Lead
from salescrm.repositories.crm.models.user_model import User

__all__ = [
    "Appointment",
    "Campaign",
    "DailyStats",
    "Deal",
    "Lead",
    "Payment",
    "User",
]
