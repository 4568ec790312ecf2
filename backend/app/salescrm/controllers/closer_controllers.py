"""Closer dashboard endpoints: today's calls, call reports and deal capture."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from salescrm.controllers.errors import service_errors
from salescrm.models.dashboard_models import CloserDashboard, LeadCallSheet
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.schemas.appointment_schema import (
    AppointmentComplete,
    AppointmentWithRelations,
)
from salescrm.repositories.crm.schemas.deal_schema import DealCreate, DealResponse
from salescrm.services.appointments_services import (
    AppointmentService,
    get_appointment_service,
)
from salescrm.services.dashboard_services import (
    DashboardService,
    get_dashboard_service,
)
from salescrm.services.deals_services import DealService, get_deal_service

closer_router = APIRouter(prefix="/api/closer", tags=["Closer"])


@closer_router.get("/dashboard/{closer_id}", response_model=CloserDashboard)
def get_closer_dashboard(
    closer_id: int,
    db: Session = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
) -> CloserDashboard:
    with service_errors():
        return service.closer_dashboard(db, closer_id)


@closer_router.post(
    "/appointment/{appointment_id}/complete", response_model=AppointmentWithRelations
)
def complete_appointment(
    appointment_id: int,
    report: AppointmentComplete,
    db: Session = Depends(get_db),
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentWithRelations:
    """Store the call report; an attended call counts towards the closer's calls."""
    with service_errors():
        appointment = service.complete(db, appointment_id, report)
    return AppointmentWithRelations.model_validate(appointment)


@closer_router.post("/deal/create", response_model=DealResponse)
def create_deal_after_call(
    deal_in: DealCreate,
    db: Session = Depends(get_db),
    service: DealService = Depends(get_deal_service),
) -> DealResponse:
    deal_in.closer_id = None
    with service_errors():
        deal = service.create(db, deal_in)
    return DealResponse.model_validate(deal)


@closer_router.get("/lead/{lead_id}", response_model=LeadCallSheet)
def get_lead_call_sheet(
    lead_id: int,
    db: Session = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
) -> LeadCallSheet:
    with service_errors():
        return service.lead_call_sheet(db, lead_id)
