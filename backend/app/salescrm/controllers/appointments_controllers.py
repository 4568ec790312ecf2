"""Appointment endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salescrm.controllers.errors import service_errors
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.schemas.appointment_schema import (
    AppointmentCreate,
    AppointmentFilter,
    AppointmentStatusUpdate,
    AppointmentWithRelations,
)
from salescrm.services.appointments_services import (
    AppointmentService,
    get_appointment_service,
)

appointments_router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


@appointments_router.get("", response_model=List[AppointmentWithRelations])
def list_appointments(
    filters: AppointmentFilter = Depends(),
    db: Session = Depends(get_db),
    service: AppointmentService = Depends(get_appointment_service),
) -> List[AppointmentWithRelations]:
    """List appointments by scheduled time, optionally for one day, status or closer."""
    return [
        AppointmentWithRelations.model_validate(appointment)
        for appointment in service.list(db, filters)
    ]


@appointments_router.get("/today", response_model=List[AppointmentWithRelations])
def list_todays_appointments(
    db: Session = Depends(get_db),
    service: AppointmentService = Depends(get_appointment_service),
) -> List[AppointmentWithRelations]:
    return [
        AppointmentWithRelations.model_validate(appointment)
        for appointment in service.today(db)
    ]


@appointments_router.post(
    "",
    response_model=AppointmentWithRelations,
    status_code=status.HTTP_201_CREATED,
)
def create_appointment(
    appointment_in: AppointmentCreate,
    db: Session = Depends(get_db),
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentWithRelations:
    with service_errors():
        appointment = service.create(db, appointment_in)
    return AppointmentWithRelations.model_validate(appointment)


@appointments_router.get("/{appointment_id}", response_model=AppointmentWithRelations)
def get_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentWithRelations:
    with service_errors():
        appointment = service.get(db, appointment_id)
    return AppointmentWithRelations.model_validate(appointment)


@appointments_router.put(
    "/{appointment_id}/status", response_model=AppointmentWithRelations
)
def update_appointment_status(
    appointment_id: int,
    status_update: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentWithRelations:
    """
    Change the status of an appointment.

    The no-show reason is stored only for NO_SHOW statuses. Completed and
    no-show appointments cannot change status again.
    """
    with service_errors():
        appointment = service.update_status(db, appointment_id, status_update)
    return AppointmentWithRelations.model_validate(appointment)
