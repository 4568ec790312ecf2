"""This module provides the AppointmentService class for managing sales calls."""

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.lead_crud import CRUDLead
from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models.appointment_model import Appointment
from salescrm.repositories.crm.models.enums import AppointmentStatus, UserRole
from salescrm.repositories.crm.schemas.appointment_schema import (
    AppointmentComplete,
    AppointmentCreate,
    AppointmentFilter,
    AppointmentStatusUpdate,
)
from salescrm.services.clock import day_bounds, local_today
from salescrm.services.exceptions import InvalidTransitionError, NotFoundError
from salescrm.services.metrics import can_transition_appointment, is_no_show

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service layer for handling appointment-related operations."""

    def __init__(
        self,
        repository: CRUDAppointment,
        leads: CRUDLead,
        users: CRUDUser,
    ) -> None:
        """
        Initialize the AppointmentService with its repositories.

        Args:
            repository (CRUDAppointment): Repository for appointment rows.
            leads (CRUDLead): Repository used to check the booked lead.
            users (CRUDUser): Repository used to check and update the closer.
        """
        self.repository = repository
        self.leads = leads
        self.users = users

    def list(self, db: Session, filters: AppointmentFilter) -> List[Appointment]:
        start = end = None
        if filters.date is not None:
            start, end = day_bounds(filters.date)
        return self.repository.list(
            db,
            start=start,
            end=end,
            status=filters.status,
            closer_id=filters.closer_id,
        )

    def today(self, db: Session) -> List[Appointment]:
        start, end = day_bounds(local_today())
        return self.repository.list(db, start=start, end=end)

    def get(self, db: Session, appointment_id: int) -> Appointment:
        appointment = self.repository.get(db, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    def create(self, db: Session, appointment_in: AppointmentCreate) -> Appointment:
        """
        Book a call between a lead and a closer.

        Raises:
            NotFoundError: If the lead or the closer does not exist.
            ValueError: If the user is not a closer or the lead is already booked.
        """
        lead = self.leads.get(db, appointment_in.lead_id)
        if lead is None:
            raise NotFoundError("Lead", appointment_in.lead_id)
        closer = self.users.get(db, appointment_in.closer_id)
        if closer is None:
            raise NotFoundError("Closer", appointment_in.closer_id)
        if closer.role != UserRole.CLOSER:
            raise ValueError("Appointments can only be assigned to closers")
        if lead.appointment is not None:
            raise ValueError("Lead already has an appointment")

        appointment = self.repository.create(db, appointment_in)
        logger.info(
            "Appointment %s booked for lead %s with closer %s at %s",
            appointment.id,
            lead.id,
            closer.id,
            appointment.scheduled_at,
        )
        return appointment

    def update_status(
        self,
        db: Session,
        appointment_id: int,
        status_update: AppointmentStatusUpdate,
    ) -> Appointment:
        appointment = self.get(db, appointment_id)
        self._apply_status(
            appointment, status_update.status, status_update.no_show_reason
        )
        return self.repository.save(db, appointment)

    def complete(
        self,
        db: Session,
        appointment_id: int,
        report: AppointmentComplete,
    ) -> Appointment:
        """
        Store the closer's call report.

        A lead that showed up counts as one more call for the closer. The
        counter is written in the same transaction as the appointment.
        The report must move the appointment out of SCHEDULED, so a call is
        counted once.
        """
        appointment = self.get(db, appointment_id)
        if report.status == AppointmentStatus.SCHEDULED:
            raise ValueError(
                "A call report must complete the appointment or mark a no-show"
            )
        self._apply_status(appointment, report.status, report.no_show_reason)
        appointment.showed_up = report.showed_up
        appointment.call_duration = report.call_duration
        if report.notes is not None:
            appointment.notes = report.notes

        try:
            self.repository.save(db, appointment, commit=False)
            if report.showed_up:
                self.users.increment_counters(db, appointment.closer, calls=1)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(appointment)
        return appointment

    @staticmethod
    def _apply_status(
        appointment: Appointment,
        status: AppointmentStatus,
        no_show_reason: Optional[str],
    ) -> None:
        if not can_transition_appointment(appointment.status, status):
            raise InvalidTransitionError("Appointment", appointment.status, status)
        appointment.status = status
        appointment.no_show_reason = no_show_reason if is_no_show(status) else None


def get_appointment_service(
    repository: CRUDAppointment = Depends(),
    leads: CRUDLead = Depends(),
    users: CRUDUser = Depends(),
) -> AppointmentService:
    """Retrieve an instance of AppointmentService with the provided repositories."""
    return AppointmentService(repository, leads, users)
