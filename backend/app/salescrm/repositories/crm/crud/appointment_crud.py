"""
CRUD operations for appointments.

Listing helpers take explicit time bounds, always half-open
``[start, end)``, so callers decide which calendar window they mean.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from salescrm.repositories.crm.models.appointment_model import Appointment
from salescrm.repositories.crm.models.enums import AppointmentStatus
from salescrm.repositories.crm.schemas.appointment_schema import AppointmentCreate
from salescrm.services.metrics import NO_SHOW_STATUSES


class CRUDAppointment:
    """Database access for appointments."""

    def get(self, db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    def list(
        self,
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[AppointmentStatus] = None,
        closer_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Return appointments ordered by scheduled time, oldest first."""
        query = db.query(Appointment)
        if start is not None:
            query = query.filter(Appointment.scheduled_at >= start)
        if end is not None:
            query = query.filter(Appointment.scheduled_at < end)
        if status is not None:
            query = query.filter(Appointment.status == status)
        if closer_id is not None:
            query = query.filter(Appointment.closer_id == closer_id)
        return query.order_by(Appointment.scheduled_at, Appointment.id).all()

    def list_no_shows(
        self,
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Appointment]:
        query = db.query(Appointment).filter(
            Appointment.status.in_(list(NO_SHOW_STATUSES))
        )
        if start is not None:
            query = query.filter(Appointment.scheduled_at >= start)
        if end is not None:
            query = query.filter(Appointment.scheduled_at < end)
        return query.order_by(Appointment.scheduled_at, Appointment.id).all()

    def list_recent_for_closer(
        self, db: Session, closer_id: int, limit: int = 10
    ) -> List[Appointment]:
        return (
            db.query(Appointment)
            .filter(Appointment.closer_id == closer_id)
            .order_by(Appointment.scheduled_at.desc(), Appointment.id.desc())
            .limit(limit)
            .all()
        )

    def create(self, db: Session, appointment_in: AppointmentCreate) -> Appointment:
        appointment = Appointment(**appointment_in.model_dump())
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    def save(
        self, db: Session, appointment: Appointment, commit: bool = True
    ) -> Appointment:
        """Persist pending changes; with ``commit=False`` only flush them."""
        db.add(appointment)
        if not commit:
            db.flush()
            return appointment
        db.commit()
        db.refresh(appointment)
        return appointment
