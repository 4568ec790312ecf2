"""CRUD helpers for leads."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from salescrm.repositories.crm.models.lead_model import Lead
from salescrm.repositories.crm.schemas.lead_schema import (
    LeadCreate,
    LeadFilter,
    LeadUpdate,
)


class CRUDLead:
    """Database access for leads."""

    def get(self, db: Session, lead_id: int) -> Optional[Lead]:
        return db.query(Lead).filter(Lead.id == lead_id).first()

    def list(self, db: Session, filters: LeadFilter) -> List[Lead]:
        query = db.query(Lead)
        if filters.campaign_id is not None:
            query = query.filter(Lead.campaign_id == filters.campaign_id)
        if filters.source:
            query = query.filter(Lead.source == filters.source)
        return query.order_by(Lead.created_at.desc(), Lead.id.desc()).all()

    def count_created_between(
        self, db: Session, start: datetime, end: datetime
    ) -> int:
        return (
            db.query(Lead)
            .filter(Lead.created_at >= start, Lead.created_at < end)
            .count()
        )

    def create(self, db: Session, lead_in: LeadCreate) -> Lead:
        lead = Lead(**lead_in.model_dump())
        db.add(lead)
        db.commit()
        db.refresh(lead)
        return lead

    def update(
        self,
        db: Session,
        lead: Lead,
        lead_update: LeadUpdate,
    ) -> Lead:
        data = lead_update.model_dump(exclude_unset=True)
        for field, value in data.items():
            setattr(lead, field, value)
        db.add(lead)
        db.commit()
        db.refresh(lead)
        return lead
