"""CRUD operations for deals and payments."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from salescrm.repositories.crm.models.deal_model import Deal, Payment
from salescrm.repositories.crm.models.enums import DealStatus


class CRUDDeal:
    """
    Repository class for handling database operations related to deals.

    Write helpers accept ``commit=False`` so a service can group several
    writes (deal, payment, counters) into one transaction.
    """

    def get(self, db: Session, deal_id: int) -> Optional[Deal]:
        return db.query(Deal).filter(Deal.id == deal_id).first()

    def get_by_appointment(self, db: Session, appointment_id: int) -> Optional[Deal]:
        return db.query(Deal).filter(Deal.appointment_id == appointment_id).first()

    def list(
        self,
        db: Session,
        status: Optional[DealStatus] = None,
        closer_id: Optional[int] = None,
    ) -> List[Deal]:
        """Return deals newest first."""
        query = db.query(Deal)
        if status is not None:
            query = query.filter(Deal.status == status)
        if closer_id is not None:
            query = query.filter(Deal.closer_id == closer_id)
        return query.order_by(Deal.created_at.desc(), Deal.id.desc()).all()

    def list_closed(
        self,
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[DealStatus] = None,
        closer_id: Optional[int] = None,
    ) -> List[Deal]:
        """
        Return deals filtered on ``closed_at``.

        Without bounds every deal matches, including the ones that were never
        closed. With a bound, only deals closed inside ``[start, end)`` match.
        """
        query = db.query(Deal)
        if start is not None:
            query = query.filter(Deal.closed_at >= start)
        if end is not None:
            query = query.filter(Deal.closed_at < end)
        if status is not None:
            query = query.filter(Deal.status == status)
        if closer_id is not None:
            query = query.filter(Deal.closer_id == closer_id)
        return query.order_by(Deal.closed_at, Deal.id).all()

    def list_follow_ups(
        self, db: Session, closer_id: int, since: datetime
    ) -> List[Deal]:
        return (
            db.query(Deal)
            .filter(
                Deal.closer_id == closer_id,
                Deal.status == DealStatus.FOLLOW_UP,
                Deal.follow_up_date >= since,
            )
            .order_by(Deal.follow_up_date, Deal.id)
            .all()
        )

    def list_recent_for_closer(
        self, db: Session, closer_id: int, limit: int = 10
    ) -> List[Deal]:
        return (
            db.query(Deal)
            .filter(Deal.closer_id == closer_id)
            .order_by(Deal.created_at.desc(), Deal.id.desc())
            .limit(limit)
            .all()
        )

    def create(self, db: Session, deal: Deal, commit: bool = True) -> Deal:
        db.add(deal)
        return self._persist(db, deal, commit)

    def save(self, db: Session, deal: Deal, commit: bool = True) -> Deal:
        db.add(deal)
        return self._persist(db, deal, commit)

    def add_payment(
        self, db: Session, payment: Payment, commit: bool = True
    ) -> Payment:
        db.add(payment)
        return self._persist(db, payment, commit)

    @staticmethod
    def _persist(db: Session, instance, commit: bool):  # type: ignore[no-untyped-def]
        if not commit:
            db.flush()
            return instance
        db.commit()
        db.refresh(instance)
        return instance
