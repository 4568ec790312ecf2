"""
CRUD operations for the per-day aggregates.

This module provides a `CRUDDailyStats` class with methods to:
- Retrieve the stats row of a given day.
- List stored rows inside a date range.
- Create or replace the row of a day (upsert).
"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from salescrm.repositories.crm.models.daily_stats_model import DailyStats


class CRUDDailyStats:
    """Repository class for handling database operations related to daily stats."""

    def get(self, db: Session, day: date) -> Optional[DailyStats]:
        return db.query(DailyStats).filter(DailyStats.date == day).first()

    def list(
        self,
        db: Session,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[DailyStats]:
        """Return stored rows between two days, both inclusive, oldest first."""
        query = db.query(DailyStats)
        if start is not None:
            query = query.filter(DailyStats.date >= start)
        if end is not None:
            query = query.filter(DailyStats.date <= end)
        return query.order_by(DailyStats.date).all()

    def upsert(
        self,
        db: Session,
        day: date,
        values: Dict[str, Any],
    ) -> DailyStats:
        """Insert the row for ``day`` or replace every figure of the existing one.

        Args:
            db (Session): The database session.
            day (date): Calendar day the figures belong to.
            values (Dict[str, Any]): Column values, see ``summarize_day``.

        Returns:
            DailyStats: The created or updated row.
        """
        stats = self.get(db, day)
        if stats is None:
            stats = DailyStats(date=day)
            db.add(stats)

        for field, value in values.items():
            setattr(stats, field, value)

        db.commit()
        db.refresh(stats)
        return stats
