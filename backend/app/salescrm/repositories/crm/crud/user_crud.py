"""CRUD helpers for CRM users and their cached counters."""

from typing import List, Optional

from sqlalchemy.orm import Session

from salescrm.repositories.crm.models.enums import UserRole
from salescrm.repositories.crm.models.user_model import User
from salescrm.repositories.crm.schemas.user_schema import UserCreate


class CRUDUser:
    """Database access for users."""

    def get(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def list(self, db: Session, role: Optional[UserRole] = None) -> List[User]:
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.name).all()

    def ranking(self, db: Session) -> List[User]:
        """Return closers ordered by cached revenue, best first."""
        return (
            db.query(User)
            .filter(User.role == UserRole.CLOSER)
            .order_by(User.total_revenue.desc(), User.id)
            .all()
        )

    def create(self, db: Session, user_in: UserCreate) -> User:
        user = User(**user_in.model_dump())
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    def increment_counters(
        self,
        db: Session,
        user: User,
        calls: int = 0,
        wins: int = 0,
        revenue: float = 0.0,
    ) -> User:
        """
        Bump the cached counters of a user.

        Only flushes: the caller commits together with the write that caused
        the increment.
        """
        user.total_calls = (user.total_calls or 0) + calls
        user.total_wins = (user.total_wins or 0) + wins
        user.total_revenue = round(float(user.total_revenue or 0) + revenue, 2)
        db.add(user)
        db.flush()
        return user
