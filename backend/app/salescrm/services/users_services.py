"""Service layer helpers for CRM users."""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models.enums import UserRole
from salescrm.repositories.crm.models.user_model import User
from salescrm.repositories.crm.schemas.user_schema import UserCreate


class UserService:
    """Provide higher-level operations for closers and admins."""

    def __init__(self, repository: CRUDUser) -> None:
        self.repository = repository

    def create(self, db: Session, user_in: UserCreate) -> User:
        if self.repository.get_by_email(db, user_in.email):
            raise ValueError("A user with this email already exists")
        return self.repository.create(db, user_in)

    def list(self, db: Session, role: Optional[UserRole] = None) -> List[User]:
        return self.repository.list(db, role)


def get_user_service(repository: CRUDUser = Depends()) -> UserService:
    return UserService(repository)
