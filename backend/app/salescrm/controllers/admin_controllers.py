"""Admin dashboard and user management endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from salescrm.controllers.errors import service_errors
from salescrm.logger_config import get_logger
from salescrm.models.dashboard_models import AdminDashboard, CloserDetails
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.models.enums import UserRole
from salescrm.repositories.crm.schemas.daily_stats_schema import DailyStatsResponse
from salescrm.repositories.crm.schemas.user_schema import UserCreate, UserResponse
from salescrm.services.daily_stats_services import (
    DailyStatsService,
    get_daily_stats_service,
)
from salescrm.services.dashboard_services import (
    DashboardService,
    get_dashboard_service,
)
from salescrm.services.users_services import UserService, get_user_service

logger = get_logger(__name__)

admin_router = APIRouter(prefix="/api/admin", tags=["Admin"])


@admin_router.get("/dashboard", response_model=AdminDashboard)
def get_admin_dashboard(
    db: Session = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
) -> AdminDashboard:
    """
    Aggregate view for admins.

    Returns:
        AdminDashboard: Closer ranking, today's stored stats, today's cashflow,
        the trailing show-up rate and the deals won today.
    """
    return service.admin_dashboard(db)


@admin_router.get("/closer/{closer_id}", response_model=CloserDetails)
def get_closer_details(
    closer_id: int,
    db: Session = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
) -> CloserDetails:
    with service_errors():
        return service.closer_details(db, closer_id)


@admin_router.post("/update-daily-stats", response_model=DailyStatsResponse)
def update_daily_stats(
    day: Optional[date] = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    service: DailyStatsService = Depends(get_daily_stats_service),
) -> DailyStatsResponse:
    """Recompute and store the stats of a day, today when no date is given."""
    stats = service.refresh(db, day)
    return DailyStatsResponse.model_validate(stats)


@admin_router.get("/users", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = None,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    return [UserResponse.model_validate(user) for user in service.list(db, role)]


@admin_router.post(
    "/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
def create_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    with service_errors():
        user = service.create(db, user_in)
    logger.info("Registered %s %s (%s)", user.role.value.lower(), user.id, user.email)
    return UserResponse.model_validate(user)
