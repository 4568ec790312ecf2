"""Seed helper for local development."""

import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from salescrm.repositories.crm.dependencies import session_scope
from salescrm.repositories.crm.models.campaign_model import Campaign
from salescrm.repositories.crm.models.enums import UserRole
from salescrm.repositories.crm.models.user_model import User
from salescrm.services.clock import local_now

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"name": "Anna Admin", "email": "admin@example.com", "role": UserRole.ADMIN},
    {"name": "Max Closer", "email": "max@example.com", "role": UserRole.CLOSER},
    {"name": "Lena Closer", "email": "lena@example.com", "role": UserRole.CLOSER},
]


def create_mock_data() -> None:
    """Populate the database with a demo team and campaign when empty."""
    try:
        with session_scope() as db:
            existing = db.query(User).count()
            if existing:
                logger.info("Users already present (%d records). Skipping.", existing)
                return

            logger.info("Creating demo sales team and campaign.")
            db.add_all(User(**user) for user in SAMPLE_USERS)

            start = local_now().replace(hour=0, minute=0, second=0)
            db.add(
                Campaign(
                    name="Spring webinar funnel",
                    budget=1500,
                    start_date=start,
                    end_date=start + timedelta(days=30),
                )
            )
        logger.info("Demo data inserted with success.")
    except SQLAlchemyError as exc:  # pragma: no cover
        logger.error("Failed to seed mock data: %s", exc)


if __name__ == "__main__":  # pragma: no cover
    create_mock_data()
