"""Shared fixtures: an in-memory database, a test client and row builders."""

from datetime import datetime
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from salescrm.repositories.crm.database import Base
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.models import Appointment, Campaign, Lead, User
from salescrm.repositories.crm.models.enums import AppointmentStatus, UserRole
from salescrm.services.clock import local_now


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory) -> TestClient:
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _save(db: Session, instance):
    db.add(instance)
    db.commit()
    db.refresh(instance)
    return instance


@pytest.fixture()
def make_user(db_session) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(name: str = "Max Closer", role: UserRole = UserRole.CLOSER) -> User:
        counter["n"] += 1
        email = f"user{counter['n']}@example.com"
        return _save(db_session, User(name=name, email=email, role=role))

    return _make


@pytest.fixture()
def make_campaign(db_session) -> Callable[..., Campaign]:
    def _make(name: str = "Spring funnel") -> Campaign:
        return _save(
            db_session,
            Campaign(name=name, budget=1000, start_date=datetime(2026, 1, 1)),
        )

    return _make


@pytest.fixture()
def make_lead(db_session, make_campaign) -> Callable[..., Lead]:
    def _make(campaign: Optional[Campaign] = None, first_name: str = "Jonas") -> Lead:
        campaign = campaign or make_campaign()
        return _save(
            db_session,
            Lead(
                campaign_id=campaign.id,
                first_name=first_name,
                last_name="Weber",
                phone="+49 151 0000000",
            ),
        )

    return _make


@pytest.fixture()
def make_appointment(db_session, make_lead, make_user) -> Callable[..., Appointment]:
    def _make(
        lead: Optional[Lead] = None,
        closer: Optional[User] = None,
        scheduled_at: Optional[datetime] = None,
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        no_show_reason: Optional[str] = None,
    ) -> Appointment:
        return _save(
            db_session,
            Appointment(
                lead_id=(lead or make_lead()).id,
                closer_id=(closer or make_user()).id,
                scheduled_at=scheduled_at or local_now(),
                status=status,
                no_show_reason=no_show_reason,
            ),
        )

    return _make
