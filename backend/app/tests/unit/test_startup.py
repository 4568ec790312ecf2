from unittest.mock import patch

from salescrm.repositories.crm.models import Campaign, User
from salescrm.repositories.crm.models.enums import UserRole
from startup import create_mock_data


def test_seeds_empty_database(session_factory, db_session):
    with patch("salescrm.repositories.crm.dependencies.SessionLocal", session_factory):
        create_mock_data()

    roles = sorted(user.role.value for user in db_session.query(User).all())
    assert roles == [UserRole.ADMIN.value, UserRole.CLOSER.value, UserRole.CLOSER.value]
    assert db_session.query(Campaign).count() == 1


def test_leaves_existing_data_alone(session_factory, db_session, make_user):
    make_user()

    with patch("salescrm.repositories.crm.dependencies.SessionLocal", session_factory):
        create_mock_data()

    assert db_session.query(User).count() == 1
    assert db_session.query(Campaign).count() == 0
