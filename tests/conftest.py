from datetime import datetime, time, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import streakquest.models  # noqa: F401
from streakquest.db import get_session
from streakquest.main import app
from streakquest.models import Role
from streakquest.security import create_access_token
from streakquest.services.awarding import seed_achievements
from streakquest.services.storage import create_user
from streakquest.utils.clock import utc_today

DATABASE_URL = "sqlite://"
engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        seed_achievements(session)
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def student(session: Session):
    return create_user(session, "kai@example.com", "password", "Kai Nguyen", Role.STUDENT)


@pytest.fixture
def teacher(session: Session):
    return create_user(session, "terry@example.com", "password", "Terry Teacher", Role.TEACHER)


@pytest.fixture
def parent(session: Session):
    return create_user(session, "pat@example.com", "password", "Pat Nguyen", Role.PARENT)


@pytest.fixture
def today():
    return utc_today()


def at_morning(day):
    return datetime.combine(day, time(8, 30), tzinfo=timezone.utc)


def days_before(day, n):
    return day - timedelta(days=n)


def auth_headers(user) -> dict:
    token = create_access_token(
        {"sub": str(user.id), "email": user.email, "role": user.role.value}, app.state.settings
    )
    return {"Authorization": f"Bearer {token}"}
