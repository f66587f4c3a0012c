import pytest
from httpx import ASGITransport, AsyncClient
from sqlmodel import Session, select

from streakquest.config import Settings
from streakquest.main import create_app
from streakquest.models import Achievement, User
from streakquest.services.storage import get_qr_code


@pytest.fixture
def custom_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'custom.db'}",
        SECRET_KEY="another-secret",
        SEED_DEMO_DATA=False,
        LEADERBOARD_SIZE=1,
        QR_DEFAULT_EXPIRATION_MINUTES=5,
    )


@pytest.mark.asyncio
async def test_app_uses_the_settings_it_is_given(custom_settings, tmp_path):
    app = create_app(custom_settings)

    async with app.router.lifespan_context(app):
        assert (tmp_path / "custom.db").exists()
        with Session(app.state.engine) as session:
            assert len(session.exec(select(Achievement)).all()) == 3
            assert session.exec(select(User)).all() == []

        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        teacher = await client.post(
            "/api/auth/signup",
            json={"email": "t@example.com", "password": "pw", "name": "Terry", "role": "teacher"},
        )
        for email in ("a@example.com", "b@example.com"):
            await client.post("/api/auth/signup", json={"email": email, "password": "pw", "name": email})
        headers = {"Authorization": f"Bearer {teacher.json()['token']}"}

        me = await client.get("/api/auth/me", headers=headers)
        assert me.status_code == 200

        board = await client.get("/api/gamification/leaderboard", headers=headers)
        assert len(board.json()) == 1

        qr = (await client.post("/api/qr/generate", json={"date": "2026-01-05"}, headers=headers)).json()
        assert qr["code"].startswith("attendance_")
        with Session(app.state.engine) as session:
            record = get_qr_code(session, qr["code"])
            lifetime = record.expires_at - record.created_at
            assert 299 <= lifetime.total_seconds() <= 301


@pytest.mark.asyncio
async def test_tokens_from_another_secret_are_rejected(custom_settings):
    app = create_app(custom_settings)
    other = create_app(Settings(DATABASE_URL="sqlite://", SEED_DEMO_DATA=False))

    async with app.router.lifespan_context(app), other.router.lifespan_context(other):
        client = AsyncClient(transport=ASGITransport(app=other), base_url="http://test")
        signup = await client.post("/api/auth/signup", json={"email": "x@example.com", "password": "pw", "name": "X"})
        token = signup.json()["token"]

        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403
