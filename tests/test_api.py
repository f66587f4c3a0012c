from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import Session

from streakquest.services.attendance import mark_attendance
from streakquest.services.storage import get_qr_code, link_parent
from streakquest.utils.clock import utcnow
from tests.conftest import auth_headers, days_before


@pytest.mark.asyncio
async def test_signup_login_and_me(client: AsyncClient):
    response = await client.post(
        "/api/auth/signup",
        json={"email": "new@example.com", "password": "secret", "name": "New Student", "role": "student"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["studentId"].startswith("STU")
    assert "passwordHash" not in body["user"]

    response = await client.post("/api/auth/login", json={"email": "new@example.com", "password": "secret"})
    assert response.status_code == 200
    token = response.json()["token"]

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, student):
    response = await client.post(
        "/api/auth/signup",
        json={"email": student.email, "password": "x", "name": "Copy"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


@pytest.mark.asyncio
async def test_login_bad_credentials(client: AsyncClient, student):
    response = await client.post("/api/auth/login", json={"email": student.email, "password": "wrong"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_and_invalid_tokens(client: AsyncClient):
    assert (await client.get("/api/attendance/stats")).status_code == 401
    response = await client.get("/api/attendance/stats", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_mark_attendance_and_stats(client: AsyncClient, student, today):
    headers = auth_headers(student)
    response = await client.post(
        "/api/attendance/mark",
        json={"date": today.isoformat(), "isPresent": True, "method": "manual"},
        headers=headers,
    )
    assert response.status_code == 200
    record = response.json()
    assert record["userId"] == student.id
    assert record["checkedInAt"] is not None

    stats = (await client.get("/api/attendance/stats", headers=headers)).json()
    assert stats == {"rate": 100, "streak": 1, "totalDays": 1}

    history = (await client.get("/api/attendance/history", headers=headers)).json()
    assert [r["date"] for r in history] == [today.isoformat()]


@pytest.mark.asyncio
async def test_mark_attendance_validation(client: AsyncClient, student):
    response = await client.post(
        "/api/attendance/mark",
        json={"date": "not-a-date", "isPresent": True},
        headers=auth_headers(student),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_qr_generate_is_teacher_only(client: AsyncClient, student, today):
    response = await client.post("/api/qr/generate", json={"date": today.isoformat()}, headers=auth_headers(student))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_qr_flow(client: AsyncClient, session: Session, student, teacher, today):
    response = await client.post(
        "/api/qr/generate",
        json={"date": today.isoformat(), "expirationMinutes": 10},
        headers=auth_headers(teacher),
    )
    assert response.status_code == 200
    qr = response.json()
    assert qr["code"].startswith("attendance_")
    assert qr["dataUrl"].startswith("data:image/png;base64,")
    assert qr["isActive"] is True

    response = await client.post("/api/attendance/qr-checkin", json={"code": qr["code"]}, headers=auth_headers(student))
    assert response.status_code == 200
    assert response.json()["method"] == "qr"

    record = get_qr_code(session, qr["code"])
    record.expires_at = utcnow() - timedelta(minutes=1)
    session.add(record)
    session.commit()

    response = await client.post("/api/attendance/qr-checkin", json={"code": qr["code"]}, headers=auth_headers(student))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_qr_checkin_unknown_code(client: AsyncClient, student):
    response = await client.post("/api/attendance/qr-checkin", json={"code": "bogus"}, headers=auth_headers(student))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid or expired QR code"


@pytest.mark.asyncio
async def test_leaderboard_and_achievements(client: AsyncClient, session: Session, student, today):
    for offset in range(9, -1, -1):
        mark_attendance(session, student.id, days_before(today, offset), True)

    headers = auth_headers(student)
    board = (await client.get("/api/gamification/leaderboard", headers=headers)).json()
    assert board[0]["user"]["id"] == student.id
    assert board[0]["xp"] == 1250
    assert board[0]["level"] == 2

    catalog = (await client.get("/api/achievements", headers=headers)).json()
    assert {a["name"] for a in catalog} == {"Perfect Week", "Streak Master", "Study Champion"}

    mine = (await client.get("/api/achievements/user", headers=headers)).json()
    assert [a["achievement"]["name"] for a in mine] == ["Streak Master"]
    assert mine[0]["achievement"]["xpReward"] == 1000

    history = (await client.get("/api/gamification/xp-history", headers=headers)).json()
    assert sum(entry["delta"] for entry in history) == 1250


@pytest.mark.asyncio
async def test_homework_lifecycle(client: AsyncClient, student, teacher):
    due = (utcnow() + timedelta(days=2)).isoformat()
    response = await client.post(
        "/api/homework",
        json={"title": "Essay", "subject": "English", "dueDate": due},
        headers=auth_headers(teacher),
    )
    assert response.status_code == 200
    homework_id = response.json()["id"]

    forbidden = await client.post(
        "/api/homework",
        json={"title": "Essay", "subject": "English", "dueDate": due},
        headers=auth_headers(student),
    )
    assert forbidden.status_code == 403

    listing = (await client.get("/api/homework", headers=auth_headers(student))).json()
    assert [h["id"] for h in listing] == [homework_id]

    response = await client.post(f"/api/homework/{homework_id}/submit", headers=auth_headers(student))
    assert response.status_code == 200
    assert response.json()["isOnTime"] is True

    submissions = (await client.get(f"/api/homework/{homework_id}/submissions", headers=auth_headers(teacher))).json()
    assert submissions[0]["user"]["id"] == student.id

    missing = await client.post("/api/homework/999/submit", headers=auth_headers(student))
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_dashboards(client: AsyncClient, session: Session, student, teacher, parent, today):
    mark_attendance(session, student.id, today, True)
    mark_attendance(session, student.id, days_before(today, 1), False)
    link_parent(session, student.id, parent.id)

    data = (await client.get("/api/dashboard/student", headers=auth_headers(student))).json()
    assert data["gamification"]["xp"] == 25
    assert data["attendance"]["rate"] == 50
    assert len(data["attendance"]["recent"]) == 2

    data = (await client.get("/api/dashboard/teacher", headers=auth_headers(teacher))).json()
    assert data["totalStudents"] == 1
    assert data["presentToday"] == 1
    assert data["lowAttendanceStudents"][0]["attendanceRate"] == 50
    assert data["avgAttendance"] == 50

    data = (await client.get("/api/dashboard/parent", headers=auth_headers(parent))).json()
    assert data["children"][0]["child"]["id"] == student.id

    assert (await client.get("/api/dashboard/teacher", headers=auth_headers(student))).status_code == 403
    assert (await client.get("/api/dashboard/parent", headers=auth_headers(teacher))).status_code == 403
