from __future__ import annotations

import logging
import random
from datetime import timedelta

from sqlmodel import Session

from streakquest.errors import UserExistsError
from streakquest.models import AttendanceMethod, Role
from streakquest.services.attendance import mark_attendance
from streakquest.services.awarding import seed_achievements
from streakquest.services.storage import create_user
from streakquest.utils.clock import utc_today

log = logging.getLogger(__name__)

DEMO_PASSWORD = "password"
DEMO_USERS = [
    ("student@demo.com", "Alex Johnson", Role.STUDENT),
    ("teacher@demo.com", "Ms. Sarah Wilson", Role.TEACHER),
    ("parent@demo.com", "Jennifer Johnson", Role.PARENT),
]


def seed_demo_data(session: Session, rng: random.Random | None = None) -> None:
    """
    Create the demo accounts and a week of attendance for the demo student.
    Safe to call on every start: existing accounts are left alone.
    """
    rng = rng or random.Random()
    try:
        users = [create_user(session, email, DEMO_PASSWORD, name, role) for email, name, role in DEMO_USERS]
    except UserExistsError:
        session.rollback()
        log.info("Demo users already exist, skipping demo seed")
        return

    student = users[0]
    today = utc_today()
    mark_attendance(session, student.id, today, True, AttendanceMethod.MANUAL)
    for offset in range(1, 6):
        mark_attendance(
            session,
            student.id,
            today - timedelta(days=offset),
            rng.random() > 0.2,
            AttendanceMethod.MANUAL,
        )
    log.info("Seeded demo users: %s", ", ".join(email for email, _, _ in DEMO_USERS))


def seed_all(session: Session, demo: bool = True) -> None:
    added = seed_achievements(session)
    if added:
        log.info("Installed %d default achievements", added)
    if demo:
        seed_demo_data(session)
