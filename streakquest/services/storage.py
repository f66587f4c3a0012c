"""Entity store operations: users, gamification rows, catalog and CRUD lookups.

Every function takes the caller's ``Session``; joins are done here so routers
never touch two tables at once.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from streakquest.errors import (
    GamificationNotFoundError,
    InvalidStateError,
    NotFoundError,
    UserExistsError,
)
from streakquest.models import (
    Achievement,
    Gamification,
    Homework,
    HomeworkSubmission,
    QRCode,
    Role,
    User,
    UserAchievement,
)
from streakquest.security import hash_password, verify_password
from streakquest.utils.clock import as_utc, utcnow

log = logging.getLogger(__name__)


# --- Users ---

def get_user(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def require_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email.lower().strip())).first()


def get_user_by_student_id(session: Session, student_id: str) -> Optional[User]:
    return session.exec(select(User).where(User.student_id == student_id)).first()


def _next_student_id(session: Session) -> str:
    count = session.exec(select(func.count()).select_from(User)).one()
    return f"STU{utcnow().year}{count + 1:03d}"


def create_user(session: Session, email: str, password: str, name: str, role: Role = Role.STUDENT) -> User:
    """Create a user; students also get a student id and a fresh gamification row."""
    email = email.lower().strip()
    if get_user_by_email(session, email):
        raise UserExistsError("User already exists")

    role = Role(role)
    user = User(
        email=email,
        name=name.strip(),
        role=role,
        password_hash=hash_password(password),
        student_id=_next_student_id(session) if role == Role.STUDENT else None,
    )
    session.add(user)
    session.flush()

    if role == Role.STUDENT:
        session.add(Gamification(user_id=user.id))

    session.commit()
    session.refresh(user)
    log.info("Created %s %s (id=%s)", role.value, email, user.id)
    return user


def authenticate_user(session: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(session, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def link_parent(session: Session, student_id: int, parent_id: int) -> User:
    """Attach a student to a parent account. This is the only way parent_id gets set."""
    student = require_user(session, student_id)
    parent = require_user(session, parent_id)
    if student.role != Role.STUDENT or parent.role != Role.PARENT:
        raise InvalidStateError("Parent links go from a student to a parent")
    student.parent_id = parent.id
    session.add(student)
    session.commit()
    session.refresh(student)
    return student


def list_students(session: Session) -> list[User]:
    return list(session.exec(select(User).where(User.role == Role.STUDENT).order_by(User.id)).all())


def list_children(session: Session, parent_id: int) -> list[User]:
    return list(session.exec(select(User).where(User.parent_id == parent_id).order_by(User.id)).all())


# --- Gamification ---

def get_gamification(session: Session, user_id: int) -> Optional[Gamification]:
    return session.exec(select(Gamification).where(Gamification.user_id == user_id)).first()


def update_gamification(session: Session, user_id: int, *, commit: bool = True, **fields) -> Gamification:
    gamification = get_gamification(session, user_id)
    if not gamification:
        raise GamificationNotFoundError("Gamification data not found")
    for key, value in fields.items():
        setattr(gamification, key, value)
    gamification.updated_at = utcnow()
    session.add(gamification)
    if commit:
        session.commit()
        session.refresh(gamification)
    return gamification


def get_leaderboard(session: Session, limit: int = 10) -> list[tuple[Gamification, User]]:
    rows = session.exec(
        select(Gamification, User)
        .join(User, User.id == Gamification.user_id)
        .order_by(Gamification.xp.desc(), Gamification.id)
        .limit(limit)
    ).all()
    return list(rows)


# --- Achievements ---

def get_achievements(session: Session) -> list[Achievement]:
    return list(session.exec(select(Achievement).order_by(Achievement.id)).all())


def get_user_achievements(session: Session, user_id: int) -> list[tuple[UserAchievement, Achievement]]:
    rows = session.exec(
        select(UserAchievement, Achievement)
        .join(Achievement, Achievement.id == UserAchievement.achievement_id)
        .where(UserAchievement.user_id == user_id)
        .order_by(UserAchievement.unlocked_at, UserAchievement.id)
    ).all()
    return list(rows)


# --- Homework ---

def create_homework(
    session: Session,
    title: str,
    subject: str,
    due_date: datetime,
    created_by: int,
    description: Optional[str] = None,
) -> Homework:
    homework = Homework(
        title=title.strip(),
        subject=subject.strip(),
        description=description,
        due_date=as_utc(due_date),
        created_by=created_by,
    )
    session.add(homework)
    session.commit()
    session.refresh(homework)
    return homework


def get_homework(session: Session, homework_id: int) -> Optional[Homework]:
    return session.get(Homework, homework_id)


def list_homework(session: Session) -> list[Homework]:
    return list(session.exec(select(Homework).order_by(Homework.due_date)).all())


def list_homework_by_teacher(session: Session, teacher_id: int) -> list[Homework]:
    return list(
        session.exec(select(Homework).where(Homework.created_by == teacher_id).order_by(Homework.due_date)).all()
    )


def get_homework_submissions(session: Session, homework_id: int) -> list[tuple[HomeworkSubmission, User]]:
    rows = session.exec(
        select(HomeworkSubmission, User)
        .join(User, User.id == HomeworkSubmission.user_id)
        .where(HomeworkSubmission.homework_id == homework_id)
        .order_by(HomeworkSubmission.submitted_at)
    ).all()
    return list(rows)


# --- QR codes ---

def create_qr_code(session: Session, code: str, expires_at: datetime, for_date: date, created_by: int) -> QRCode:
    qr = QRCode(
        code=code,
        expires_at=as_utc(expires_at),
        date=for_date,
        created_by=created_by,
        is_active=True,
    )
    session.add(qr)
    session.commit()
    session.refresh(qr)
    return qr


def get_qr_code(session: Session, code: str) -> Optional[QRCode]:
    """Look a code up whether or not it is still active; validity is the caller's check."""
    return session.exec(select(QRCode).where(QRCode.code == code)).first()
