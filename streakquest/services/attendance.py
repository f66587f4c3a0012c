from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from sqlmodel import Session, select

from streakquest.errors import InvalidQRCodeError, QRCodeNotFoundError
from streakquest.models import Attendance, AttendanceMethod, Gamification
from streakquest.services.awarding import ATTENDANCE_XP, award_xp, evaluate_achievements
from streakquest.services.storage import get_gamification, get_qr_code, require_user
from streakquest.utils.clock import as_utc, utc_today, utcnow
from streakquest.utils.rounding import round_half_up

log = logging.getLogger(__name__)

# Achievements are only re-checked when the streak lands on a multiple of this
STREAK_MILESTONE = 10


def current_streak(present_dates: list[date], today: date) -> int:
    """
    Count consecutive days ending today. Dates are walked newest first and the
    i-th must be exactly ``today - i``; the first mismatch ends the streak.
    """
    streak = 0
    for day in sorted(present_dates, reverse=True):
        if (today - day).days == streak:
            streak += 1
        else:
            break
    return streak


def refresh_streak(
    session: Session, user_id: int, today: Optional[date] = None, *, commit: bool = True
) -> Optional[Gamification]:
    """Recompute streak, longest streak and total days attended from the attendance history."""
    gamification = get_gamification(session, user_id)
    if not gamification:
        return None

    today = today or utc_today()
    present_dates = list(
        session.exec(
            select(Attendance.date).where(Attendance.user_id == user_id, Attendance.is_present == True)  # noqa: E712
        ).all()
    )
    streak = current_streak(present_dates, today)

    gamification.streak = streak
    gamification.longest_streak = max(gamification.longest_streak, streak)
    gamification.total_days_attended = len(present_dates)
    gamification.updated_at = utcnow()
    session.add(gamification)

    if streak >= STREAK_MILESTONE and streak % STREAK_MILESTONE == 0:
        evaluate_achievements(session, user_id, commit=False)

    if commit:
        session.commit()
        session.refresh(gamification)
    return gamification


def mark_attendance(
    session: Session,
    user_id: int,
    on: date,
    is_present: bool,
    method: AttendanceMethod = AttendanceMethod.MANUAL,
    *,
    now: Optional[datetime] = None,
    today: Optional[date] = None,
) -> Attendance:
    """
    Store an attendance mark. Present marks refresh the streak (which may unlock
    achievements) and then credit the attendance XP.
    """
    require_user(session, user_id)
    now = as_utc(now) if now else utcnow()

    record = Attendance(
        user_id=user_id,
        date=on,
        is_present=is_present,
        method=AttendanceMethod(method or AttendanceMethod.MANUAL),
        checked_in_at=now if is_present else None,
        created_at=now,
    )
    session.add(record)
    session.flush()

    if is_present:
        refresh_streak(session, user_id, today or now.date(), commit=False)
        award_xp(session, user_id, ATTENDANCE_XP, reason=f"Attendance {on.isoformat()}", source="attendance", commit=False)

    session.commit()
    session.refresh(record)
    return record


def qr_checkin(session: Session, user_id: int, code: str, *, now: Optional[datetime] = None) -> Attendance:
    now = as_utc(now) if now else utcnow()
    qr = get_qr_code(session, code)
    if not qr:
        log.warning("User %s tried unknown QR code %r", user_id, code)
        raise QRCodeNotFoundError("Invalid or expired QR code")
    if not qr.is_valid_at(now):
        log.warning("User %s tried %s QR code %r", user_id, "expired" if qr.is_active else "inactive", code)
        raise InvalidQRCodeError("Invalid or expired QR code")

    return mark_attendance(session, user_id, qr.date, True, AttendanceMethod.QR, now=now)


def attendance_history(session: Session, user_id: int, limit: Optional[int] = None) -> list[Attendance]:
    query = (
        select(Attendance)
        .where(Attendance.user_id == user_id)
        .order_by(Attendance.date.desc(), Attendance.id.desc())
    )
    if limit:
        query = query.limit(limit)
    return list(session.exec(query).all())


def attendance_on(session: Session, on: date) -> list[Attendance]:
    return list(session.exec(select(Attendance).where(Attendance.date == on).order_by(Attendance.id)).all())


def attendance_stats(session: Session, user_id: int) -> dict:
    records = attendance_history(session, user_id)
    total = len(records)
    present = sum(1 for r in records if r.is_present)

    rate = round_half_up(present * 100 / total) if total else 0
    gamification = get_gamification(session, user_id)
    return {
        "rate": rate,
        "streak": gamification.streak if gamification else 0,
        "total_days": present,
    }
