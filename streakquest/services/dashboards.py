from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Session

from streakquest.services.attendance import attendance_history, attendance_on, attendance_stats
from streakquest.services.storage import (
    get_gamification,
    get_user_achievements,
    list_children,
    list_homework_by_teacher,
    list_students,
    require_user,
)
from streakquest.utils.clock import utc_today
from streakquest.utils.rounding import round_half_up

LOW_ATTENDANCE_RATE = 70


def student_dashboard(session: Session, user_id: int) -> dict:
    user = require_user(session, user_id)
    stats = attendance_stats(session, user_id)
    return {
        "user": user,
        "gamification": get_gamification(session, user_id),
        "attendance": {**stats, "recent": attendance_history(session, user_id, limit=30)},
        "achievements": get_user_achievements(session, user_id),
    }


def teacher_dashboard(session: Session, teacher_id: int, today: Optional[date] = None) -> dict:
    students = list_students(session)
    today = today or utc_today()
    present_today = sum(1 for record in attendance_on(session, today) if record.is_present)

    rates = []
    low_attendance = []
    for student in students:
        rate = attendance_stats(session, student.id)["rate"]
        rates.append(rate)
        if rate < LOW_ATTENDANCE_RATE:
            low_attendance.append((student, rate))

    return {
        "total_students": len(students),
        "present_today": present_today,
        "low_attendance_students": low_attendance,
        "avg_attendance": round_half_up(sum(rates) / len(rates)) if rates else 0,
        "homework": list_homework_by_teacher(session, teacher_id),
    }


def parent_dashboard(session: Session, parent_id: int) -> dict:
    children = []
    for child in list_children(session, parent_id):
        children.append(
            {
                "child": child,
                "gamification": get_gamification(session, child.id),
                "attendance": attendance_stats(session, child.id),
                "achievements": get_user_achievements(session, child.id),
            }
        )
    return {"children": children}
