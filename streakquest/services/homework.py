from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Session

from streakquest.errors import NotFoundError
from streakquest.models import HomeworkSubmission
from streakquest.services.awarding import HOMEWORK_LATE_XP, HOMEWORK_ON_TIME_XP, award_xp
from streakquest.services.storage import get_homework
from streakquest.utils.clock import as_utc, utcnow


def submit_homework(
    session: Session, homework_id: int, user_id: int, *, now: Optional[datetime] = None
) -> HomeworkSubmission:
    """Record a submission and credit on-time or late XP. Resubmissions are accepted and rewarded again."""
    homework = get_homework(session, homework_id)
    if not homework:
        raise NotFoundError(f"Homework {homework_id} not found")

    now = as_utc(now) if now else utcnow()
    is_on_time = now <= as_utc(homework.due_date)
    submission = HomeworkSubmission(
        homework_id=homework.id,
        user_id=user_id,
        submitted_at=now,
        is_on_time=is_on_time,
        grade=None,
    )
    session.add(submission)

    award_xp(
        session,
        user_id,
        HOMEWORK_ON_TIME_XP if is_on_time else HOMEWORK_LATE_XP,
        reason=f"Homework: {homework.title}",
        source="homework",
        commit=False,
    )

    session.commit()
    session.refresh(submission)
    return submission
