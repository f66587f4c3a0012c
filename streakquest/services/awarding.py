from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session, select

from streakquest.models import (
    Achievement,
    AchievementType,
    Gamification,
    UserAchievement,
    XPLedger,
)
from streakquest.services.storage import get_gamification
from streakquest.utils.clock import utcnow

log = logging.getLogger(__name__)

XP_PER_LEVEL = 1000
ATTENDANCE_XP = 25
HOMEWORK_ON_TIME_XP = 100
HOMEWORK_LATE_XP = 50

DEFAULT_ACHIEVEMENTS = [
    dict(
        name="Perfect Week",
        description="Attend all days in a week",
        icon="trophy",
        xp_reward=500,
        type=AchievementType.ATTENDANCE,
        condition={"weeklyAttendance": 7},
    ),
    dict(
        name="Streak Master",
        description="10+ day attendance streak",
        icon="fire",
        xp_reward=1000,
        type=AchievementType.ATTENDANCE,
        condition={"streak": 10},
    ),
    dict(
        name="Study Champion",
        description="Complete 10 homework assignments on time",
        icon="book",
        xp_reward=750,
        type=AchievementType.HOMEWORK,
        condition={"onTimeHomework": 10},
    ),
]


def level_for_xp(xp: int) -> int:
    return xp // XP_PER_LEVEL + 1


def award_xp(
    session: Session,
    user_id: int,
    amount: int,
    reason: str,
    source: str,
    *,
    commit: bool = True,
) -> Optional[Gamification]:
    """
    Credit XP to a student, writing a ledger row and recomputing the level.
    Users without a gamification row (staff, parents) are skipped and None is returned.
    """
    if amount < 0:
        raise ValueError("XP awards must not be negative")

    gamification = get_gamification(session, user_id)
    if not gamification:
        log.debug("No gamification row for user %s, skipping %s XP", user_id, amount)
        return None
    if amount == 0:
        return gamification

    session.add(XPLedger(user_id=user_id, delta=amount, reason=reason, source=source))

    old_level = gamification.level
    gamification.xp += amount
    gamification.level = level_for_xp(gamification.xp)
    gamification.updated_at = utcnow()
    session.add(gamification)
    if gamification.level > old_level:
        log.info("User %s reached level %s", user_id, gamification.level)

    if commit:
        session.commit()
        session.refresh(gamification)
    return gamification


def xp_history(session: Session, user_id: int) -> list[XPLedger]:
    return list(
        session.exec(
            select(XPLedger).where(XPLedger.user_id == user_id).order_by(XPLedger.created_at.desc(), XPLedger.id.desc())
        ).all()
    )


def unlock_achievement(
    session: Session, user_id: int, achievement_id: int, *, commit: bool = True
) -> tuple[UserAchievement, bool]:
    """
    Idempotently record an unlock. Returns (user_achievement, created).
    The XP reward is the caller's job so an unlock can be recorded without one.
    """
    existing = session.exec(
        select(UserAchievement).where(
            UserAchievement.user_id == user_id,
            UserAchievement.achievement_id == achievement_id,
        )
    ).first()
    if existing:
        return existing, False

    unlock = UserAchievement(user_id=user_id, achievement_id=achievement_id)
    session.add(unlock)
    if commit:
        session.commit()
        session.refresh(unlock)
    else:
        session.flush()
    return unlock, True


def condition_met(achievement: Achievement, gamification: Gamification) -> bool:
    # Only streak predicates are evaluated. Weekly attendance and on-time
    # homework conditions exist in the catalog but never unlock.
    if achievement.type != AchievementType.ATTENDANCE:
        return False
    required = achievement.condition.get("streak")
    if not required:
        return False
    return gamification.streak >= required


def evaluate_achievements(session: Session, user_id: int, *, commit: bool = True) -> list[Achievement]:
    """Unlock every catalog achievement whose condition now holds. Returns the new unlocks."""
    gamification = get_gamification(session, user_id)
    if not gamification:
        return []

    unlocked_ids = set(
        session.exec(select(UserAchievement.achievement_id).where(UserAchievement.user_id == user_id)).all()
    )

    newly_unlocked = []
    for achievement in session.exec(select(Achievement).order_by(Achievement.id)).all():
        if achievement.id in unlocked_ids:
            continue
        if not condition_met(achievement, gamification):
            continue

        _, created = unlock_achievement(session, user_id, achievement.id, commit=False)
        if not created:
            continue
        award_xp(
            session,
            user_id,
            achievement.xp_reward,
            reason=f"Achievement: {achievement.name}",
            source="achievement",
            commit=False,
        )
        log.info("User %s unlocked %r", user_id, achievement.name)
        newly_unlocked.append(achievement)

    if commit:
        session.commit()
    return newly_unlocked


def seed_achievements(session: Session) -> int:
    """Install the default catalog entries that are missing. Returns how many were added."""
    existing = set(session.exec(select(Achievement.name)).all())
    added = 0
    for entry in DEFAULT_ACHIEVEMENTS:
        if entry["name"] in existing:
            continue
        session.add(Achievement(**entry))
        added += 1
    if added:
        session.commit()
    return added
