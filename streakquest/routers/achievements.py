from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from streakquest.db import get_session
from streakquest.dependencies import get_current_user
from streakquest.models import User
from streakquest.schemas.gamification import AchievementRead, UserAchievementRead
from streakquest.services import storage

router = APIRouter()


def user_achievement_rows(rows) -> List[UserAchievementRead]:
    return [
        UserAchievementRead.model_validate({**unlock.model_dump(), "achievement": achievement}, from_attributes=True)
        for unlock, achievement in rows
    ]


@router.get("", response_model=List[AchievementRead])
def catalog(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    return storage.get_achievements(session)


@router.get("/user", response_model=List[UserAchievementRead])
def unlocked(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    return user_achievement_rows(storage.get_user_achievements(session, current_user.id))
