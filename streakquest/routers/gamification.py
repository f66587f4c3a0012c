from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from streakquest.config import Settings
from streakquest.db import get_session
from streakquest.dependencies import get_current_user, get_settings
from streakquest.models import User
from streakquest.schemas.gamification import LeaderboardEntry, XPLedgerRead
from streakquest.services import storage
from streakquest.services.awarding import xp_history

router = APIRouter()


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def leaderboard(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
):
    rows = storage.get_leaderboard(session, limit or settings.LEADERBOARD_SIZE)
    return [
        LeaderboardEntry.model_validate({**gamification.model_dump(), "user": user}, from_attributes=True)
        for gamification, user in rows
    ]


@router.get("/xp-history", response_model=List[XPLedgerRead])
def history(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    return xp_history(session, current_user.id)
