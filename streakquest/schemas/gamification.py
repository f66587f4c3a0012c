from datetime import datetime
from typing import Any, Dict, Optional
from streakquest.models import AchievementType
from .auth import UserRead
from .base import CamelModel


class GamificationRead(CamelModel):
    user_id: int
    xp: int
    level: int
    streak: int
    longest_streak: int
    total_days_attended: int
    updated_at: datetime


class LeaderboardEntry(GamificationRead):
    user: UserRead


class XPLedgerRead(CamelModel):
    id: int
    delta: int
    reason: Optional[str] = None
    source: str
    created_at: datetime


class AchievementRead(CamelModel):
    id: int
    name: str
    description: str
    icon: str
    xp_reward: int
    type: AchievementType
    condition: Dict[str, Any]


class UserAchievementRead(CamelModel):
    id: int
    user_id: int
    achievement_id: int
    unlocked_at: datetime
    achievement: AchievementRead
