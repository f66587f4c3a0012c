from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel
from sqlalchemy import JSON, Column, UniqueConstraint
from streakquest.utils.clock import utcnow


class AchievementType(str, Enum):
    ATTENDANCE = "attendance"
    HOMEWORK = "homework"
    PERFORMANCE = "performance"


class Achievement(SQLModel, table=True):
    __tablename__ = "achievements"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    description: str
    icon: str
    xp_reward: int = 0
    type: AchievementType
    # e.g. {"streak": 10}
    condition: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))


class UserAchievement(SQLModel, table=True):
    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    achievement_id: int = Field(foreign_key="achievements.id", index=True)
    unlocked_at: datetime = Field(default_factory=utcnow)
