from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from sqlalchemy import CheckConstraint
from streakquest.utils.clock import utcnow


class Gamification(SQLModel, table=True):
    __tablename__ = "gamification"
    __table_args__ = (
        CheckConstraint("xp >= 0", name="ck_gamification_xp_nonneg"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)
    xp: int = 0
    level: int = 1
    streak: int = 0
    longest_streak: int = 0
    total_days_attended: int = 0
    updated_at: datetime = Field(default_factory=utcnow)
