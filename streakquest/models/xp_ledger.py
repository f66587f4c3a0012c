from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from sqlalchemy import CheckConstraint
from streakquest.utils.clock import utcnow


class XPLedger(SQLModel, table=True):
    __tablename__ = "xp_ledger"
    __table_args__ = (
        CheckConstraint("delta > 0", name="ck_xp_ledger_delta_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    delta: int
    reason: Optional[str] = None
    source: str = "attendance"  # attendance|achievement|homework
    created_at: datetime = Field(default_factory=utcnow, index=True)
