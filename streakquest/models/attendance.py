from typing import Optional
import datetime as dt
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel
from streakquest.utils.clock import utcnow


class AttendanceMethod(str, Enum):
    MANUAL = "manual"
    QR = "qr"
    TEACHER_OVERRIDE = "teacher_override"


class Attendance(SQLModel, table=True):
    """One attendance mark. Several marks for the same day are allowed."""
    __tablename__ = "attendance"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    date: dt.date = Field(index=True)
    is_present: bool = False
    checked_in_at: Optional[datetime] = None
    method: AttendanceMethod = Field(default=AttendanceMethod.MANUAL)
    created_at: datetime = Field(default_factory=utcnow)

    def __repr__(self):
        return f"<Attendance id={self.id} user_id={self.user_id} date={self.date} present={self.is_present}>"
