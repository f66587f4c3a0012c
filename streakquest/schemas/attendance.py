import datetime as dt
from datetime import datetime
from typing import List, Optional
from streakquest.models import AttendanceMethod
from .base import CamelModel


class MarkAttendanceRequest(CamelModel):
    date: dt.date
    is_present: bool
    method: AttendanceMethod = AttendanceMethod.MANUAL


class QRCheckinRequest(CamelModel):
    code: str


class AttendanceRead(CamelModel):
    id: int
    user_id: int
    date: dt.date
    is_present: bool
    checked_in_at: Optional[datetime] = None
    method: AttendanceMethod
    created_at: datetime


class AttendanceStats(CamelModel):
    rate: int
    streak: int
    total_days: int


class AttendanceSummary(AttendanceStats):
    recent: List[AttendanceRead] = []
