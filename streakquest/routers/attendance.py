from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from streakquest.db import get_session
from streakquest.dependencies import get_current_user
from streakquest.models import User
from streakquest.schemas.attendance import (
    AttendanceRead,
    AttendanceStats,
    MarkAttendanceRequest,
    QRCheckinRequest,
)
from streakquest.services import attendance

router = APIRouter()


@router.post("/mark", response_model=AttendanceRead)
def mark(
    payload: MarkAttendanceRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return attendance.mark_attendance(session, current_user.id, payload.date, payload.is_present, payload.method)


@router.post("/qr-checkin", response_model=AttendanceRead)
def qr_checkin(
    payload: QRCheckinRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return attendance.qr_checkin(session, current_user.id, payload.code.strip())


@router.get("/stats", response_model=AttendanceStats)
def stats(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    return attendance.attendance_stats(session, current_user.id)


@router.get("/history", response_model=List[AttendanceRead])
def history(
    limit: int = Query(default=30, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return attendance.attendance_history(session, current_user.id, limit=limit)
