from fastapi import APIRouter, Depends
from sqlmodel import Session

from streakquest.db import get_session
from streakquest.dependencies import get_current_user, require_role
from streakquest.models import Role, User
from streakquest.routers.achievements import user_achievement_rows
from streakquest.schemas.auth import UserRead
from streakquest.schemas.dashboard import (
    ChildSummary,
    LowAttendanceStudent,
    ParentDashboard,
    StudentDashboard,
    TeacherDashboard,
)
from streakquest.services import dashboards

router = APIRouter()


@router.get("/student", response_model=StudentDashboard)
def student(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    data = dashboards.student_dashboard(session, current_user.id)
    data["achievements"] = user_achievement_rows(data["achievements"])
    return StudentDashboard.model_validate(data, from_attributes=True)


@router.get("/teacher", response_model=TeacherDashboard)
def teacher(
    current_user: User = Depends(require_role(Role.TEACHER)),
    session: Session = Depends(get_session),
):
    data = dashboards.teacher_dashboard(session, current_user.id)
    data["low_attendance_students"] = [
        LowAttendanceStudent(**UserRead.model_validate(student).model_dump(), attendance_rate=rate)
        for student, rate in data["low_attendance_students"]
    ]
    return TeacherDashboard.model_validate(data, from_attributes=True)


@router.get("/parent", response_model=ParentDashboard)
def parent(
    current_user: User = Depends(require_role(Role.PARENT)),
    session: Session = Depends(get_session),
):
    data = dashboards.parent_dashboard(session, current_user.id)
    children = []
    for entry in data["children"]:
        entry["achievements"] = user_achievement_rows(entry["achievements"])
        children.append(ChildSummary.model_validate(entry, from_attributes=True))
    return ParentDashboard(children=children)
