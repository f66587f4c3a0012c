from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from streakquest.db import get_session
from streakquest.dependencies import get_current_user, require_role
from streakquest.models import Role, User
from streakquest.schemas.homework import HomeworkCreate, HomeworkRead, SubmissionRead, SubmissionWithUser
from streakquest.services import storage
from streakquest.services.homework import submit_homework

router = APIRouter()


@router.post("", response_model=HomeworkRead)
def create(
    payload: HomeworkCreate,
    current_user: User = Depends(require_role(Role.TEACHER)),
    session: Session = Depends(get_session),
):
    return storage.create_homework(
        session,
        title=payload.title,
        subject=payload.subject,
        due_date=payload.due_date,
        created_by=current_user.id,
        description=payload.description,
    )


@router.get("", response_model=List[HomeworkRead])
def list_all(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    return storage.list_homework(session)


@router.post("/{homework_id}/submit", response_model=SubmissionRead)
def submit(
    homework_id: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return submit_homework(session, homework_id, current_user.id)


@router.get("/{homework_id}/submissions", response_model=List[SubmissionWithUser])
def submissions(
    homework_id: int,
    current_user: User = Depends(require_role(Role.TEACHER)),
    session: Session = Depends(get_session),
):
    if not storage.get_homework(session, homework_id):
        raise HTTPException(status_code=404, detail="Homework not found")
    return [
        SubmissionWithUser.model_validate({**submission.model_dump(), "user": user}, from_attributes=True)
        for submission, user in storage.get_homework_submissions(session, homework_id)
    ]
