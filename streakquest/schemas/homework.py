from datetime import datetime
from typing import Optional
from pydantic import Field
from .auth import UserRead
from .base import CamelModel


class HomeworkCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    subject: str = Field(min_length=1)
    due_date: datetime


class HomeworkRead(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    subject: str
    due_date: datetime
    created_by: int
    created_at: datetime


class SubmissionRead(CamelModel):
    id: int
    homework_id: int
    user_id: int
    submitted_at: datetime
    is_on_time: bool
    grade: Optional[float] = None


class SubmissionWithUser(SubmissionRead):
    user: UserRead
