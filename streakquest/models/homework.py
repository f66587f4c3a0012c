from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from streakquest.utils.clock import utcnow


class Homework(SQLModel, table=True):
    __tablename__ = "homework"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    subject: str
    due_date: datetime
    created_by: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)


class HomeworkSubmission(SQLModel, table=True):
    __tablename__ = "homework_submissions"

    id: Optional[int] = Field(default=None, primary_key=True)
    homework_id: int = Field(foreign_key="homework.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    submitted_at: datetime = Field(default_factory=utcnow)
    is_on_time: bool
    grade: Optional[float] = None
