from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel
from streakquest.utils.clock import utcnow


class Role(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str
    role: Role = Field(default=Role.STUDENT)
    password_hash: str
    student_id: Optional[str] = Field(default=None, unique=True)
    # Set only through an explicit parent link
    parent_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)

    def __repr__(self):
        return f"<User id={self.id} {self.email} role={self.role.value}>"
