from datetime import datetime
from typing import Optional
from pydantic import Field
from streakquest.models import Role
from .base import CamelModel


class SignupRequest(CamelModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Role = Role.STUDENT


class LoginRequest(CamelModel):
    email: str
    password: str


class UserRead(CamelModel):
    id: int
    email: str
    name: str
    role: Role
    student_id: Optional[str] = None
    parent_id: Optional[int] = None
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserRead
    token: str
