from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from streakquest.config import Settings
from streakquest.db import get_session
from streakquest.dependencies import get_current_user, get_settings
from streakquest.models import User
from streakquest.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserRead
from streakquest.security import create_access_token
from streakquest.services import storage

router = APIRouter()


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    token = create_access_token({"sub": str(user.id), "email": user.email, "role": user.role.value}, settings)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/signup", response_model=AuthResponse)
def signup(
    payload: SignupRequest,
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
):
    user = storage.create_user(session, payload.email, payload.password, payload.name, payload.role)
    return _auth_response(user, settings)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
):
    user = storage.authenticate_user(session, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return _auth_response(user, settings)


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
