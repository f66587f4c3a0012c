from fastapi import APIRouter, Depends
from sqlmodel import Session

from streakquest.config import Settings
from streakquest.db import get_session
from streakquest.dependencies import get_settings, require_role
from streakquest.models import Role, User
from streakquest.schemas.qr import QRCodeRead, QRGenerateRequest
from streakquest.services.qr_codes import issue_qr_code, render_data_url

router = APIRouter()


@router.post("/generate", response_model=QRCodeRead)
def generate(
    payload: QRGenerateRequest,
    current_user: User = Depends(require_role(Role.TEACHER)),
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
):
    minutes = payload.expiration_minutes or settings.QR_DEFAULT_EXPIRATION_MINUTES
    qr = issue_qr_code(session, current_user.id, payload.date, minutes)
    return QRCodeRead.model_validate({**qr.model_dump(), "data_url": render_data_url(qr.code)})
