"""Issuing check-in codes and rendering them as PNG data URLs."""
from __future__ import annotations

import base64
import io
import logging
import secrets
import string
from datetime import date, datetime, timedelta
from typing import Optional

import qrcode
from sqlmodel import Session

from streakquest.models import QRCode
from streakquest.services.storage import create_qr_code
from streakquest.utils.clock import as_utc, utcnow

log = logging.getLogger(__name__)

_ALPHABET = string.ascii_lowercase + string.digits

QR_SETTINGS = {
    "version": 1,
    "error_correction": qrcode.constants.ERROR_CORRECT_M,
    "box_size": 10,
    "border": 4,
}


def new_code(now: datetime) -> str:
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"attendance_{int(now.timestamp() * 1000)}_{suffix}"


def issue_qr_code(
    session: Session,
    created_by: int,
    for_date: date,
    expiration_minutes: int = 30,
    *,
    now: Optional[datetime] = None,
) -> QRCode:
    now = as_utc(now) if now else utcnow()
    qr = create_qr_code(
        session,
        code=new_code(now),
        expires_at=now + timedelta(minutes=expiration_minutes),
        for_date=for_date,
        created_by=created_by,
    )
    log.info("User %s issued QR code for %s, valid until %s", created_by, for_date, qr.expires_at)
    return qr


def render_data_url(code: str) -> str:
    """Render ``code`` as a base64 PNG data URL."""
    qr = qrcode.QRCode(**QR_SETTINGS)
    qr.add_data(code)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
