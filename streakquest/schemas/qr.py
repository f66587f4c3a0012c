import datetime as dt
from datetime import datetime
from typing import Optional
from pydantic import Field
from .base import CamelModel


class QRGenerateRequest(CamelModel):
    date: dt.date
    expiration_minutes: Optional[int] = Field(default=None, gt=0)


class QRCodeRead(CamelModel):
    id: int
    code: str
    created_by: int
    expires_at: datetime
    is_active: bool
    date: dt.date
    created_at: datetime
    data_url: str
