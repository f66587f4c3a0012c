from typing import Optional
import datetime as dt
from datetime import datetime
from sqlmodel import Field, SQLModel
from streakquest.utils.clock import as_utc, utcnow


class QRCode(SQLModel, table=True):
    __tablename__ = "qr_codes"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(unique=True, index=True)
    created_by: int = Field(foreign_key="users.id")
    expires_at: datetime
    is_active: bool = True
    date: dt.date
    created_at: datetime = Field(default_factory=utcnow)

    def is_valid_at(self, moment: datetime) -> bool:
        return self.is_active and as_utc(moment) <= as_utc(self.expires_at)
