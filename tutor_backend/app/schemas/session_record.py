"""Session record schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionRecordCreate(BaseModel):
    student_id: int
    session_date: date
    # Derived from session_date when omitted
    month: Optional[str] = None
    sessions: int = Field(default=1, ge=0)
    hours: int = Field(ge=0)
    price_per_hour: Optional[int] = Field(default=None, ge=0)
    paid: bool = False
    notes: Optional[str] = None


class SessionRecordUpdate(BaseModel):
    session_date: Optional[date] = None
    month: Optional[str] = None
    sessions: Optional[int] = Field(default=None, ge=0)
    hours: Optional[int] = Field(default=None, ge=0)
    price_per_hour: Optional[int] = Field(default=None, ge=0)
    paid: Optional[bool] = None
    notes: Optional[str] = None


class SessionRecordRead(BaseModel):
    id: int
    student_id: int
    student_name: str
    session_date: date
    month: str
    sessions: int
    hours: int
    price_per_hour: int
    total_amount: int
    paid: bool
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
