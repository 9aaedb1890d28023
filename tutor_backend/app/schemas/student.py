"""Student schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentBase(BaseModel):
    name: str = Field(min_length=1)
    phone: Optional[str] = None
    schedule: Optional[str] = None
    price_per_hour: int = Field(ge=0)
    notes: Optional[str] = None


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    schedule: Optional[str] = None
    price_per_hour: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class StudentRead(StudentBase):
    id: int
    created_at: datetime
    total_paid: int = 0
    total_unpaid: int = 0

    model_config = ConfigDict(from_attributes=True)
