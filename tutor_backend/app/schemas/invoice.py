"""Invoice request and response schemas.

Invoices are computed on demand from session records and never stored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InvoiceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: Optional[int] = Field(default=None, alias="studentId")
    month: str
    session_record_ids: Optional[List[int]] = Field(default=None, alias="sessionRecordIds")
    all_students: bool = Field(default=False, alias="allStudents")
    multiple_students: bool = Field(default=False, alias="multipleStudents")
    selected_student_ids: Optional[List[int]] = Field(default=None, alias="selectedStudentIds")


class InvoiceItem(BaseModel):
    date: str
    description: str
    sessions: int
    hours: int
    price_per_hour: int
    amount: int


class BankInfo(BaseModel):
    bank_name: str
    bank_code: str
    account_number: str
    account_name: str


class InvoiceResponse(BaseModel):
    invoice_number: str
    student_name: str
    month: str
    total_sessions: int
    total_hours: int
    total_amount: int
    items: List[InvoiceItem]
    bank_info: BankInfo
    qr_code_url: str
    created_date: str
