"""Invoice generation from session records.

Three selection modes are supported, checked in this order:

* selected students (``multiple_students`` with ``selected_student_ids``):
  every record of those students in the month, one line per student;
* all students (``all_students``): every record in the month, one line per
  student;
* a single student: the explicit ``session_record_ids`` if given, otherwise
  the student's unpaid records for the month, one line per record.

Invoices are built fresh on each call and never persisted.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from tutor_backend.app.core.exceptions import EmptySelectionError, MalformedInputError, StudentNotFoundError
from tutor_backend.app.core.settings import get_settings
from tutor_backend.app.core.time import today_utc
from tutor_backend.app.crud.crud_session_record import session_record_crud
from tutor_backend.app.crud.crud_student import student_crud
from tutor_backend.app.models.session_record import SessionRecord
from tutor_backend.app.models.student import Student
from tutor_backend.app.schemas.invoice import BankInfo, InvoiceItem, InvoiceRequest, InvoiceResponse
from tutor_backend.app.services.invoice_formatting import (
    build_invoice_number,
    build_vietqr_url,
    format_date,
    format_month,
    parse_month,
)

logger = logging.getLogger(__name__)

ALL_STUDENTS_LABEL = "TẤT CẢ HỌC SINH"
SESSION_DESCRIPTION = "Buổi học tiếng Anh"
MONTHLY_FEE_SUFFIX = " - Học phí tháng"


def get_bank_info() -> BankInfo:
    settings = get_settings()
    return BankInfo(
        bank_name=settings.bank_name,
        bank_code=settings.bank_code,
        account_number=settings.bank_account_number,
        account_name=settings.bank_account_name,
    )


def generate_invoice(db: Session, request: InvoiceRequest, today: Optional[date] = None) -> InvoiceResponse:
    parse_month(request.month)
    today = today or today_utc()

    if request.multiple_students and request.selected_student_ids:
        return _invoice_for_selected_students(db, request.month, request.selected_student_ids, today)
    if request.all_students:
        return _invoice_for_all_students(db, request.month, today)
    return _invoice_for_student(db, request, today)


def _invoice_for_student(db: Session, request: InvoiceRequest, today: date) -> InvoiceResponse:
    if request.student_id is None:
        raise MalformedInputError("student_id is required for a single-student invoice")
    student = student_crud.get(db, student_id=request.student_id)
    if student is None:
        raise StudentNotFoundError()

    if request.session_record_ids:
        records = session_record_crud.get_by_ids(db, record_ids=request.session_record_ids)
    else:
        records = [
            record
            for record in session_record_crud.get_by_student(db, student_id=student.id)
            if record.month == request.month and not record.paid
        ]
    if not records:
        raise EmptySelectionError("No sessions found for invoice")

    items = [
        InvoiceItem(
            date=format_date(record.session_date),
            description=SESSION_DESCRIPTION,
            sessions=record.sessions,
            hours=record.hours,
            price_per_hour=record.price_per_hour,
            amount=record.total_amount,
        )
        for record in sorted(records, key=lambda r: r.session_date)
    ]
    invoice_number = build_invoice_number(request.month, session_record_crud.count(db) + 1)
    return _build_response(records, items, invoice_number, student.name, request.month, today)


def _invoice_for_selected_students(
    db: Session, month: str, student_ids: List[int], today: date
) -> InvoiceResponse:
    wanted = set(student_ids)
    found = {student.id for student in student_crud.get_by_ids(db, student_ids=wanted)}
    missing = sorted(wanted - found)
    if missing:
        raise StudentNotFoundError(f"Student not found: {', '.join(str(i) for i in missing)}")

    records = session_record_crud.get_by_month(db, month=month, student_ids=wanted)
    if not records:
        raise EmptySelectionError("No sessions found for selected students")

    items, names = _items_per_student(records, month)
    names.sort()
    if len(names) <= 2:
        display_name = " và ".join(names)
    else:
        display_name = f"{names[0]} và {len(names) - 1} học sinh khác"

    invoice_number = build_invoice_number(month, session_record_crud.count(db) + 1, suffix="-MULTI")
    return _build_response(records, items, invoice_number, display_name, month, today)


def _invoice_for_all_students(db: Session, month: str, today: date) -> InvoiceResponse:
    records = session_record_crud.get_by_month(db, month=month)
    if not records:
        raise EmptySelectionError("No sessions found for this month")

    items, _ = _items_per_student(records, month)
    invoice_number = build_invoice_number(month, session_record_crud.count(db) + 1, suffix="-ALL")
    return _build_response(records, items, invoice_number, ALL_STUDENTS_LABEL, month, today)


def _items_per_student(records: List[SessionRecord], month: str) -> tuple[List[InvoiceItem], List[str]]:
    """Collapse records into one line per student id, ordered by description."""
    grouped: Dict[int, List[SessionRecord]] = defaultdict(list)
    for record in records:
        grouped[record.student_id].append(record)

    month_label = format_month(month)
    items: List[InvoiceItem] = []
    names: List[str] = []
    for student_records in grouped.values():
        first = student_records[0]
        student: Student = first.student
        names.append(student.name)
        items.append(
            InvoiceItem(
                date=month_label,
                description=f"{student.name}{MONTHLY_FEE_SUFFIX}",
                sessions=sum(r.sessions for r in student_records),
                hours=sum(r.hours for r in student_records),
                price_per_hour=first.price_per_hour,
                amount=sum(r.total_amount for r in student_records),
            )
        )
    items.sort(key=lambda item: item.description)
    return items, names


def _build_response(
    records: List[SessionRecord],
    items: List[InvoiceItem],
    invoice_number: str,
    student_name: str,
    month: str,
    today: date,
) -> InvoiceResponse:
    total_amount = sum(r.total_amount for r in records)
    logger.info("Generated invoice %s with %d item(s), total %d", invoice_number, len(items), total_amount)
    return InvoiceResponse(
        invoice_number=invoice_number,
        student_name=student_name,
        month=format_month(month),
        total_sessions=sum(r.sessions for r in records),
        total_hours=sum(r.hours for r in records),
        total_amount=total_amount,
        items=items,
        bank_info=get_bank_info(),
        qr_code_url=build_vietqr_url(total_amount, invoice_number),
        created_date=format_date(today),
    )
