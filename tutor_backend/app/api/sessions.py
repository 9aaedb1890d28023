"""Session record endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tutor_backend.app.core.exceptions import SessionRecordNotFoundError, StudentNotFoundError
from tutor_backend.app.core.security import get_current_user
from tutor_backend.app.crud.crud_session_record import session_record_crud
from tutor_backend.app.crud.crud_student import student_crud
from tutor_backend.app.db.session import get_db
from tutor_backend.app.models.session_record import SessionRecord
from tutor_backend.app.models.user import User
from tutor_backend.app.schemas.session_record import SessionRecordCreate, SessionRecordRead, SessionRecordUpdate
from tutor_backend.app.services.billing import refresh_total_amount, resolve_month
from tutor_backend.app.services.invoice_formatting import parse_month

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_record(db: Session, record_id: int) -> SessionRecord:
    record = session_record_crud.get(db, record_id=record_id)
    if not record:
        raise SessionRecordNotFoundError()
    return record


def _serialize_record(record: SessionRecord) -> dict:
    return {
        "id": record.id,
        "student_id": record.student_id,
        "student_name": record.student.name,
        "session_date": record.session_date,
        "month": record.month,
        "sessions": record.sessions,
        "hours": record.hours,
        "price_per_hour": record.price_per_hour,
        "total_amount": record.total_amount,
        "paid": record.paid,
        "notes": record.notes,
        "created_at": record.created_at,
    }


@router.get("/", response_model=list[SessionRecordRead])
async def list_sessions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return [_serialize_record(r) for r in session_record_crud.get_multi(db)]


@router.get("/months", response_model=list[str])
async def list_months(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return session_record_crud.distinct_months(db)


@router.get("/month/{month}", response_model=list[SessionRecordRead])
async def list_sessions_for_month(
    month: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    parse_month(month)
    return [_serialize_record(r) for r in session_record_crud.get_by_month(db, month=month)]


@router.post("/", response_model=SessionRecordRead, status_code=status.HTTP_201_CREATED)
async def create_session(
    record_in: SessionRecordCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    student = student_crud.get(db, student_id=record_in.student_id)
    if not student:
        raise StudentNotFoundError()
    record = SessionRecord(
        student_id=student.id,
        session_date=record_in.session_date,
        month=resolve_month(record_in.session_date, record_in.month),
        sessions=record_in.sessions,
        hours=record_in.hours,
        price_per_hour=record_in.price_per_hour if record_in.price_per_hour is not None else student.price_per_hour,
        paid=record_in.paid,
        notes=record_in.notes,
    )
    refresh_total_amount(record)
    record = session_record_crud.create(db, obj=record)
    logger.info("Created session record %s for student %s", record.id, student.id)
    return _serialize_record(record)


@router.put("/{record_id}", response_model=SessionRecordRead)
async def update_session(
    record_id: int,
    record_in: SessionRecordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record = _get_record(db, record_id)
    update_data = record_in.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(record, field, value)
    if "session_date" in update_data or "month" in update_data:
        record.month = resolve_month(record.session_date, update_data.get("month"))
    refresh_total_amount(record)
    return _serialize_record(session_record_crud.update(db, db_obj=record))


@router.put("/{record_id}/toggle-payment", response_model=SessionRecordRead)
async def toggle_payment(record_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    record = _get_record(db, record_id)
    record.paid = not record.paid
    return _serialize_record(session_record_crud.update(db, db_obj=record))


@router.delete("/{record_id}")
async def delete_session(record_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    session_record_crud.delete(db, db_obj=_get_record(db, record_id))
    return {"status": "deleted", "id": record_id}
