"""Student endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tutor_backend.app.core.exceptions import StudentNotFoundError
from tutor_backend.app.core.security import get_current_user
from tutor_backend.app.crud.crud_student import student_crud
from tutor_backend.app.db.session import get_db
from tutor_backend.app.models.student import Student
from tutor_backend.app.models.user import User
from tutor_backend.app.schemas.student import StudentCreate, StudentRead, StudentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"])


def _get_student(db: Session, student_id: int) -> Student:
    student = student_crud.get(db, student_id=student_id)
    if not student:
        raise StudentNotFoundError()
    return student


def _attach_payment_totals(db: Session, students: list[Student]) -> list[Student]:
    totals = student_crud.payment_totals(db, student_ids=[s.id for s in students])
    for student in students:
        entry = totals.get(student.id, {})
        student.total_paid = entry.get("total_paid", 0)
        student.total_unpaid = entry.get("total_unpaid", 0)
    return students


@router.get("/", response_model=list[StudentRead])
async def list_students(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _attach_payment_totals(db, student_crud.get_multi(db))


@router.get("/{student_id}", response_model=StudentRead)
async def get_student(student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    student = _get_student(db, student_id)
    return _attach_payment_totals(db, [student])[0]


@router.post("/", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_in: StudentCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    student = student_crud.create(db, obj_in=student_in)
    logger.info("Created student %s", student.id)
    return _attach_payment_totals(db, [student])[0]


@router.put("/{student_id}", response_model=StudentRead)
async def update_student(
    student_id: int,
    student_in: StudentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    student = student_crud.update(db, db_obj=_get_student(db, student_id), obj_in=student_in)
    return _attach_payment_totals(db, [student])[0]


@router.delete("/{student_id}")
async def delete_student(student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    student_crud.delete(db, db_obj=_get_student(db, student_id))
    logger.info("Deleted student %s and their session records", student_id)
    return {"status": "deleted", "id": student_id}
