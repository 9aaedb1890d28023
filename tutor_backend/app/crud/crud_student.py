"""CRUD operations for students."""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from tutor_backend.app.models.session_record import SessionRecord
from tutor_backend.app.models.student import Student
from tutor_backend.app.schemas.student import StudentCreate, StudentUpdate


class CRUDStudent:
    def create(self, db: Session, *, obj_in: StudentCreate) -> Student:
        obj = Student(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, student_id: int) -> Optional[Student]:
        return db.query(Student).filter(Student.id == student_id).first()

    def get_multi(self, db: Session) -> List[Student]:
        return db.query(Student).order_by(Student.created_at.desc(), Student.id.desc()).all()

    def get_by_ids(self, db: Session, *, student_ids: Iterable[int]) -> List[Student]:
        ids = list(student_ids)
        if not ids:
            return []
        return db.query(Student).filter(Student.id.in_(ids)).all()

    def count(self, db: Session) -> int:
        return db.query(Student).count()

    def update(self, db: Session, *, db_obj: Student, obj_in: StudentUpdate) -> Student:
        update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Student) -> Student:
        db.delete(db_obj)
        db.commit()
        return db_obj

    def payment_totals(self, db: Session, *, student_ids: Iterable[int]) -> Dict[int, Dict[str, int]]:
        """Return ``{student_id: {"total_paid": .., "total_unpaid": ..}}`` for the given students."""
        ids = list(student_ids)
        if not ids:
            return {}
        paid_sum = func.coalesce(func.sum(case((SessionRecord.paid.is_(True), SessionRecord.total_amount), else_=0)), 0)
        unpaid_sum = func.coalesce(func.sum(case((SessionRecord.paid.is_(False), SessionRecord.total_amount), else_=0)), 0)
        rows = (
            db.query(SessionRecord.student_id, paid_sum.label("total_paid"), unpaid_sum.label("total_unpaid"))
            .filter(SessionRecord.student_id.in_(ids))
            .group_by(SessionRecord.student_id)
            .all()
        )
        return {
            row.student_id: {"total_paid": int(row.total_paid), "total_unpaid": int(row.total_unpaid)}
            for row in rows
        }


student_crud = CRUDStudent()
