"""CRUD and aggregate queries for session records.

Aggregates return 0 (and lookups ``None`` or ``[]``) when nothing matches;
absence is never an error at this layer.
"""

from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from tutor_backend.app.models.session_record import SessionRecord


class CRUDSessionRecord:
    def create(self, db: Session, *, obj: SessionRecord) -> SessionRecord:
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, record_id: int) -> Optional[SessionRecord]:
        return db.query(SessionRecord).filter(SessionRecord.id == record_id).first()

    def get_multi(self, db: Session) -> List[SessionRecord]:
        return (
            db.query(SessionRecord)
            .options(joinedload(SessionRecord.student))
            .order_by(SessionRecord.session_date.desc(), SessionRecord.created_at.desc())
            .all()
        )

    def get_by_ids(self, db: Session, *, record_ids: Iterable[int]) -> List[SessionRecord]:
        ids = list(record_ids)
        if not ids:
            return []
        return db.query(SessionRecord).filter(SessionRecord.id.in_(ids)).all()

    def get_by_student(self, db: Session, *, student_id: int) -> List[SessionRecord]:
        return (
            db.query(SessionRecord)
            .filter(SessionRecord.student_id == student_id)
            .order_by(SessionRecord.created_at.desc())
            .all()
        )

    def get_by_month(
        self, db: Session, *, month: str, student_ids: Optional[Iterable[int]] = None
    ) -> List[SessionRecord]:
        query = (
            db.query(SessionRecord)
            .options(joinedload(SessionRecord.student))
            .filter(SessionRecord.month == month)
        )
        if student_ids is not None:
            query = query.filter(SessionRecord.student_id.in_(list(student_ids)))
        return query.order_by(SessionRecord.session_date.desc(), SessionRecord.created_at.desc()).all()

    def count(self, db: Session) -> int:
        return db.query(SessionRecord).count()

    def update(self, db: Session, *, db_obj: SessionRecord) -> SessionRecord:
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: SessionRecord) -> SessionRecord:
        db.delete(db_obj)
        db.commit()
        return db_obj

    def _sum_amount(self, db: Session, *, paid: bool, month: Optional[str] = None) -> int:
        query = db.query(func.coalesce(func.sum(SessionRecord.total_amount), 0)).filter(
            SessionRecord.paid.is_(paid)
        )
        if month is not None:
            query = query.filter(SessionRecord.month == month)
        return int(query.scalar() or 0)

    def sum_paid(self, db: Session) -> int:
        return self._sum_amount(db, paid=True)

    def sum_unpaid(self, db: Session) -> int:
        return self._sum_amount(db, paid=False)

    def sum_paid_by_month(self, db: Session, *, month: str) -> int:
        return self._sum_amount(db, paid=True, month=month)

    def sum_unpaid_by_month(self, db: Session, *, month: str) -> int:
        return self._sum_amount(db, paid=False, month=month)

    def sum_sessions_by_month(self, db: Session, *, month: str) -> int:
        total = (
            db.query(func.coalesce(func.sum(SessionRecord.sessions), 0))
            .filter(SessionRecord.month == month)
            .scalar()
        )
        return int(total or 0)

    def distinct_months(self, db: Session) -> List[str]:
        rows = db.query(SessionRecord.month).distinct().order_by(SessionRecord.month.desc()).all()
        return [row.month for row in rows]


session_record_crud = CRUDSessionRecord()
