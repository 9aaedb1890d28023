"""Paid/unpaid aggregates for the dashboard cards and the monthly table."""

from typing import List

from sqlalchemy.orm import Session

from tutor_backend.app.crud.crud_session_record import session_record_crud
from tutor_backend.app.crud.crud_student import student_crud
from tutor_backend.app.schemas.dashboard import DashboardStats, MonthlyStats
from tutor_backend.app.services.invoice_formatting import parse_month


def get_dashboard_stats(db: Session, current_month: str) -> DashboardStats:
    parse_month(current_month)
    return DashboardStats(
        total_students=student_crud.count(db),
        total_paid_all_time=session_record_crud.sum_paid(db),
        total_unpaid_all_time=session_record_crud.sum_unpaid(db),
        current_month_paid=session_record_crud.sum_paid_by_month(db, month=current_month),
        current_month_unpaid=session_record_crud.sum_unpaid_by_month(db, month=current_month),
    )


def get_monthly_stats(db: Session) -> List[MonthlyStats]:
    rows: List[MonthlyStats] = []
    for month in session_record_crud.distinct_months(db):
        rows.append(
            MonthlyStats(
                month=month,
                total_paid=session_record_crud.sum_paid_by_month(db, month=month),
                total_unpaid=session_record_crud.sum_unpaid_by_month(db, month=month),
                total_sessions=session_record_crud.sum_sessions_by_month(db, month=month),
            )
        )
    return rows
