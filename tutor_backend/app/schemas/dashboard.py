"""Dashboard schemas for paid/unpaid reporting."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_students: int
    total_paid_all_time: int
    total_unpaid_all_time: int
    current_month_paid: int
    current_month_unpaid: int


class MonthlyStats(BaseModel):
    month: str
    total_paid: int
    total_unpaid: int
    total_sessions: int
