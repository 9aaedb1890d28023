"""Dashboard statistics endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tutor_backend.app.core.security import get_current_user
from tutor_backend.app.db.session import get_db
from tutor_backend.app.models.user import User
from tutor_backend.app.schemas.dashboard import DashboardStats, MonthlyStats
from tutor_backend.app.services.dashboard_service import get_dashboard_stats, get_monthly_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    current_month: str = Query(alias="currentMonth"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_dashboard_stats(db, current_month)


@router.get("/monthly-stats", response_model=list[MonthlyStats])
async def monthly_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_monthly_stats(db)
