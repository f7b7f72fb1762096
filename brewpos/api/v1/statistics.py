"""
Statistics routes
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...core.security import require_admin, require_staff
from ...core.session import Session
from ...models.statistics import DailyStatistic
from ...schemas.statistics import DashboardResponse
from ...services.statistics_service import StatisticsService
from ..deps import get_statistics_service

router = APIRouter()


@router.get("/daily", response_model=DailyStatistic)
def daily_statistic(stat_date: Optional[date] = Query(None, description="Defaults to today"),
                    session: Session = Depends(require_staff),
                    statistics: StatisticsService = Depends(get_statistics_service)):
    return statistics.get_daily_statistic(stat_date)


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(session: Session = Depends(require_admin),
              statistics: StatisticsService = Depends(get_statistics_service)):
    return statistics.dashboard_summary()
