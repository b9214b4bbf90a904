"""Analytics routes for admin dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms_api.admin.schemas.admin_analytics import (
    AnalyticsResponse,
    DashboardStatsResponse,
    RevenueStatisticsResponse,
)
from lms_api.admin.services.analytics_service import AnalyticsService
from lms_api.auth.dependencies import require_admin, require_analytics_admin
from lms_api.auth.models.profile import Profile
from lms_api.db.session import get_db

router = APIRouter(tags=["admin-analytics"])


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_analytics_admin),
) -> AnalyticsResponse:
    """
    Get the full analytics dashboard, recomputed on every call.

    Returns:
    - Overview totals and month-over-month growth
    - 12-month user growth, revenue and payment trends
    - Top 10 countries by users
    - Weekday x hour signup heatmap
    - Active membership distribution
    """
    return AnalyticsService.get_analytics(db)


@router.get("/revenue", response_model=RevenueStatisticsResponse)
async def get_revenue_statistics(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> RevenueStatisticsResponse:
    """
    Get revenue statistics for completed payments.

    Returns:
    - Affiliate vs direct revenue and payment counts
    - This month vs last month
    - Monthly (12 months) and daily (30 days) chart data
    """
    return AnalyticsService.get_revenue_statistics(db)


@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> DashboardStatsResponse:
    """
    Get admin home page counters and the newest signups.
    """
    return AnalyticsService.get_dashboard_stats(db)
