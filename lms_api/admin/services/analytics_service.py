"""Analytics service: loads fact snapshots and runs the aggregation services."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from lms_api.admin.schemas.admin_analytics import (
    AnalyticsResponse,
    DashboardStatsResponse,
    RevenueStatisticsResponse,
)
from lms_api.admin.services.analytics import (
    AnalyticsEngine,
    CurrencyNormalizer,
    DashboardService,
    FactStore,
    RevenueService,
)
from lms_api.core.config import settings
from lms_api.core.datetime_utils import get_zone

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Entry points used by the admin routes."""

    @staticmethod
    def _fact_store(db: Session) -> FactStore:
        return FactStore(db, settings.ANALYTICS_PARTIAL_DATA_POLICY)

    @staticmethod
    def _normalizer() -> CurrencyNormalizer:
        return CurrencyNormalizer(settings.currency_rates)

    @staticmethod
    def build_engine() -> AnalyticsEngine:
        return AnalyticsEngine(
            normalizer=AnalyticsService._normalizer(),
            tz=get_zone(settings.ANALYTICS_TIMEZONE),
            trend_months=settings.ANALYTICS_TREND_MONTHS,
            top_countries=settings.ANALYTICS_TOP_COUNTRIES,
        )

    @staticmethod
    def get_analytics(db: Session, now: datetime | None = None) -> AnalyticsResponse:
        snapshot = AnalyticsService._fact_store(db).load_snapshot()
        if snapshot.degraded_sources:
            logger.warning(
                "Serving analytics with empty record sets: %s",
                ", ".join(snapshot.degraded_sources),
            )
        return AnalyticsService.build_engine().compute(snapshot, now or datetime.now(UTC))

    @staticmethod
    def get_revenue_statistics(
        db: Session, now: datetime | None = None
    ) -> RevenueStatisticsResponse:
        payments = AnalyticsService._fact_store(db).load_payments()
        return RevenueService.get_statistics(
            payments,
            AnalyticsService._normalizer(),
            now or datetime.now(UTC),
            get_zone(settings.ANALYTICS_TIMEZONE),
            months=settings.ANALYTICS_TREND_MONTHS,
            days=settings.REVENUE_DAILY_WINDOW_DAYS,
        )

    @staticmethod
    def get_dashboard_stats(db: Session) -> DashboardStatsResponse:
        snapshot = AnalyticsService._fact_store(db).load_snapshot()
        return DashboardService.get_stats(snapshot, AnalyticsService._normalizer())
