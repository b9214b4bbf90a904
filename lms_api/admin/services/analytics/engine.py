"""Analytics aggregation engine."""

from datetime import UTC, datetime, tzinfo

from lms_api.admin.schemas.admin_analytics import AnalyticsResponse, FactSnapshot
from lms_api.admin.services.analytics.base import month_over_month_windows, trailing_months
from lms_api.admin.services.analytics.breakdown_service import BreakdownService
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.admin.services.analytics.overview_service import OverviewService
from lms_api.admin.services.analytics.trend_service import TrendService


class AnalyticsEngine:
    """Compute every dashboard view from one fact snapshot.

    ``compute`` is a pure function of ``(snapshot, now)``: no I/O, no state
    kept between calls. Month and hour boundaries are taken in ``tz``.
    """

    def __init__(
        self,
        normalizer: CurrencyNormalizer | None = None,
        tz: tzinfo = UTC,
        trend_months: int = 12,
        top_countries: int = 10,
    ):
        self.normalizer = normalizer or CurrencyNormalizer()
        self.tz = tz
        self.trend_months = trend_months
        self.top_countries = top_countries

    def compute(self, snapshot: FactSnapshot, now: datetime) -> AnalyticsResponse:
        """Build the full analytics payload.

        Args:
            snapshot: Record sets to aggregate. Payments must already be
                limited to completed ones.
            now: Reference instant. Naive values are read as UTC.

        Returns:
            AnalyticsResponse with overview, trends and breakdowns.
        """
        buckets = trailing_months(now, self.tz, self.trend_months)
        windows = month_over_month_windows(now, self.tz)

        return AnalyticsResponse(
            overview=OverviewService.get_overview(snapshot, self.normalizer, windows),
            user_growth=TrendService.get_user_growth(snapshot.users, buckets, self.tz),
            revenue_trend=TrendService.get_revenue_trend(
                snapshot.payments, self.normalizer, buckets, self.tz
            ),
            payment_trend=TrendService.get_payment_trend(
                snapshot.payments, self.normalizer, buckets, self.tz
            ),
            country_data=BreakdownService.get_country_breakdown(
                snapshot.users, snapshot.payments, self.normalizer, self.top_countries
            ),
            heatmap=BreakdownService.get_signup_heatmap(snapshot.users, self.tz),
            membership_distribution=BreakdownService.get_membership_distribution(
                snapshot.memberships
            ),
        )
