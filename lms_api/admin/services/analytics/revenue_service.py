"""Revenue statistics service."""

from collections.abc import Sequence
from datetime import date, datetime, tzinfo

from lms_api.admin.schemas.admin_analytics import (
    DailyRevenuePoint,
    PaymentRecord,
    RevenueStatisticsResponse,
    RevenueStats,
)
from lms_api.admin.services.analytics.base import (
    calculate_growth_percent,
    is_affiliate_payment,
    month_over_month_windows,
    round_money,
    trailing_days,
    trailing_months,
)
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.admin.services.analytics.trend_service import TrendService
from lms_api.core.datetime_utils import to_zone


def _day_label(day: date) -> str:
    return f"{day:%b} {day.day}"


class RevenueService:
    """Service for revenue-related statistics."""

    @staticmethod
    def get_statistics(
        payments: Sequence[PaymentRecord],
        normalizer: CurrencyNormalizer,
        now: datetime,
        tz: tzinfo,
        months: int = 12,
        days: int = 30,
    ) -> RevenueStatisticsResponse:
        """Get revenue totals with monthly and daily chart data.

        Args:
            payments: Completed payments.
            normalizer: Converts amounts to USD.
            now: Reference instant.
            tz: Zone for month and day boundaries.
            months: Length of the monthly series.
            days: Length of the daily series, today included.

        Returns:
            RevenueStatisticsResponse with summary, monthly and daily series.
        """
        windows = month_over_month_windows(now, tz)

        total = affiliate = direct = 0.0
        affiliate_count = 0
        this_month = last_month = 0.0
        for payment in payments:
            usd = normalizer.payment_usd(payment)
            total += usd
            if is_affiliate_payment(payment):
                affiliate += usd
                affiliate_count += 1
            else:
                direct += usd

            if windows.in_this_month(payment.created_at):
                this_month += usd
            elif windows.in_last_month(payment.created_at):
                last_month += usd

        stats = RevenueStats(
            total_revenue=round_money(total),
            affiliate_revenue=round_money(affiliate),
            direct_revenue=round_money(direct),
            total_payments=len(payments),
            affiliate_payments=affiliate_count,
            direct_payments=len(payments) - affiliate_count,
            this_month_revenue=round_money(this_month),
            last_month_revenue=round_money(last_month),
            month_over_month_change=calculate_growth_percent(this_month, last_month),
        )

        monthly = TrendService.get_revenue_trend(
            payments, normalizer, trailing_months(now, tz, months), tz
        )
        daily = RevenueService._get_daily_points(payments, normalizer, now, tz, days)

        return RevenueStatisticsResponse(stats=stats, monthly_chart=monthly, daily_chart=daily)

    @staticmethod
    def _get_daily_points(
        payments: Sequence[PaymentRecord],
        normalizer: CurrencyNormalizer,
        now: datetime,
        tz: tzinfo,
        days: int,
    ) -> list[DailyRevenuePoint]:
        """Generate per-day revenue points for the chart."""
        window = trailing_days(now, tz, days)
        affiliate_by_day = {day: 0.0 for day in window}
        direct_by_day = dict(affiliate_by_day)

        for payment in payments:
            day = to_zone(payment.created_at, tz).date()
            if day not in affiliate_by_day:
                continue
            usd = normalizer.payment_usd(payment)
            if is_affiliate_payment(payment):
                affiliate_by_day[day] += usd
            else:
                direct_by_day[day] += usd

        return [
            DailyRevenuePoint(
                day=_day_label(day),
                total=round_money(affiliate_by_day[day] + direct_by_day[day]),
                affiliate=round_money(affiliate_by_day[day]),
                direct=round_money(direct_by_day[day]),
            )
            for day in window
        ]
