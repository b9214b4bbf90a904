"""Trailing-window trend series: user growth, revenue and payments."""

from collections.abc import Sequence
from datetime import tzinfo

from lms_api.admin.schemas.admin_analytics import (
    PaymentRecord,
    PaymentTrendPoint,
    RevenueTrendPoint,
    UserGrowthPoint,
    UserRecord,
)
from lms_api.admin.services.analytics.base import (
    MonthBucket,
    is_affiliate_payment,
    month_key,
    round_money,
)
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.auth.roles import is_affiliate


class TrendService:
    """Service for monthly series over a trailing window.

    Records are grouped by their local (year, month) in a single pass, then
    read back per bucket, so months with no records still yield a zero point.
    Records outside the window are ignored.
    """

    @staticmethod
    def get_user_growth(
        users: Sequence[UserRecord], buckets: Sequence[MonthBucket], tz: tzinfo
    ) -> list[UserGrowthPoint]:
        totals = {bucket.key: 0 for bucket in buckets}
        affiliates = dict(totals)
        for user in users:
            key = month_key(user.created_at, tz)
            if key not in totals:
                continue
            totals[key] += 1
            if is_affiliate(user):
                affiliates[key] += 1

        return [
            UserGrowthPoint(
                month=bucket.label,
                total=totals[bucket.key],
                affiliates=affiliates[bucket.key],
                learners=totals[bucket.key] - affiliates[bucket.key],
            )
            for bucket in buckets
        ]

    @staticmethod
    def get_revenue_trend(
        payments: Sequence[PaymentRecord],
        normalizer: CurrencyNormalizer,
        buckets: Sequence[MonthBucket],
        tz: tzinfo,
    ) -> list[RevenueTrendPoint]:
        affiliate = {bucket.key: 0.0 for bucket in buckets}
        direct = dict(affiliate)
        for payment in payments:
            key = month_key(payment.created_at, tz)
            if key not in affiliate:
                continue
            usd = normalizer.payment_usd(payment)
            if is_affiliate_payment(payment):
                affiliate[key] += usd
            else:
                direct[key] += usd

        return [
            RevenueTrendPoint(
                month=bucket.label,
                total=round_money(affiliate[bucket.key] + direct[bucket.key]),
                affiliate=round_money(affiliate[bucket.key]),
                direct=round_money(direct[bucket.key]),
            )
            for bucket in buckets
        ]

    @staticmethod
    def get_payment_trend(
        payments: Sequence[PaymentRecord],
        normalizer: CurrencyNormalizer,
        buckets: Sequence[MonthBucket],
        tz: tzinfo,
    ) -> list[PaymentTrendPoint]:
        counts = {bucket.key: 0 for bucket in buckets}
        amounts = {bucket.key: 0.0 for bucket in buckets}
        for payment in payments:
            key = month_key(payment.created_at, tz)
            if key not in counts:
                continue
            counts[key] += 1
            amounts[key] += normalizer.payment_usd(payment)

        return [
            PaymentTrendPoint(
                month=bucket.label,
                count=counts[bucket.key],
                amount=round_money(amounts[bucket.key]),
            )
            for bucket in buckets
        ]
