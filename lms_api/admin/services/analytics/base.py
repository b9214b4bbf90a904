"""Base utilities and helpers for analytics services."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from lms_api.admin.schemas.admin_analytics import PaymentRecord, ReferralRecord
from lms_api.core.constants import (
    PAYMENT_TYPE_REFERRAL_MEMBERSHIP,
    SUCCESSFUL_REFERRAL_STATUSES,
)
from lms_api.core.datetime_utils import month_start, shift_month, to_zone

_CENT = Decimal("0.01")
_TENTH = Decimal("0.1")


def round_money(value: float) -> float:
    """Round a USD amount to the cent, halves away from zero."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def round_percent(value: float) -> float:
    """Round a percentage to one decimal place, halves away from zero."""
    return float(Decimal(str(value)).quantize(_TENTH, rounding=ROUND_HALF_UP))


def calculate_growth_percent(current: int | float, previous: int | float) -> float:
    """Calculate percentage change between two periods.

    Args:
        current: Current period value.
        previous: Previous period value.

    Returns:
        Percentage change rounded to 1 decimal place.
        Returns 100.0 if previous is 0 and current > 0.
        Returns 0.0 if both are 0.
    """
    if previous > 0:
        return round_percent(((current - previous) / previous) * 100)
    return 100.0 if current > 0 else 0.0


def is_affiliate_payment(payment: PaymentRecord) -> bool:
    """Whether a payment came from a referral signup."""
    return (
        payment.payment_type == PAYMENT_TYPE_REFERRAL_MEMBERSHIP
        or payment.metadata.get("is_referral_signup") is True
        or bool(payment.metadata.get("referral_code"))
    )


def is_successful_referral(referral: ReferralRecord) -> bool:
    return referral.status in SUCCESSFUL_REFERRAL_STATUSES


@dataclass(frozen=True)
class MonthBucket:
    """Half-open calendar month ``[start, end)`` in a fixed time zone."""

    year: int
    month: int
    start: datetime
    end: datetime

    @property
    def key(self) -> tuple[int, int]:
        return self.year, self.month

    @property
    def label(self) -> str:
        return self.start.strftime("%b %y")


def month_bucket(year: int, month: int, tz: tzinfo) -> MonthBucket:
    next_year, next_month = shift_month(year, month, 1)
    return MonthBucket(
        year=year,
        month=month,
        start=month_start(year, month, tz),
        end=month_start(next_year, next_month, tz),
    )


def trailing_months(now: datetime, tz: tzinfo, count: int = 12) -> list[MonthBucket]:
    """Calendar months ending with the one containing ``now``, oldest first."""
    local_now = to_zone(now, tz)
    buckets = []
    for i in range(count - 1, -1, -1):
        year, month = shift_month(local_now.year, local_now.month, -i)
        buckets.append(month_bucket(year, month, tz))
    return buckets


def month_key(value: datetime, tz: tzinfo) -> tuple[int, int]:
    local = to_zone(value, tz)
    return local.year, local.month


def trailing_days(now: datetime, tz: tzinfo, count: int = 30) -> list[date]:
    """Local calendar dates ending with today, oldest first."""
    today = to_zone(now, tz).date()
    return [today - timedelta(days=i) for i in range(count - 1, -1, -1)]


@dataclass(frozen=True)
class MonthOverMonthWindows:
    """Current month (open-ended forward) and the complete previous month."""

    this_month_start: datetime
    last_month_start: datetime

    def in_this_month(self, value: datetime) -> bool:
        return to_zone(value, UTC) >= self.this_month_start

    def in_last_month(self, value: datetime) -> bool:
        return self.last_month_start <= to_zone(value, UTC) < self.this_month_start


def month_over_month_windows(now: datetime, tz: tzinfo) -> MonthOverMonthWindows:
    local_now = to_zone(now, tz)
    last_year, last_month = shift_month(local_now.year, local_now.month, -1)
    return MonthOverMonthWindows(
        this_month_start=month_start(local_now.year, local_now.month, tz),
        last_month_start=month_start(last_year, last_month, tz),
    )
