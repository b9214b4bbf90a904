"""Country, signup-time and membership breakdowns."""

from collections import Counter
from collections.abc import Sequence
from datetime import tzinfo
from uuid import UUID

from lms_api.admin.schemas.admin_analytics import (
    CountryStats,
    HeatmapRow,
    MembershipRecord,
    MembershipShare,
    PaymentRecord,
    UserRecord,
)
from lms_api.admin.services.analytics.base import round_money
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.auth.roles import is_affiliate
from lms_api.core.constants import (
    HOURS_PER_DAY,
    UNKNOWN_COUNTRY,
    UNKNOWN_MEMBERSHIP,
    WEEKDAY_LABELS,
)
from lms_api.core.datetime_utils import to_zone


class BreakdownService:
    """Service for categorical breakdowns of users, revenue and memberships."""

    @staticmethod
    def get_country_breakdown(
        users: Sequence[UserRecord],
        payments: Sequence[PaymentRecord],
        normalizer: CurrencyNormalizer,
        limit: int = 10,
    ) -> list[CountryStats]:
        """Group users and their revenue by country.

        Payments are attributed to the paying user's country. Payments whose
        user is not in ``users`` (guest checkouts, deleted profiles) are left
        out of this view.

        Args:
            users: Profiles to group.
            payments: Completed payments.
            normalizer: Converts amounts to USD.
            limit: Number of countries to keep.

        Returns:
            Countries sorted by user count, descending. Ties keep the order in
            which each country first appears in ``users``.
        """
        user_counts: dict[str, int] = {}
        affiliate_counts: dict[str, int] = {}
        revenue: dict[str, float] = {}
        user_country: dict[UUID, str] = {}

        for user in users:
            country = user.country or UNKNOWN_COUNTRY
            user_country[user.id] = country
            user_counts[country] = user_counts.get(country, 0) + 1
            affiliate_counts.setdefault(country, 0)
            revenue.setdefault(country, 0.0)
            if is_affiliate(user):
                affiliate_counts[country] += 1

        for payment in payments:
            if payment.user_id is None or payment.user_id not in user_country:
                continue
            revenue[user_country[payment.user_id]] += normalizer.payment_usd(payment)

        ranked = sorted(user_counts, key=lambda c: user_counts[c], reverse=True)
        return [
            CountryStats(
                country=country,
                users=user_counts[country],
                affiliates=affiliate_counts[country],
                revenue=round_money(revenue[country]),
            )
            for country in ranked[:limit]
        ]

    @staticmethod
    def get_signup_heatmap(users: Sequence[UserRecord], tz: tzinfo) -> list[HeatmapRow]:
        """Count signups per weekday and local hour over all users."""
        grid = [[0] * HOURS_PER_DAY for _ in WEEKDAY_LABELS]
        for user in users:
            local = to_zone(user.created_at, tz)
            grid[local.weekday()][local.hour] += 1

        return [HeatmapRow(day=label, hours=grid[i]) for i, label in enumerate(WEEKDAY_LABELS)]

    @staticmethod
    def get_membership_distribution(
        memberships: Sequence[MembershipRecord],
    ) -> list[MembershipShare]:
        counts = Counter(
            m.membership_id or UNKNOWN_MEMBERSHIP for m in memberships if m.is_active
        )
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [MembershipShare(membership_id=plan, count=count) for plan, count in ordered]
