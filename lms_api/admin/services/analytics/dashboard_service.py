"""Dashboard stats service."""

from datetime import UTC

from lms_api.admin.schemas.admin_analytics import (
    DashboardStats,
    DashboardStatsResponse,
    FactSnapshot,
    RecentUser,
)
from lms_api.admin.services.analytics.base import is_affiliate_payment, round_money
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.auth.roles import is_affiliate
from lms_api.core.constants import (
    RECENT_USERS_LIMIT,
    ROLE_LEARNER,
    USER_STATUS_ACTIVE,
    USER_STATUS_PENDING,
    USER_STATUS_SUSPENDED,
)
from lms_api.core.datetime_utils import to_zone


class DashboardService:
    """Service for the admin home page summary."""

    @staticmethod
    def get_stats(
        snapshot: FactSnapshot,
        normalizer: CurrencyNormalizer,
        recent_limit: int = RECENT_USERS_LIMIT,
    ) -> DashboardStatsResponse:
        """Get user, revenue and affiliate counters plus the newest signups.

        An affiliate counts as onboarded here when they hold an active
        membership, which is how the home page has always reported it.
        """
        users = snapshot.users
        affiliates = [u for u in users if is_affiliate(u)]
        member_ids = {m.user_id for m in snapshot.memberships if m.is_active}
        affiliate_sales = sum(1 for p in snapshot.payments if is_affiliate_payment(p))

        stats = DashboardStats(
            total_users=len(users),
            active_users=sum(1 for u in users if u.status == USER_STATUS_ACTIVE),
            suspended_users=sum(1 for u in users if u.status == USER_STATUS_SUSPENDED),
            pending_users=sum(1 for u in users if u.status == USER_STATUS_PENDING),
            total_revenue=round_money(sum(normalizer.payment_usd(p) for p in snapshot.payments)),
            active_courses=len(snapshot.courses),
            active_affiliates=len(affiliates),
            total_payments=len(snapshot.payments),
            total_commissions=round_money(
                sum(
                    normalizer.to_usd(c.commission_amount or c.amount or 0, c.commission_currency)
                    for c in snapshot.commissions
                )
            ),
            affiliates_onboarded=sum(1 for u in affiliates if u.id in member_ids),
            affiliate_sales=affiliate_sales,
            direct_sales=len(snapshot.payments) - affiliate_sales,
        )

        newest = sorted(users, key=lambda u: to_zone(u.created_at, UTC), reverse=True)
        recent_users = [
            RecentUser(
                id=str(u.id),
                email=u.email,
                full_name=u.full_name,
                role=u.active_role or u.role or ROLE_LEARNER,
                created_at=u.created_at,
            )
            for u in newest[:recent_limit]
        ]

        return DashboardStatsResponse(stats=stats, recent_users=recent_users)
