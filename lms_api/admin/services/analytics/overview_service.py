"""Overview totals for the analytics dashboard."""

from lms_api.admin.schemas.admin_analytics import AnalyticsOverview, FactSnapshot
from lms_api.admin.services.analytics.base import (
    MonthOverMonthWindows,
    calculate_growth_percent,
    is_affiliate_payment,
    is_successful_referral,
    round_money,
)
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.auth.roles import is_affiliate
from lms_api.core.constants import COMMISSION_STATUS_PENDING, USER_STATUS_ACTIVE


class OverviewService:
    """Service for headline totals and month-over-month deltas."""

    @staticmethod
    def get_overview(
        snapshot: FactSnapshot,
        normalizer: CurrencyNormalizer,
        windows: MonthOverMonthWindows,
    ) -> AnalyticsOverview:
        """Compute every overview metric in one pass per record set.

        Args:
            snapshot: Record sets to aggregate. Payments must be completed only.
            normalizer: Converts amounts to USD.
            windows: Current and previous calendar month bounds.

        Returns:
            AnalyticsOverview with money rounded to cents and percentages to 0.1.
        """
        users = snapshot.users

        # Revenue, split by attribution
        total_revenue = affiliate_revenue = direct_revenue = 0.0
        this_month_revenue = last_month_revenue = 0.0
        for payment in snapshot.payments:
            usd = normalizer.payment_usd(payment)
            total_revenue += usd
            if is_affiliate_payment(payment):
                affiliate_revenue += usd
            else:
                direct_revenue += usd

            if windows.in_this_month(payment.created_at):
                this_month_revenue += usd
            elif windows.in_last_month(payment.created_at):
                last_month_revenue += usd

        total_commissions = pending_commissions = 0.0
        for commission in snapshot.commissions:
            usd = normalizer.commission_usd(commission)
            total_commissions += usd
            if commission.status == COMMISSION_STATUS_PENDING:
                pending_commissions += usd

        this_month_users = sum(1 for u in users if windows.in_this_month(u.created_at))
        last_month_users = sum(1 for u in users if windows.in_last_month(u.created_at))

        return AnalyticsOverview(
            total_users=len(users),
            active_users=sum(1 for u in users if u.status == USER_STATUS_ACTIVE),
            affiliates=sum(1 for u in users if is_affiliate(u)),
            affiliates_onboarded=sum(1 for u in users if u.affiliate_onboarding_completed),
            active_memberships=sum(1 for m in snapshot.memberships if m.is_active),
            total_courses=len(snapshot.courses),
            published_courses=sum(1 for c in snapshot.courses if c.is_published),
            total_referrals=len(snapshot.referrals),
            successful_referrals=sum(1 for r in snapshot.referrals if is_successful_referral(r)),
            total_revenue=round_money(total_revenue),
            affiliate_revenue=round_money(affiliate_revenue),
            direct_revenue=round_money(direct_revenue),
            total_payments=len(snapshot.payments),
            total_commissions=round_money(total_commissions),
            pending_commissions=round_money(pending_commissions),
            this_month_users=this_month_users,
            last_month_users=last_month_users,
            user_growth_pct=calculate_growth_percent(this_month_users, last_month_users),
            this_month_revenue=round_money(this_month_revenue),
            last_month_revenue=round_money(last_month_revenue),
            revenue_growth_pct=calculate_growth_percent(this_month_revenue, last_month_revenue),
        )
