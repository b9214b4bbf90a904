"""Tests for BreakdownService and TrendService."""

import uuid
from datetime import UTC, datetime

from lms_api.admin.services.analytics.base import trailing_months
from lms_api.admin.services.analytics.breakdown_service import BreakdownService
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.admin.services.analytics.trend_service import TrendService
from tests.utils.factories import make_membership, make_payment, make_user

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


class TestCountryBreakdown:
    def test_groups_users_and_revenue(self):
        ghana = make_user(NOW, country="Ghana", role="affiliate")
        ghana_two = make_user(NOW, country="Ghana")
        nowhere = make_user(NOW, country=None)
        payments = [
            make_payment(140, "GHS", NOW, user_id=ghana.id),
            make_payment(5, "USD", NOW, user_id=nowhere.id),
            # Guest checkout: no profile to attribute it to
            make_payment(1000, "USD", NOW, user_id=uuid.uuid4()),
            make_payment(1000, "USD", NOW, user_id=None),
        ]

        result = BreakdownService.get_country_breakdown(
            [ghana, ghana_two, nowhere], payments, CurrencyNormalizer()
        )

        assert [c.country for c in result] == ["Ghana", "Unknown"]
        assert result[0].users == 2
        assert result[0].affiliates == 1
        assert result[0].revenue == 10.0
        assert result[1].revenue == 5.0

    def test_top_ten_sorted_with_stable_ties(self):
        users = []
        # Twelve countries; C0, C1 and C7 tie on 5 users, in that order of appearance
        for i in range(12):
            count = 5 if i < 2 else 12 - i
            users.extend(make_user(NOW, country=f"C{i}") for _ in range(count))

        result = BreakdownService.get_country_breakdown(users, [], CurrencyNormalizer())

        assert len(result) == 10
        counts = [c.users for c in result]
        assert counts == sorted(counts, reverse=True)
        assert [c.country for c in result] == [
            "C2", "C3", "C4", "C5", "C6", "C0", "C1", "C7", "C8", "C9",
        ]  # fmt: skip


class TestSignupHeatmap:
    def test_counts_by_weekday_and_hour(self):
        users = [
            make_user(datetime(2025, 6, 9, 9, 30, tzinfo=UTC)),  # Monday
            make_user(datetime(2025, 6, 9, 9, 59, tzinfo=UTC)),
            make_user(datetime(2025, 6, 15, 23, 0, tzinfo=UTC)),  # Sunday
        ]

        heatmap = BreakdownService.get_signup_heatmap(users, UTC)

        assert heatmap[0].day == "Mon"
        assert heatmap[0].hours[9] == 2
        assert heatmap[6].day == "Sun"
        assert heatmap[6].hours[23] == 1


class TestMembershipDistribution:
    def test_only_active_memberships(self):
        memberships = [
            make_membership(True, "pro"),
            make_membership(True, "basic"),
            make_membership(True, "basic"),
            make_membership(False, "pro"),
            make_membership(True, None),
        ]

        result = BreakdownService.get_membership_distribution(memberships)

        assert [(m.membership_id, m.count) for m in result] == [
            ("basic", 2),
            ("pro", 1),
            ("unknown", 1),
        ]


class TestTrendService:
    def test_user_growth_splits_affiliates(self):
        buckets = trailing_months(NOW, UTC, 12)
        users = [
            make_user(datetime(2025, 6, 2, tzinfo=UTC), role="affiliate"),
            make_user(datetime(2025, 6, 3, tzinfo=UTC)),
            make_user(datetime(2024, 7, 1, tzinfo=UTC)),
            make_user(datetime(2024, 6, 30, 23, 59, tzinfo=UTC)),  # Before the window
        ]

        growth = TrendService.get_user_growth(users, buckets, UTC)

        assert growth[-1].total == 2
        assert growth[-1].affiliates == 1
        assert growth[-1].learners == 1
        assert growth[0].total == 1
        assert sum(p.total for p in growth) == 3

    def test_revenue_trend_partition(self):
        buckets = trailing_months(NOW, UTC, 12)
        payments = [
            make_payment(20, "USD", NOW, payment_type="referral_membership"),
            make_payment(0.92, "EUR", NOW),
        ]

        trend = TrendService.get_revenue_trend(payments, CurrencyNormalizer(), buckets, UTC)

        assert trend[-1].affiliate == 20.0
        assert trend[-1].direct == 1.0
        assert trend[-1].total == 21.0
