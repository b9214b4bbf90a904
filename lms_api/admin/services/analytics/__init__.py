"""Analytics module for the admin dashboard.

This module is split into concern-specific services:
- base: Rounding, growth percentages, month/day windows, payment predicates
- currency: Conversion to the reporting currency
- fact_store: Snapshot loading and the partial-data policy
- overview_service: Headline totals and month-over-month deltas
- trend_service: Trailing monthly series
- breakdown_service: Country, signup heatmap and membership breakdowns
- engine: Composes the services into the full analytics payload
- revenue_service: Revenue page statistics
- dashboard_service: Admin home page counters
"""

from lms_api.admin.services.analytics.base import (
    calculate_growth_percent,
    is_affiliate_payment,
    is_successful_referral,
    round_money,
    round_percent,
)
from lms_api.admin.services.analytics.breakdown_service import BreakdownService
from lms_api.admin.services.analytics.currency import CurrencyNormalizer
from lms_api.admin.services.analytics.dashboard_service import DashboardService
from lms_api.admin.services.analytics.engine import AnalyticsEngine
from lms_api.admin.services.analytics.fact_store import FactStore, PartialDataPolicy
from lms_api.admin.services.analytics.overview_service import OverviewService
from lms_api.admin.services.analytics.revenue_service import RevenueService
from lms_api.admin.services.analytics.trend_service import TrendService

__all__ = [
    # Base utilities
    "calculate_growth_percent",
    "is_affiliate_payment",
    "is_successful_referral",
    "round_money",
    "round_percent",
    # Services
    "AnalyticsEngine",
    "BreakdownService",
    "CurrencyNormalizer",
    "DashboardService",
    "FactStore",
    "OverviewService",
    "PartialDataPolicy",
    "RevenueService",
    "TrendService",
]
