"""Analytics schemas for the admin dashboard.

Two groups live here: the read-only record snapshot the analytics engine
consumes, and the camelCase response models the dashboard renders.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lms_api.core.datetime_utils import UTCDatetime

# ============ Snapshot Records ============


class FactRecord(BaseModel):
    """Immutable row read from the fact store."""

    model_config = ConfigDict(frozen=True, from_attributes=True)


class UserRecord(FactRecord):
    id: uuid.UUID
    created_at: datetime
    email: str | None = None
    full_name: str | None = None
    country: str | None = None
    role: str | None = None
    active_role: str | None = None
    available_roles: list[str] = Field(default_factory=list)
    status: str | None = None
    affiliate_onboarding_completed: bool = False

    @field_validator("available_roles", mode="before")
    @classmethod
    def _roles_default(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("affiliate_onboarding_completed", mode="before")
    @classmethod
    def _onboarding_default(cls, v: Any) -> Any:
        return False if v is None else v


class PaymentRecord(FactRecord):
    id: uuid.UUID
    amount: float = 0.0
    currency: str | None = None
    base_amount: float | None = None
    base_currency: str | None = None
    payment_type: str | None = None
    # ORM rows expose the column as ``payment_metadata``
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("payment_metadata", "metadata"),
    )
    created_at: datetime
    status: str = "completed"
    user_id: uuid.UUID | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_default(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class MembershipRecord(FactRecord):
    user_id: uuid.UUID
    created_at: datetime
    is_active: bool = False
    membership_id: str | None = None


class CommissionRecord(FactRecord):
    id: uuid.UUID
    commission_amount: float | None = None
    amount: float | None = None
    commission_currency: str | None = None
    status: str | None = None
    created_at: datetime


class CourseRecord(FactRecord):
    id: uuid.UUID
    is_published: bool = False


class ReferralRecord(FactRecord):
    id: uuid.UUID
    created_at: datetime
    status: str | None = None


class FactSnapshot(BaseModel):
    """Fully materialized view of the six record sets at one point in time."""

    model_config = ConfigDict(frozen=True)

    users: list[UserRecord] = Field(default_factory=list)
    payments: list[PaymentRecord] = Field(default_factory=list)
    memberships: list[MembershipRecord] = Field(default_factory=list)
    commissions: list[CommissionRecord] = Field(default_factory=list)
    courses: list[CourseRecord] = Field(default_factory=list)
    referrals: list[ReferralRecord] = Field(default_factory=list)
    # Record sets replaced by an empty list because their query failed
    degraded_sources: list[str] = Field(default_factory=list)


# ============ Response Base ============


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============ Analytics ============


class AnalyticsOverview(CamelModel):
    """Headline totals and month-over-month deltas. Money is USD."""

    total_users: int
    active_users: int
    affiliates: int
    affiliates_onboarded: int
    active_memberships: int
    total_courses: int
    published_courses: int
    total_referrals: int
    successful_referrals: int
    total_revenue: float
    affiliate_revenue: float
    direct_revenue: float
    total_payments: int
    total_commissions: float
    pending_commissions: float
    this_month_users: int
    last_month_users: int
    user_growth_pct: float
    this_month_revenue: float
    last_month_revenue: float
    revenue_growth_pct: float


class UserGrowthPoint(CamelModel):
    month: str = Field(description="Month label, e.g. 'Jan 25'")
    total: int
    affiliates: int
    learners: int


class RevenueTrendPoint(CamelModel):
    month: str
    total: float
    affiliate: float
    direct: float


class PaymentTrendPoint(CamelModel):
    month: str
    count: int
    amount: float


class CountryStats(CamelModel):
    country: str
    users: int
    affiliates: int
    revenue: float


class HeatmapRow(CamelModel):
    day: str = Field(description="Weekday label, Monday first")
    hours: list[int] = Field(description="Signup counts for hours 0-23")


class MembershipShare(CamelModel):
    membership_id: str
    count: int


class AnalyticsResponse(CamelModel):
    """Complete admin analytics payload."""

    overview: AnalyticsOverview
    user_growth: list[UserGrowthPoint]
    revenue_trend: list[RevenueTrendPoint]
    payment_trend: list[PaymentTrendPoint]
    country_data: list[CountryStats]
    heatmap: list[HeatmapRow]
    membership_distribution: list[MembershipShare]


# ============ Revenue Statistics ============


class RevenueStats(CamelModel):
    total_revenue: float
    affiliate_revenue: float
    direct_revenue: float
    total_payments: int
    affiliate_payments: int
    direct_payments: int
    this_month_revenue: float
    last_month_revenue: float
    month_over_month_change: float


class DailyRevenuePoint(CamelModel):
    day: str = Field(description="Day label, e.g. 'Jan 5'")
    total: float
    affiliate: float
    direct: float


class RevenueStatisticsResponse(CamelModel):
    stats: RevenueStats
    monthly_chart: list[RevenueTrendPoint]
    daily_chart: list[DailyRevenuePoint]


# ============ Dashboard Stats ============


class DashboardStats(CamelModel):
    total_users: int
    active_users: int
    suspended_users: int
    pending_users: int
    total_revenue: float
    active_courses: int
    active_affiliates: int
    total_payments: int
    total_commissions: float
    affiliates_onboarded: int
    affiliate_sales: int
    direct_sales: int


class RecentUser(BaseModel):
    """Newest signup, keyed in snake_case like the profile rows it mirrors."""

    id: str
    email: str | None
    full_name: str | None
    role: str
    created_at: UTCDatetime


class DashboardStatsResponse(CamelModel):
    stats: DashboardStats
    recent_users: list[RecentUser]
    # Reserved for the recent payments card, always empty
    recent_payments: list[dict[str, Any]] = Field(default_factory=list)
