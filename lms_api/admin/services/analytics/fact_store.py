"""Read-only snapshot loader over the platform's six fact tables."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lms_api.admin.schemas.admin_analytics import (
    CommissionRecord,
    CourseRecord,
    FactRecord,
    FactSnapshot,
    MembershipRecord,
    PaymentRecord,
    ReferralRecord,
    UserRecord,
)
from lms_api.affiliates.models.commission import Commission
from lms_api.affiliates.models.referral import Referral
from lms_api.auth.models.profile import Profile
from lms_api.billing.models.membership import UserMembership
from lms_api.billing.models.payment import Payment
from lms_api.core.constants import PAYMENT_STATUS_COMPLETED, PartialDataPolicy
from lms_api.core.exceptions import ExternalServiceError
from lms_api.courses.models.course import Course

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=FactRecord)


class FactStore:
    """Fetch immutable snapshots of the six analytics record sets.

    Only completed payments are loaded. The analytics engine relies on this
    and does not filter payments by status itself.
    """

    def __init__(self, db: Session, policy: PartialDataPolicy = PartialDataPolicy.SILENT_ZERO):
        self.db = db
        self.policy = policy

    def load_snapshot(self) -> FactSnapshot:
        degraded: list[str] = []

        users = self._fetch("profiles", UserRecord, self._query_profiles, degraded)
        payments = self._fetch("payments", PaymentRecord, self._query_payments, degraded)
        memberships = self._fetch(
            "user_memberships", MembershipRecord, self._query_memberships, degraded
        )
        commissions = self._fetch(
            "commissions", CommissionRecord, self._query_commissions, degraded
        )
        courses = self._fetch("courses", CourseRecord, self._query_courses, degraded)
        referrals = self._fetch("referrals", ReferralRecord, self._query_referrals, degraded)

        return FactSnapshot(
            users=users,
            payments=payments,
            memberships=memberships,
            commissions=commissions,
            courses=courses,
            referrals=referrals,
            degraded_sources=degraded,
        )

    def load_payments(self) -> list[PaymentRecord]:
        """Completed payments only, oldest first."""
        return self._fetch("payments", PaymentRecord, self._query_payments, [])

    def _fetch(
        self,
        source: str,
        record_type: type[RecordT],
        query: Callable[[], list[Any]],
        degraded: list[str],
    ) -> list[RecordT]:
        try:
            rows = query()
        except SQLAlchemyError as e:
            self.db.rollback()
            if self.policy == PartialDataPolicy.FAIL_FAST:
                logger.error("Fact store query for %s failed: %s", source, e)
                raise ExternalServiceError(
                    f"Failed to load {source}", service="fact_store"
                ) from e
            logger.warning("Fact store query for %s failed, using empty set: %s", source, e)
            degraded.append(source)
            return []
        return [record_type.model_validate(row) for row in rows]

    def _query_profiles(self) -> list[Profile]:
        return self.db.query(Profile).all()

    def _query_payments(self) -> list[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.status == PAYMENT_STATUS_COMPLETED)
            .order_by(Payment.created_at.asc())
            .all()
        )

    def _query_memberships(self) -> list[UserMembership]:
        return self.db.query(UserMembership).all()

    def _query_commissions(self) -> list[Commission]:
        return self.db.query(Commission).all()

    def _query_courses(self) -> list[Course]:
        return self.db.query(Course).all()

    def _query_referrals(self) -> list[Referral]:
        return self.db.query(Referral).all()
