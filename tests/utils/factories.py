import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from faker import Faker
from sqlalchemy.orm import Session

from lms_api.admin.schemas.admin_analytics import (
    CommissionRecord,
    CourseRecord,
    MembershipRecord,
    PaymentRecord,
    ReferralRecord,
    UserRecord,
)
from lms_api.affiliates.models.commission import Commission
from lms_api.auth.models.profile import Profile
from lms_api.billing.models.membership import UserMembership
from lms_api.billing.models.payment import Payment

fake = Faker()


# ============ ORM factories ============


def create_profile_factory(
    db_session: Session,
    email: str | None = None,
    role: str = "learner",
    active_role: str | None = None,
    available_roles: list[str] | None = None,
    status: str = "active",
    country: str | None = None,
    created_at: datetime | None = None,
) -> Profile:
    """
    Factory function to create test profiles.

    Args:
        db_session: Database session
        email: Profile email (generates random if None)
        role: Legacy role column
        active_role: Currently active role
        available_roles: Roles the user may switch to
        status: Account status
        country: Country name
        created_at: Signup time (now if None)

    Returns:
        Created Profile instance
    """
    profile = Profile(
        id=uuid.uuid4(),
        email=email or fake.email(),
        full_name=fake.name(),
        role=role,
        active_role=active_role,
        available_roles=available_roles or [],
        status=status,
        country=country,
        affiliate_onboarding_completed=False,
        created_at=created_at or datetime.now(UTC),
    )

    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)

    return profile


def create_payment_factory(
    db_session: Session,
    amount: str | Decimal = "10.00",
    currency: str = "USD",
    status: str = "completed",
    user_id: uuid.UUID | None = None,
    payment_type: str | None = None,
    metadata: dict[str, Any] | None = None,
    created_at: datetime | None = None,
) -> Payment:
    payment = Payment(
        id=uuid.uuid4(),
        user_id=user_id,
        amount=Decimal(amount),
        currency=currency,
        payment_type=payment_type,
        payment_metadata=metadata or {},
        status=status,
        created_at=created_at or datetime.now(UTC),
    )
    db_session.add(payment)
    db_session.commit()
    return payment


def create_membership_factory(
    db_session: Session, user_id: uuid.UUID, membership_id: str = "pro", is_active: bool = True
) -> UserMembership:
    membership = UserMembership(
        id=uuid.uuid4(),
        user_id=user_id,
        membership_id=membership_id,
        is_active=is_active,
        created_at=datetime.now(UTC),
    )
    db_session.add(membership)
    db_session.commit()
    return membership


def create_commission_factory(
    db_session: Session,
    amount: str | Decimal | None = "5.00",
    currency: str | None = "USD",
    status: str = "pending",
    legacy_amount: str | Decimal | None = None,
) -> Commission:
    commission = Commission(
        id=uuid.uuid4(),
        commission_amount=Decimal(amount) if amount is not None else None,
        amount=Decimal(legacy_amount) if legacy_amount is not None else None,
        commission_currency=currency,
        status=status,
        created_at=datetime.now(UTC),
    )
    db_session.add(commission)
    db_session.commit()
    return commission


# ============ Snapshot record builders ============


def make_user(created_at: datetime, **kwargs: Any) -> UserRecord:
    return UserRecord(id=kwargs.pop("id", uuid.uuid4()), created_at=created_at, **kwargs)


def make_payment(
    amount: float, currency: str | None, created_at: datetime, **kwargs: Any
) -> PaymentRecord:
    return PaymentRecord(
        id=kwargs.pop("id", uuid.uuid4()),
        amount=amount,
        currency=currency,
        created_at=created_at,
        **kwargs,
    )


def make_membership(
    is_active: bool = True, membership_id: str | None = "pro", **kwargs: Any
) -> MembershipRecord:
    return MembershipRecord(
        user_id=kwargs.pop("user_id", uuid.uuid4()),
        created_at=kwargs.pop("created_at", datetime(2025, 1, 1, tzinfo=UTC)),
        is_active=is_active,
        membership_id=membership_id,
        **kwargs,
    )


def make_commission(
    commission_amount: float | None,
    currency: str | None = "USD",
    status: str | None = "pending",
    **kwargs: Any,
) -> CommissionRecord:
    return CommissionRecord(
        id=uuid.uuid4(),
        commission_amount=commission_amount,
        commission_currency=currency,
        status=status,
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
        **kwargs,
    )


def make_course(is_published: bool = True) -> CourseRecord:
    return CourseRecord(id=uuid.uuid4(), is_published=is_published)


def make_referral(status: str | None) -> ReferralRecord:
    return ReferralRecord(
        id=uuid.uuid4(), created_at=datetime(2025, 1, 1, tzinfo=UTC), status=status
    )
