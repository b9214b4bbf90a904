import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from lms_api.db.session import Base


class Profile(Base):
    """
    Platform user profile.

    Owned by the identity service; this API only reads it.

    Attributes:
        id: Identity-provider user id
        email: Login email
        full_name: Display name
        role: Legacy single role ("learner", "affiliate", "admin")
        active_role: Role the user is currently acting as
        available_roles: Every role the user may switch to
        status: Account status ("active", "suspended", "pending")
        country: Self-reported country name
        affiliate_onboarding_completed: Whether affiliate onboarding finished
        created_at: Signup timestamp
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    email: Mapped[str | None] = mapped_column(String(255), default=None, index=True)
    full_name: Mapped[str | None] = mapped_column(String(255), default=None)

    role: Mapped[str | None] = mapped_column(String(50), default="learner")
    active_role: Mapped[str | None] = mapped_column(String(50), default=None)
    available_roles: Mapped[list[str] | None] = mapped_column(JSON, default=list)

    status: Mapped[str | None] = mapped_column(String(50), default="active", index=True)
    country: Mapped[str | None] = mapped_column(String(100), default=None)
    affiliate_onboarding_completed: Mapped[bool] = mapped_column(default=False)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC), index=True)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email}, role={self.role})>"
