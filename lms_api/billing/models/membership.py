import uuid
from datetime import UTC, datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from lms_api.db.session import Base


class UserMembership(Base):
    __tablename__ = "user_memberships"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(index=True)
    membership_id: Mapped[str | None] = mapped_column(String(64), default=None)  # Plan id
    is_active: Mapped[bool] = mapped_column(default=True, index=True)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<UserMembership(user_id={self.user_id}, plan={self.membership_id})>"
