import uuid
from datetime import UTC, datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from lms_api.db.session import Base


class Referral(Base):
    __tablename__ = "referrals"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    referrer_id: Mapped[uuid.UUID | None] = mapped_column(default=None, index=True)
    referral_code: Mapped[str | None] = mapped_column(String(64), default=None)
    # "pending", "completed", "converted", ...
    status: Mapped[str | None] = mapped_column(String(20), default="pending")

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
