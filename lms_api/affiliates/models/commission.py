import uuid
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lms_api.db.session import Base


class Commission(Base):
    __tablename__ = "commissions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    affiliate_id: Mapped[uuid.UUID | None] = mapped_column(default=None, index=True)

    commission_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), default=None)
    # Legacy rows carry the value here instead of commission_amount
    amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), default=None)
    commission_currency: Mapped[str | None] = mapped_column(String(3), default="USD")
    status: Mapped[str | None] = mapped_column(String(20), default="pending", index=True)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
