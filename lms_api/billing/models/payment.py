import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lms_api.db.session import Base


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID | None] = mapped_column(default=None, index=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    currency: Mapped[str | None] = mapped_column(String(3), default="USD")
    # Gateway-converted amount, when the provider reports one
    base_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), default=None)
    base_currency: Mapped[str | None] = mapped_column(String(3), default=None)

    payment_type: Mapped[str | None] = mapped_column(String(50), default=None)
    # "metadata" is reserved on declarative classes
    payment_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, default=dict
    )

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC), index=True)

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, amount={self.amount} {self.currency}, status={self.status})>"
