"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .store import Store

CENT = Decimal("0.01")


class TransactionKind(str, Enum):
    """Direction of money: a sale brings it in, an expense takes it out."""

    INFLOW = "venda"
    OUTFLOW = "despesa"


def to_cents(amount: Decimal) -> int:
    """Convert an exact two-place Decimal into integer cents."""

    return int((amount * 100).to_integral_value())


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


class Transaction(SQLModel, table=True):
    """A single sale or expense recorded against a store."""

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    store_id: int = Field(foreign_key="store.id", nullable=False, index=True)
    kind: TransactionKind = Field(nullable=False, index=True)
    amount_cents: int = Field(nullable=False, ge=0, description="Non-negative integer cents")
    occurred_on: date = Field(nullable=False, index=True)
    recorded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    description: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=64)

    store: "Store" = Relationship(
        back_populates="transactions",
        sa_relationship=relationship("Store", back_populates="transactions"),
    )

    @property
    def amount(self) -> Decimal:
        """Exact monetary value with two decimal places."""
        return from_cents(self.amount_cents)
