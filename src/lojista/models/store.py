"""Store (loja) owning every ledger row."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .transaction import Transaction


class Store(SQLModel, table=True):
    """A single shop; all aggregation is scoped to one of these."""

    __tablename__: ClassVar[str] = "store"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=128)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    transactions: list["Transaction"] = Relationship(
        back_populates="store",
        sa_relationship=relationship(
            "Transaction", back_populates="store", cascade="all, delete-orphan"
        ),
    )
