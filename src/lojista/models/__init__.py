"""SQLModel table exports."""

from .store import Store
from .transaction import Transaction, TransactionKind

__all__ = [
    "Store",
    "Transaction",
    "TransactionKind",
]
