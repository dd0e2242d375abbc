"""Repository protocol definitions for domain layer."""

from .store import StoreRepository
from .transaction import RunningTotals, TransactionRepository

__all__ = [
    "RunningTotals",
    "StoreRepository",
    "TransactionRepository",
]
