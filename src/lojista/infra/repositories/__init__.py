"""Concrete repository implementations using SQLModel."""

from .store import SQLModelStoreRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelStoreRepository",
    "SQLModelTransactionRepository",
]
