"""Domain-specific exceptions."""

from __future__ import annotations


class LojistaError(Exception):
    """Base exception for ledger and reporting errors."""


class InvalidWindowSpec(LojistaError):
    """Raised when window parameters cannot describe a date range."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid window: {message}")


class ValidationError(LojistaError):
    """Raised when a transaction or store fails field validation on write."""

    def __init__(self, message: str, *, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(f"Validation error: {message}")


class RepositoryUnavailable(LojistaError):
    """Raised when the backing store fails a read or write."""

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Repository unavailable during {operation}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class EmptyWindow(LojistaError):
    """Raised when an export requires at least one transaction and none exist."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"No transactions between {start.isoformat()} and {end.isoformat()}")


class TransactionNotFound(LojistaError):
    """Raised when deleting a transaction that does not exist for the store."""

    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found: {transaction_id}")


class StoreNotFound(LojistaError):
    """Raised when a store id has no matching row."""

    def __init__(self, store_id: int):
        self.store_id = store_id
        super().__init__(f"Store not found: {store_id}")


class UnsupportedLocale(LojistaError):
    """Raised when a report is requested in a locale with no labels."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"Unsupported report locale: {locale}")
