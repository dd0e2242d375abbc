"""Store repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.store import Store


class StoreRepository(Protocol):
    """Repository for the store that owns a ledger."""

    def get(self, store_id: int) -> Store:
        """Return the store or raise ``StoreNotFound``."""
        ...

    def create(self, name: str) -> Store:
        """Create a store with a non-blank name."""
        ...

    def rename(self, store_id: int, name: str) -> Store:
        """Change the display name of a store."""
        ...
