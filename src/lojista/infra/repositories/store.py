"""SQLModel implementation of the store repository."""

from __future__ import annotations

from sqlmodel import select

from ...errors import StoreNotFound, ValidationError
from ...models.store import Store
from ..database import SessionFactory
from ._errors import repository_errors


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("store name cannot be blank", field="name")
    if len(cleaned) > 128:
        raise ValidationError("store name is longer than 128 characters", field="name")
    return cleaned


class SQLModelStoreRepository:
    """SQLModel-based store repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, store_id: int) -> Store:
        with repository_errors("get_store"), self.session_factory() as session:
            store = session.exec(select(Store).where(Store.id == store_id)).first()
            if store is None:
                raise StoreNotFound(store_id)
            session.expunge(store)
            return store

    def create(self, name: str) -> Store:
        store = Store(name=_clean_name(name))
        with repository_errors("create_store"), self.session_factory() as session:
            session.add(store)
            session.commit()
            session.refresh(store)
            session.expunge(store)
            return store

    def rename(self, store_id: int, name: str) -> Store:
        cleaned = _clean_name(name)
        with repository_errors("rename_store"), self.session_factory() as session:
            store = session.exec(select(Store).where(Store.id == store_id)).first()
            if store is None:
                raise StoreNotFound(store_id)
            store.name = cleaned
            session.add(store)
            session.commit()
            session.refresh(store)
            session.expunge(store)
            return store
