# app/repositories/base.py
from __future__ import annotations
from typing import Generic, Optional, TypeVar

from sqlalchemy import delete
from sqlalchemy.orm import Session

T = TypeVar("T")  # SQLAlchemy model type

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: str) -> Optional[T]:
        return self.db.get(self.model, entity_id)

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete_by_id(self, entity_id: str) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True

    def delete_where(self, *criteria) -> int:
        """Delete every row matching, returning how many went."""
        result = self.db.execute(delete(self.model).where(*criteria))
        self.db.commit()
        return result.rowcount or 0
