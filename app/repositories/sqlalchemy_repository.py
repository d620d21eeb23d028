"""
SQLAlchemy Repository
"""
from typing import Any, Callable, List, Optional, Type

from sqlalchemy.orm import Session

from app.core import Base
from .base import Repository, T
from .transformers import EntityTransformer


class SqlAlchemyRepository(Repository[T]):
    """Repository backed by a SQLAlchemy model; one short session per call"""

    def __init__(
        self,
        model: Type[Base],
        transformer: EntityTransformer[T],
        session_factory: Callable[[], Session],
    ):
        super().__init__(transformer)
        self.model = model
        self.session_factory = session_factory
        self._columns = {c.name for c in model.__table__.columns}

    def _to_row(self, obj: Any) -> dict:
        return {name: getattr(obj, name) for name in self._columns}

    async def get_all(self) -> List[T]:
        with self.session_factory() as db:
            return [self.transformer.to_internal(self._to_row(obj)) for obj in db.query(self.model).all()]

    async def get_by_id(self, record_id: str) -> Optional[T]:
        with self.session_factory() as db:
            obj = db.get(self.model, record_id)
            return self.transformer.to_internal(self._to_row(obj)) if obj else None

    async def upsert(self, record: T) -> T:
        row = self.transformer.to_external(record)
        values = {k: v for k, v in row.items() if k in self._columns}
        with self.session_factory() as db:
            try:
                db.merge(self.model(**values))
                db.commit()
            except Exception:
                db.rollback()
                raise
        return record

    async def delete(self, record_id: str) -> None:
        with self.session_factory() as db:
            obj = db.get(self.model, record_id)
            if obj is not None:
                db.delete(obj)
                db.commit()

    async def find_by(self, **filters: Any) -> List[T]:
        with self.session_factory() as db:
            query = db.query(self.model)
            for name, value in filters.items():
                query = query.filter(getattr(self.model, name) == value)
            return [self.transformer.to_internal(self._to_row(obj)) for obj in query.all()]
