"""
Repository Interface - async access to persisted entities
"""
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from .transformers import EntityTransformer

T = TypeVar("T", bound=BaseModel)


class Repository(ABC, Generic[T]):
    """
    Storage for one entity type. Rows are snake_case dicts at the storage side;
    callers only ever get domain schemas back.
    Storage errors propagate to the caller unchanged.
    """

    def __init__(self, transformer: EntityTransformer[T]):
        self.transformer = transformer

    @abstractmethod
    async def get_all(self) -> List[T]:
        pass

    @abstractmethod
    async def get_by_id(self, record_id: str) -> Optional[T]:
        pass

    @abstractmethod
    async def upsert(self, record: T) -> T:
        pass

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        pass

    @abstractmethod
    async def find_by(self, **filters: Any) -> List[T]:
        """Exact-match lookup on storage column names"""
        pass

    async def find_one(self, **filters: Any) -> Optional[T]:
        matches = await self.find_by(**filters)
        return matches[0] if matches else None
