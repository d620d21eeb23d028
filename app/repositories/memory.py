"""
In-Memory Repository - rows kept as snake_case dicts, same boundary as the database
"""
import copy
from typing import Any, Dict, List, Optional

from .base import Repository, T
from .transformers import EntityTransformer, Row


class InMemoryRepository(Repository[T]):

    def __init__(self, transformer: EntityTransformer[T]):
        super().__init__(transformer)
        self.rows: Dict[str, Row] = {}

    async def get_all(self) -> List[T]:
        return [self.transformer.to_internal(copy.deepcopy(row)) for row in self.rows.values()]

    async def get_by_id(self, record_id: str) -> Optional[T]:
        row = self.rows.get(record_id)
        return self.transformer.to_internal(copy.deepcopy(row)) if row is not None else None

    async def upsert(self, record: T) -> T:
        row = self.transformer.to_external(record)
        self.rows[row["id"]] = copy.deepcopy(row)
        return record

    async def delete(self, record_id: str) -> None:
        self.rows.pop(record_id, None)

    async def find_by(self, **filters: Any) -> List[T]:
        return [
            self.transformer.to_internal(copy.deepcopy(row))
            for row in self.rows.values()
            if all(row.get(name) == value for name, value in filters.items())
        ]
