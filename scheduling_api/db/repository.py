"""
Thin data-access wrapper used by the business functions.

Writes only flush; committing is the caller's job, through
`scheduling_api.db.base.transaction`.
"""
from __future__ import annotations

from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from scheduling_api.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    def __init__(self, db: Session, model: type[ModelT]):
        self.db = db
        self.model = model

    # --- reads -------------------------------------------------------------

    def find_unique(self, id: int) -> Optional[ModelT]:
        return self.db.get(self.model, id)

    def find_first(self, *criteria: Any, **filters: Any) -> Optional[ModelT]:
        stmt = select(self.model).where(*criteria).filter_by(**filters).limit(1)
        return self.db.scalars(stmt).first()

    def find_many(
        self,
        criteria: Sequence[Any] = (),
        *,
        skip: int = 0,
        take: Optional[int] = None,
        order_by: Any = None,
        options: Sequence[Any] = (),
    ) -> list[ModelT]:
        stmt = select(self.model).where(*criteria)
        if options:
            stmt = stmt.options(*options)
        if order_by is None:
            order_by = self.model.id
        if not isinstance(order_by, (list, tuple)):
            order_by = (order_by,)
        stmt = stmt.order_by(*order_by)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        return list(self.db.scalars(stmt).unique())

    def count(self, criteria: Sequence[Any] = ()) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return self.db.scalar(stmt) or 0

    def missing_ids(self, ids: Iterable[int]) -> list[int]:
        """Ids from `ids` that have no row, in input order."""
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return []
        found = set(self.db.scalars(select(self.model.id).where(self.model.id.in_(wanted))))
        return [i for i in wanted if i not in found]

    # --- writes ------------------------------------------------------------

    def create(self, **values: Any) -> ModelT:
        instance = self.model(**values)
        self.db.add(instance)
        self.db.flush()
        return instance

    def update(self, instance: ModelT, **values: Any) -> ModelT:
        for key, value in values.items():
            setattr(instance, key, value)
        self.db.flush()
        return instance

    def delete(self, instance: ModelT) -> None:
        self.db.delete(instance)
        self.db.flush()
