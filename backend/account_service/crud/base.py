from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar
from sqlalchemy.orm import Session
from account_service.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Generic create/read/update/delete/paginate operations for one table.

    Filters are equality predicates passed as keyword arguments, e.g.
    ``crud.count(username="alice")``. Every write commits immediately; no
    operation here spans more than one statement in a transaction.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def _filtered(self, filters: Dict[str, Any]):
        query = self.db.query(self.model)
        for column, value in filters.items():
            query = query.filter(getattr(self.model, column) == value)
        return query

    def get(self, id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def get_one(self, **filters: Any) -> Optional[ModelType]:
        """First row matching all filters, or None"""
        return self._filtered(filters).first()

    def count(self, **filters: Any) -> int:
        return self._filtered(filters).count()

    def create(self, values: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**values)
        self.db.add(db_obj)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        # Refresh to load auto-generated fields (id, timestamps) from database
        self.db.refresh(db_obj)
        return db_obj

    def update_by_id(self, id: Any, values: Dict[str, Any]) -> int:
        """
        Overwrite the given columns on the row with this id.

        None values are skipped, so callers pass a full object and only the
        populated fields change. Returns the number of affected rows.
        """
        values = {key: value for key, value in values.items() if value is not None}
        if not values:
            return 0
        try:
            updated = (
                self.db.query(self.model)
                .filter(self.model.id == id)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        # Drop cached instances so the next read sees the new row
        self.db.expire_all()
        return updated

    def delete_by_id(self, id: Any) -> int:
        """Hard delete. Returns the number of affected rows (0 if absent)"""
        try:
            deleted = (
                self.db.query(self.model)
                .filter(self.model.id == id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.expire_all()
        return deleted

    def paginate(
        self, page_num: int, page_size: int, **filters: Any
    ) -> Tuple[int, List[ModelType]]:
        """
        Return (total, records) for a 1-based page.

        No ORDER BY is applied; rows come back in the store's native order.
        """
        query = self._filtered(filters)
        total = query.count()
        records = query.offset((page_num - 1) * page_size).limit(page_size).all()
        return total, records
