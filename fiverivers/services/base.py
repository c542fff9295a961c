from contextlib import contextmanager
from typing import Any, Dict, Generic, Optional, TypeVar
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fiverivers.core.logging_config import logger
from fiverivers.crud.base import CRUDBase
from fiverivers.utils.pagination import PageParams, build_page

ModelType = TypeVar("ModelType")


@contextmanager
def write_guard(db: Session, action: str):
    """
    Turn database failures during a write into HTTP 400.

    The session is rolled back so it stays usable for the rest of the
    request. HTTPExceptions raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {type(e).__name__}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to {action}"
        ) from e


@contextmanager
def read_guard(action: str):
    """Turn database failures during a read into HTTP 500."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Failed to {action}: {type(e).__name__}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}"
        ) from e


class EntityService(Generic[ModelType]):
    """
    Service layer shared by the admin-portal entities.

    Handles not-found checks and maps database errors onto the API's error
    contract. Subclasses add entity-specific rules by overriding the hooks
    or the public methods.
    """

    label = "record"
    plural = "records"

    def __init__(self, crud: CRUDBase):
        self.crud = crud

    def not_found(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{self.label.capitalize()} not found"
        )

    def get(self, db: Session, id: int) -> ModelType:
        """
        Get a record by ID.

        Raises:
            HTTPException 404: If the record does not exist
        """
        with read_guard(f"fetch {self.label}"):
            obj = self.crud.get(db=db, id=id)
        if not obj:
            raise self.not_found()
        return obj

    def list_page(
        self,
        db: Session,
        params: PageParams,
        search: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Get one page of records in the list envelope.

        Args:
            db: Database session
            params: Page number and size
            search: Optional free-text search term
            filters: Optional exact-match filters

        Returns:
            Dict with data, total, page, page_size and total_pages
        """
        with read_guard(f"fetch {self.plural}"):
            items, total = self.crud.get_page(
                db=db,
                skip=params.skip,
                limit=params.limit,
                search=search,
                filters=filters
            )
            items = self.decorate(db, items)
        return build_page(items, total, params)

    def decorate(self, db: Session, items):
        """Hook for adding computed columns to list rows."""
        return items

    def list_all(self, db: Session, skip: int = 0, limit: int = 100):
        with read_guard(f"fetch {self.plural}"):
            return self.crud.get_multi(db=db, skip=skip, limit=limit)

    def search(self, db: Session, term: str, limit: int = 10):
        """Quick search returning at most ``limit`` matches (at least one)."""
        with read_guard(f"search {self.plural}"):
            return self.crud.search(db=db, term=term, limit=max(1, limit))

    def validate(self, db: Session, data: Dict[str, Any]) -> None:
        """Hook for reference checks before create/update; raise HTTPException 400."""

    def create(self, db: Session, obj_in) -> ModelType:
        data = obj_in.model_dump()
        self.validate(db, data)
        with write_guard(db, f"create {self.label}"):
            return self.crud.create(db=db, obj_in=data)

    def update(self, db: Session, id: int, obj_in) -> ModelType:
        obj = self.get(db=db, id=id)
        data = obj_in.model_dump(exclude_unset=True)
        self.validate(db, data)
        with write_guard(db, f"update {self.label}"):
            return self.crud.update(db=db, db_obj=obj, obj_in=data)

    def before_delete(self, db: Session, obj: ModelType) -> None:
        """Hook for refusing a delete; raise HTTPException 400."""

    def delete(self, db: Session, id: int) -> None:
        """
        Delete a record.

        Raises:
            HTTPException 404: If the record does not exist
            HTTPException 400: If related rows still reference it
        """
        obj = self.get(db=db, id=id)
        self.before_delete(db, obj)
        with write_guard(db, f"delete {self.label}"):
            self.crud.delete(db=db, id=obj.id)

    def bad_request(self, detail: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    def require(self, db: Session, crud: CRUDBase, id: Optional[int], label: str) -> None:
        """Raise 400 unless ``id`` refers to an existing row of ``crud``'s model."""
        if id is not None and not crud.exists(db, id):
            raise self.bad_request(f"{label} {id} does not exist")
