from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Sequence, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, Select
from pydantic import BaseModel
from fiverivers.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic CRUD class shared by every admin-portal entity.

    Subclasses declare which columns the free-text ``search`` parameter
    matches and how list results are ordered.

    Type Parameters:
        ModelType: SQLAlchemy model class
        CreateSchemaType: Pydantic schema for creating records
        UpdateSchemaType: Pydantic schema for updating records
    """

    search_fields: Sequence[str] = ()
    order_by: Sequence[Any] = ()

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD object with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get(self, db: Session, id: int) -> Optional[ModelType]:
        """
        Retrieve a single record by ID.

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        return db.get(self.model, id)

    def search_clause(self, term: str):
        """Case-insensitive substring match across ``search_fields``."""
        pattern = f"%{term}%"
        return or_(*[getattr(self.model, field).ilike(pattern) for field in self.search_fields])

    def filtered_query(
        self,
        *,
        search: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Select:
        """
        Build the base SELECT for list endpoints.

        Filters with a ``None`` value are ignored so routers can pass query
        parameters through untouched.
        """
        stmt = select(self.model)
        if search and self.search_fields:
            stmt = stmt.where(self.search_clause(search))
        for field, value in (filters or {}).items():
            if value is not None:
                stmt = stmt.where(getattr(self.model, field) == value)
        return stmt

    def get_page(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 20,
        search: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Tuple[List[ModelType], int]:
        """
        Retrieve one page of records plus the total number of matches.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return
            search: Optional free-text search term
            filters: Optional exact-match column filters

        Returns:
            Tuple of (records, total)
        """
        stmt = self.filtered_query(search=search, filters=filters)
        return self.paginate_query(db, stmt, skip=skip, limit=limit)

    def paginate_query(
        self,
        db: Session,
        stmt: Select,
        *,
        skip: int,
        limit: int
    ) -> Tuple[List[ModelType], int]:
        """Count all rows matched by ``stmt`` and return the requested slice."""
        total = db.execute(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        ).scalar_one()

        stmt = stmt.order_by(*self.order_by).offset(skip).limit(limit)
        result = db.execute(stmt)
        return list(result.scalars().all()), total

    def search(self, db: Session, *, term: str, limit: int = 10) -> List[ModelType]:
        """First ``limit`` records matching ``term``, in list order."""
        stmt = self.filtered_query(search=term).order_by(*self.order_by).limit(limit)
        return list(db.execute(stmt).scalars().all())

    def count(self, db: Session) -> int:
        return db.execute(select(func.count()).select_from(self.model)).scalar_one()

    def get_multi(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[ModelType]:
        """
        Retrieve multiple records with offset pagination and default ordering.
        """
        stmt = select(self.model).order_by(*self.order_by).offset(skip).limit(limit)
        result = db.execute(stmt)
        return list(result.scalars().all())

    def create(
        self,
        db: Session,
        *,
        obj_in: CreateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        Create a new record.

        Args:
            db: Database session
            obj_in: Pydantic schema or dict with creation data

        Returns:
            Created model instance
        """
        obj_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**obj_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        Update an existing record.

        Only fields explicitly set on the schema are written.

        Args:
            db: Database session
            db_obj: Existing model instance to update
            obj_in: Pydantic schema or dict with update data

        Returns:
            Updated model instance
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, id: int) -> Optional[ModelType]:
        """
        Delete a record by ID.

        Args:
            db: Database session
            id: Record ID to delete

        Returns:
            Deleted model instance or None if not found
        """
        obj = self.get(db=db, id=id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj

    def exists(self, db: Session, id: Optional[int]) -> bool:
        if id is None:
            return False
        stmt = select(func.count()).select_from(self.model).where(self.model.id == id)
        return db.execute(stmt).scalar_one() > 0
