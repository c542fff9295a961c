from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select
from fiverivers.crud.base import CRUDBase
from fiverivers.models.job_type import JobType
from fiverivers.schemas.job_type import JobTypeCreate, JobTypeUpdate


class CRUDJobType(CRUDBase[JobType, JobTypeCreate, JobTypeUpdate]):
    """
    CRUD operations for JobType model.
    """

    search_fields = ("title", "start_location", "end_location")
    order_by = (JobType.title.asc(), JobType.id.asc())

    def filtered_query(self, *, search=None, filters=None):
        filters = dict(filters or {})
        dispatch_type = filters.pop("dispatch_type", None)
        stmt = super().filtered_query(search=search, filters=filters).options(
            selectinload(JobType.company)
        )
        if dispatch_type:
            stmt = stmt.where(JobType.dispatch_type.ilike(dispatch_type))
        return stmt

    def get_by_company(self, db: Session, *, company_id: Optional[int] = None) -> List[JobType]:
        stmt = select(JobType).order_by(*self.order_by)
        if company_id is not None:
            stmt = stmt.where(JobType.company_id == company_id)
        return list(db.execute(stmt).scalars().all())


# Create a singleton instance
job_type = CRUDJobType(JobType)
