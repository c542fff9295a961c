from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fiverivers.crud.base import CRUDBase
from fiverivers.models.company import Company
from fiverivers.models.job import Job
from fiverivers.models.job_type import JobType
from fiverivers.schemas.company import CompanyCreate, CompanyUpdate


class CRUDCompany(CRUDBase[Company, CompanyCreate, CompanyUpdate]):
    """
    CRUD operations for Company model.
    """

    search_fields = ("name", "description", "industry", "email", "phone")
    order_by = (Company.name.asc(), Company.id.asc())

    def count_job_types(self, db: Session, *, company_id: int) -> int:
        stmt = select(func.count(JobType.id)).where(JobType.company_id == company_id)
        return db.execute(stmt).scalar_one()

    def top_by_jobs(self, db: Session, *, limit: int = 5) -> List[Company]:
        """Companies with the most jobs across all their job types, busiest first."""
        job_count = func.count(Job.id)
        stmt = (
            select(Company)
            .join(JobType, JobType.company_id == Company.id)
            .join(Job, Job.job_type_id == JobType.id)
            .group_by(Company.id)
            .order_by(job_count.desc(), Company.name.asc())
            .limit(limit)
        )
        return list(db.execute(stmt).scalars().all())


# Create a singleton instance
company = CRUDCompany(Company)
