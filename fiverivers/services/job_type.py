from typing import Any, Dict
from sqlalchemy.orm import Session
from fiverivers.crud import company as company_crud
from fiverivers.crud import job_type as job_type_crud
from fiverivers.models.job_type import JobType
from fiverivers.services.base import EntityService


class JobTypeService(EntityService[JobType]):
    """
    Service layer for job types.

    Every job type belongs to an existing company.
    """

    label = "job type"
    plural = "job types"

    def validate(self, db: Session, data: Dict[str, Any]) -> None:
        if "company_id" in data:
            if data["company_id"] is None:
                raise self.bad_request("Job type must belong to a company")
            self.require(db, company_crud, data["company_id"], "Company")


# Create a singleton instance
job_type_service = JobTypeService(job_type_crud)
