from sqlalchemy.orm import Session
from fiverivers.crud import company as company_crud
from fiverivers.models.company import Company
from fiverivers.services.base import EntityService


class CompanyService(EntityService[Company]):
    """
    Service layer for customer companies.

    A company that still owns job types cannot be deleted.
    """

    label = "company"
    plural = "companies"

    def before_delete(self, db: Session, obj: Company) -> None:
        if self.crud.count_job_types(db, company_id=obj.id):
            raise self.bad_request("Failed to delete company: job types still reference it")


# Create a singleton instance
company_service = CompanyService(company_crud)
