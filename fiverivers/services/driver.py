from typing import List
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from fiverivers.crud import driver as driver_crud
from fiverivers.crud import driver_rate as driver_rate_crud
from fiverivers.crud import job_type as job_type_crud
from fiverivers.models.driver import Driver, DriverRate
from fiverivers.schemas.driver import DriverListItem, DriverRateCreate
from fiverivers.services.base import EntityService, read_guard, write_guard


class DriverService(EntityService[Driver]):
    """
    Service layer for drivers and their per-job-type rates.
    """

    label = "driver"
    plural = "drivers"

    def __init__(self):
        super().__init__(driver_crud)
        self.rates = driver_rate_crud

    def decorate(self, db, items):
        counts = self.crud.active_job_counts(db, driver_ids=[d.id for d in items])
        rows = []
        for driver in items:
            row = DriverListItem.model_validate(driver)
            row.active_jobs_count = counts.get(driver.id, 0)
            rows.append(row)
        return rows

    def get_rates(self, db: Session, driver_id: int) -> List[DriverRate]:
        """
        List the rates configured for a driver.

        Raises:
            HTTPException 404: If driver not found
        """
        self.get(db=db, id=driver_id)
        with read_guard("fetch driver rates"):
            return self.rates.get_by_driver(db, driver_id=driver_id)

    def add_rate(self, db: Session, driver_id: int, rate_in: DriverRateCreate) -> DriverRate:
        """
        Attach a rate for one job type to a driver.

        Raises:
            HTTPException 404: If driver not found
            HTTPException 400: If the job type does not exist
        """
        self.get(db=db, id=driver_id)
        self.require(db, job_type_crud, rate_in.job_type_id, "Job type")
        data = rate_in.model_dump()
        data["driver_id"] = driver_id
        with write_guard(db, "create driver rate"):
            return self.rates.create(db=db, obj_in=data)

    def delete_rate(self, db: Session, driver_id: int, rate_id: int) -> None:
        rate = self.rates.get(db=db, id=rate_id)
        if not rate or rate.driver_id != driver_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Driver rate not found"
            )
        with write_guard(db, "delete driver rate"):
            self.rates.delete(db=db, id=rate_id)


# Create a singleton instance
driver_service = DriverService()
