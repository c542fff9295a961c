from typing import Dict, List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fiverivers.crud.base import CRUDBase
from fiverivers.models.driver import Driver, DriverRate
from fiverivers.models.job import Job, InvoiceStatus
from fiverivers.schemas.driver import DriverCreate, DriverUpdate, DriverRateCreate


class CRUDDriver(CRUDBase[Driver, DriverCreate, DriverUpdate]):
    """
    CRUD operations for Driver model.
    """

    search_fields = ("name", "email", "phone")
    order_by = (Driver.name.asc(), Driver.id.asc())

    def active_job_counts(self, db: Session, *, driver_ids: List[int]) -> Dict[int, int]:
        """
        Count jobs per driver that have not been invoiced yet.

        Args:
            db: Database session
            driver_ids: Drivers to count for

        Returns:
            Mapping of {driver_id: active job count}; drivers without jobs are absent
        """
        if not driver_ids:
            return {}
        stmt = (
            select(Job.driver_id, func.count(Job.id))
            .where(
                Job.driver_id.in_(driver_ids),
                Job.invoice_status != InvoiceStatus.invoiced.value
            )
            .group_by(Job.driver_id)
        )
        return dict(db.execute(stmt).all())


class CRUDDriverRate(CRUDBase[DriverRate, DriverRateCreate, DriverRateCreate]):
    """
    CRUD operations for per-job-type driver rates.
    """

    order_by = (DriverRate.id.asc(),)

    def get_by_driver(self, db: Session, *, driver_id: int) -> List[DriverRate]:
        stmt = select(DriverRate).where(DriverRate.driver_id == driver_id).order_by(*self.order_by)
        return list(db.execute(stmt).scalars().all())


# Create singleton instances
driver = CRUDDriver(Driver)
driver_rate = CRUDDriverRate(DriverRate)
