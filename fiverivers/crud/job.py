from datetime import date
from typing import Optional, Dict, Any, List
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, desc, distinct, func, or_, update
from fiverivers.crud.base import CRUDBase
from fiverivers.models.dispatcher import Dispatcher
from fiverivers.models.driver import Driver
from fiverivers.models.job import Job, InvoiceStatus
from fiverivers.models.job_type import JobType
from fiverivers.models.unit import Unit
from fiverivers.schemas.job import JobCreate, JobUpdate


class CRUDJob(CRUDBase[Job, JobCreate, JobUpdate]):
    """
    CRUD operations for Job model.

    Free-text search matches the names of the related job type, driver,
    unit and dispatcher rather than columns on the job itself.
    """

    order_by = (desc(Job.job_date), desc(Job.id))

    related = (
        selectinload(Job.job_type),
        selectinload(Job.driver),
        selectinload(Job.unit),
        selectinload(Job.dispatcher),
        selectinload(Job.invoice),
    )

    def search_clause(self, term: str):
        pattern = f"%{term}%"
        return or_(
            JobType.title.ilike(pattern),
            Driver.name.ilike(pattern),
            Unit.name.ilike(pattern),
            Dispatcher.name.ilike(pattern),
        )

    def filtered_query(
        self,
        *,
        search: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None
    ):
        stmt = select(Job).options(*self.related)
        if search:
            stmt = (
                stmt.outerjoin(JobType, Job.job_type_id == JobType.id)
                .outerjoin(Driver, Job.driver_id == Driver.id)
                .outerjoin(Unit, Job.unit_id == Unit.id)
                .outerjoin(Dispatcher, Job.dispatcher_id == Dispatcher.id)
                .where(self.search_clause(search))
            )
        for field, value in (filters or {}).items():
            if value is not None:
                stmt = stmt.where(getattr(Job, field) == value)
        return stmt

    def get_filtered(
        self,
        db: Session,
        *,
        date_start: Optional[date] = None,
        date_end: Optional[date] = None,
        dispatch_type: Optional[str] = None,
        invoice_status: Optional[str] = None,
        driver_id: Optional[int] = None,
        unit_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Job]:
        """
        Filter jobs by date range, job type dispatch type and assignment.

        Used by the GraphQL ``jobs`` query, which takes limit/offset rather
        than page numbers.
        """
        stmt = select(Job).options(*self.related)
        if date_start is not None:
            stmt = stmt.where(Job.job_date >= date_start)
        if date_end is not None:
            stmt = stmt.where(Job.job_date <= date_end)
        if dispatch_type:
            stmt = stmt.join(JobType, Job.job_type_id == JobType.id).where(
                JobType.dispatch_type.ilike(dispatch_type)
            )
        if invoice_status:
            stmt = stmt.where(Job.invoice_status == invoice_status)
        if driver_id is not None:
            stmt = stmt.where(Job.driver_id == driver_id)
        if unit_id is not None:
            stmt = stmt.where(Job.unit_id == unit_id)

        stmt = stmt.order_by(*self.order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(db.execute(stmt).scalars().all())

    def get_multi_by_ids(
        self,
        db: Session,
        *,
        job_ids: List[int],
        uninvoiced_only: bool = False
    ) -> List[Job]:
        """
        Bulk fetch jobs by IDs.

        Args:
            db: Database session
            job_ids: List of job IDs to fetch
            uninvoiced_only: Skip jobs already attached to an invoice

        Returns:
            List of Job instances ordered by job date
        """
        stmt = select(Job).options(*self.related).where(Job.id.in_(job_ids))
        if uninvoiced_only:
            stmt = stmt.where(Job.invoice_id.is_(None))
        stmt = stmt.order_by(Job.job_date, Job.id)
        return list(db.execute(stmt).scalars().all())

    def stats(
        self,
        db: Session,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Aggregate job figures, optionally within [date_from, date_to).

        Returns:
            Dict with total_jobs, total_amount, average_job_value and the
            number of distinct dispatchers and drivers on those jobs
        """
        stmt = select(
            func.count(Job.id),
            func.coalesce(func.sum(Job.job_gross_amount), 0),
            func.coalesce(func.avg(Job.job_gross_amount), 0),
            func.count(distinct(Job.dispatcher_id)),
            func.count(distinct(Job.driver_id)),
        )
        if date_from is not None:
            stmt = stmt.where(Job.job_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Job.job_date < date_to)
        total_jobs, total_amount, average, dispatchers, drivers = db.execute(stmt).one()
        return {
            "total_jobs": total_jobs,
            "total_amount": float(total_amount),
            "average_job_value": float(average),
            "total_dispatchers": dispatchers,
            "total_drivers": drivers,
        }

    def get_by_invoice(self, db: Session, *, invoice_id: int) -> List[Job]:
        """Jobs currently attached to an invoice, ordered by job date."""
        stmt = select(Job).where(Job.invoice_id == invoice_id).order_by(Job.job_date, Job.id)
        return list(db.execute(stmt).scalars().all())

    def get_invoice_page(
        self,
        db: Session,
        *,
        invoice_id: int,
        skip: int = 0,
        limit: int = 20,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ):
        """Page through the jobs of one invoice, optionally within [date_from, date_to)."""
        filters = {"invoice_id": invoice_id}
        stmt = self.filtered_query(filters=filters)
        if date_from is not None:
            stmt = stmt.where(Job.job_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Job.job_date < date_to)
        return self.paginate_query(db, stmt, skip=skip, limit=limit)

    def attach_to_invoice(
        self,
        db: Session,
        *,
        job_ids: List[int],
        invoice_id: int,
        invoice_status: Optional[str] = None
    ) -> int:
        """
        Point jobs at an invoice, optionally setting their invoice status.

        Does not commit; the caller owns the transaction.
        """
        if not job_ids:
            return 0
        values: Dict[str, Any] = {"invoice_id": invoice_id}
        if invoice_status is not None:
            values["invoice_status"] = invoice_status
        result = db.execute(
            update(Job).where(Job.id.in_(job_ids)).values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def detach_from_invoice(
        self,
        db: Session,
        *,
        invoice_id: int,
        keep_job_ids: Optional[List[int]] = None
    ) -> int:
        """
        Release jobs from an invoice and reset them to Pending.

        Jobs listed in ``keep_job_ids`` stay attached. Does not commit.
        """
        stmt = update(Job).where(Job.invoice_id == invoice_id)
        if keep_job_ids:
            stmt = stmt.where(Job.id.not_in(keep_job_ids))
        result = db.execute(
            stmt.values(invoice_id=None, invoice_status=InvoiceStatus.pending.value)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount


# Create a singleton instance
job = CRUDJob(Job)
