from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, desc, func, or_, delete
from fiverivers.crud.base import CRUDBase
from fiverivers.models.dispatcher import Dispatcher
from fiverivers.models.invoice import Invoice, InvoiceLine
from fiverivers.models.job import Job
from fiverivers.models.job_type import JobType
from fiverivers.schemas.invoice import InvoiceCreate, InvoiceUpdate


class CRUDInvoice(CRUDBase[Invoice, InvoiceCreate, InvoiceUpdate]):
    """
    CRUD operations for Invoice model.

    Totals and job attachment are handled by the invoice service; this class
    only reads and writes rows.
    """

    order_by = (desc(Invoice.invoice_date), desc(Invoice.id))

    related = (
        selectinload(Invoice.dispatcher),
        selectinload(Invoice.lines),
        selectinload(Invoice.jobs).selectinload(Job.job_type).selectinload(JobType.company),
        selectinload(Invoice.jobs).selectinload(Job.driver),
        selectinload(Invoice.jobs).selectinload(Job.unit),
        selectinload(Invoice.jobs).selectinload(Job.dispatcher),
    )

    def get(self, db: Session, id: int) -> Optional[Invoice]:
        stmt = select(Invoice).options(*self.related).where(Invoice.id == id)
        return db.execute(stmt).scalar_one_or_none()

    def search_clause(self, term: str):
        pattern = f"%{term}%"
        return or_(
            Invoice.invoice_number.ilike(pattern),
            Invoice.billed_to.ilike(pattern),
            Invoice.billed_email.ilike(pattern),
            Dispatcher.name.ilike(pattern),
        )

    def filtered_query(self, *, search=None, filters=None):
        stmt = select(Invoice).options(*self.related)
        if search:
            stmt = stmt.outerjoin(Dispatcher, Invoice.dispatcher_id == Dispatcher.id).where(
                self.search_clause(search)
            )
        for field, value in (filters or {}).items():
            if value is not None:
                stmt = stmt.where(getattr(Invoice, field) == value)
        return stmt

    def get_filtered(
        self,
        db: Session,
        *,
        dispatcher_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[Invoice]:
        """Invoices of a dispatcher and/or in one status, newest first."""
        stmt = self.filtered_query(filters={"dispatcher_id": dispatcher_id, "status": status})
        return list(db.execute(stmt.order_by(*self.order_by)).scalars().all())

    def count_between(self, db: Session, *, date_from: date, date_to: date) -> int:
        """Number of invoices dated within [date_from, date_to)."""
        stmt = select(func.count(Invoice.id)).where(
            Invoice.invoice_date >= date_from, Invoice.invoice_date < date_to
        )
        return db.execute(stmt).scalar_one()

    def get_by_number(self, db: Session, *, invoice_number: str) -> Optional[Invoice]:
        stmt = select(Invoice).where(Invoice.invoice_number == invoice_number)
        return db.execute(stmt).scalar_one_or_none()

    def replace_lines(self, db: Session, *, invoice: Invoice, jobs: List[Job]) -> None:
        """
        Drop all existing lines of ``invoice`` and add one line per job.

        Does not commit.
        """
        db.execute(delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice.id))
        db.expire(invoice, ["lines"])
        for job in jobs:
            db.add(InvoiceLine(
                invoice_id=invoice.id,
                job_id=job.id,
                line_amount=job.job_gross_amount or 0,
            ))


# Create a singleton instance
invoice = CRUDInvoice(Invoice)
