from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from fiverivers.core.logging_config import logger
from fiverivers.crud import dispatcher as dispatcher_crud
from fiverivers.crud import invoice as invoice_crud
from fiverivers.crud import job as job_crud
from fiverivers.models.invoice import Invoice, InvoiceState
from fiverivers.models.job import Job, InvoiceStatus
from fiverivers.schemas.invoice import InvoiceCreate, InvoiceUpdate
from fiverivers.services.base import EntityService, read_guard, write_guard
from fiverivers.services.calculation import calculate_invoice_totals, generate_invoice_number
from fiverivers.utils.pagination import PageParams, build_page

INVALID_JOBS = "Some jobs are invalid or already invoiced"


def month_range(month: Optional[int], year: Optional[int]) -> Tuple[Optional[date], Optional[date]]:
    """
    Half-open date range ``[start, end)`` for a month/year filter.

    A year alone covers the whole year, a month alone falls in the current
    year. Returns ``(None, None)`` when neither is given.
    """
    if not month and not year:
        return None, None
    year = year or date.today().year
    if not month:
        return date(year, 1, 1), date(year + 1, 1, 1)
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


class InvoiceService(EntityService[Invoice]):
    """
    Service layer for invoices.

    An invoice bills a set of jobs from one dispatcher. Creating or editing
    it recomputes the totals, rewrites its lines and moves the jobs' invoice
    status along with it.
    """

    label = "invoice"
    plural = "invoices"

    def _load_jobs(self, db: Session, job_ids: List[int], invoice_id: Optional[int] = None) -> List[Job]:
        """
        Fetch the jobs for an invoice, rejecting unknown ones and jobs billed elsewhere.

        Jobs already attached to ``invoice_id`` are allowed.
        """
        unique_ids = list(dict.fromkeys(job_ids))
        jobs = job_crud.get_multi_by_ids(db, job_ids=unique_ids)
        if len(jobs) != len(unique_ids):
            raise self.bad_request(INVALID_JOBS)
        for job in jobs:
            if job.invoice_id is not None and job.invoice_id != invoice_id:
                raise self.bad_request(INVALID_JOBS)
        return jobs

    def _single_dispatcher(self, db: Session, jobs: List[Job]):
        dispatcher_ids = {job.dispatcher_id for job in jobs}
        if len(dispatcher_ids) != 1 or None in dispatcher_ids:
            raise self.bad_request("All jobs must have the same dispatcher")
        dispatcher = dispatcher_crud.get(db=db, id=dispatcher_ids.pop())
        if not dispatcher:
            raise self.bad_request("Dispatcher not found")
        return dispatcher

    def _check_number(self, db: Session, invoice_number: str, current_id: Optional[int] = None) -> None:
        existing = invoice_crud.get_by_number(db, invoice_number=invoice_number)
        if existing and existing.id != current_id:
            raise self.bad_request(f"Invoice number {invoice_number} already exists")

    def create(self, db: Session, obj_in: InvoiceCreate) -> Invoice:
        """
        Create an invoice from a set of un-invoiced jobs.

        Raises:
            HTTPException 400: If jobs are missing, already invoiced or span
                several dispatchers, or the invoice number is taken
        """
        jobs = self._load_jobs(db, obj_in.job_ids)
        dispatcher = self._single_dispatcher(db, jobs)

        invoice_number = obj_in.invoice_number or generate_invoice_number(
            dispatcher.name,
            [job.unit.name if job.unit else None for job in jobs],
            [job.job_date for job in jobs],
        )
        self._check_number(db, invoice_number)

        percent = obj_in.dispatch_percent
        if percent is None:
            percent = dispatcher.commission_percent
        totals = calculate_invoice_totals([job.job_gross_amount for job in jobs], percent)

        with write_guard(db, "create invoice"):
            invoice = Invoice(
                invoice_number=invoice_number,
                invoice_date=obj_in.invoice_date,
                dispatcher_id=dispatcher.id,
                status=InvoiceState.pending.value,
                sub_total=totals.sub_total,
                dispatch_percent=totals.dispatch_percent,
                commission=totals.commission,
                hst=totals.hst,
                total=totals.total,
                billed_to=obj_in.billed_to or dispatcher.name,
                billed_email=obj_in.billed_email or dispatcher.email,
            )
            db.add(invoice)
            db.flush()
            invoice_crud.replace_lines(db, invoice=invoice, jobs=jobs)
            job_crud.attach_to_invoice(
                db,
                job_ids=[job.id for job in jobs],
                invoice_id=invoice.id,
                invoice_status=InvoiceStatus.invoiced.value,
            )
            db.commit()
            invoice_id = invoice.id

        logger.info(f"Invoice {invoice_number} billed {len(jobs)} jobs, total {totals.total}")
        return self.get(db=db, id=invoice_id)

    def update(self, db: Session, id: int, obj_in: InvoiceUpdate) -> Invoice:
        """
        Update an invoice.

        Fields that are not sent keep their current values. When ``jobIds``
        is sent it replaces the billed jobs; removed jobs go back to Pending.
        A new ``status`` is copied onto every billed job.

        Raises:
            HTTPException 404: If invoice not found
            HTTPException 400: If the job list is empty or invalid
        """
        invoice = self.get(db=db, id=id)
        data = obj_in.model_dump(exclude_unset=True)

        job_ids = data.pop("job_ids", None)
        if job_ids is None:
            job_ids = [job.id for job in invoice.jobs]
        if not job_ids:
            raise self.bad_request("An invoice needs at least one job")

        jobs = self._load_jobs(db, job_ids, invoice_id=invoice.id)
        dispatcher = self._single_dispatcher(db, jobs)

        if data.get("invoice_number"):
            self._check_number(db, data["invoice_number"], current_id=invoice.id)

        percent = data.get("dispatch_percent")
        if percent is None:
            percent = invoice.dispatch_percent
        totals = calculate_invoice_totals([job.job_gross_amount for job in jobs], percent)

        new_status = data.pop("status", None)
        values: Dict[str, Any] = {
            field: value for field, value in data.items() if value is not None
        }
        values.update(
            dispatcher_id=dispatcher.id,
            sub_total=totals.sub_total,
            dispatch_percent=totals.dispatch_percent,
            commission=totals.commission,
            hst=totals.hst,
            total=totals.total,
        )
        if new_status is not None:
            values["status"] = InvoiceState(new_status).value

        kept_ids = [job.id for job in jobs]
        added_ids = [job.id for job in jobs if job.invoice_id != invoice.id]

        with write_guard(db, "update invoice"):
            for field, value in values.items():
                setattr(invoice, field, value)
            job_crud.detach_from_invoice(db, invoice_id=invoice.id, keep_job_ids=kept_ids)
            invoice_crud.replace_lines(db, invoice=invoice, jobs=jobs)
            # Any sent status, Pending included, is copied onto jobs that stay attached
            if new_status is not None:
                job_crud.attach_to_invoice(
                    db, job_ids=kept_ids, invoice_id=invoice.id, invoice_status=values["status"]
                )
            else:
                job_crud.attach_to_invoice(
                    db,
                    job_ids=added_ids,
                    invoice_id=invoice.id,
                    invoice_status=InvoiceStatus.invoiced.value,
                )
            db.commit()

        db.expire_all()
        return self.get(db=db, id=id)

    def refresh_totals(self, db: Session, invoice_id: int) -> None:
        """
        Recompute an invoice's totals and lines from the jobs attached to it now.

        Called after an attached job is re-priced or deleted. Flushes but
        does not commit; the caller owns the transaction.
        """
        invoice = db.get(Invoice, invoice_id)
        if invoice is None:
            return
        db.flush()
        jobs = job_crud.get_by_invoice(db, invoice_id=invoice_id)
        totals = calculate_invoice_totals([job.job_gross_amount for job in jobs], invoice.dispatch_percent)
        invoice.sub_total = totals.sub_total
        invoice.commission = totals.commission
        invoice.hst = totals.hst
        invoice.total = totals.total
        invoice_crud.replace_lines(db, invoice=invoice, jobs=jobs)
        db.expire(invoice, ["jobs"])
        logger.info(f"Invoice {invoice.invoice_number} re-totalled over {len(jobs)} jobs: {totals.total}")

    def delete(self, db: Session, id: int) -> None:
        """
        Delete an invoice and release its jobs back to Pending.

        Raises:
            HTTPException 404: If invoice not found
        """
        invoice = self.get(db=db, id=id)
        invoice_number = invoice.invoice_number
        with write_guard(db, "delete invoice"):
            released = job_crud.detach_from_invoice(db, invoice_id=invoice.id)
            db.delete(invoice)
            db.commit()
        logger.info(f"Invoice {invoice_number} deleted, {released} jobs released")

    def list_jobs(
        self,
        db: Session,
        id: int,
        params: PageParams,
        month: Optional[int] = None,
        year: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Page through the jobs billed on an invoice.

        Raises:
            HTTPException 404: If invoice not found
            HTTPException 400: If month is outside 1-12
        """
        self.get(db=db, id=id)
        if month is not None and not 1 <= month <= 12:
            raise self.bad_request("Month must be between 1 and 12")
        date_from, date_to = month_range(month, year)
        with read_guard("fetch invoice jobs"):
            items, total = job_crud.get_invoice_page(
                db,
                invoice_id=id,
                skip=params.skip,
                limit=params.limit,
                date_from=date_from,
                date_to=date_to,
            )
        return build_page(items, total, params)

    def find(self, db: Session, dispatcher_id: Optional[int] = None, status: Optional[str] = None) -> List[Invoice]:
        with read_guard("fetch invoices"):
            return self.crud.get_filtered(db, dispatcher_id=dispatcher_id, status=status)


# Create a singleton instance
invoice_service = InvoiceService(invoice_crud)
