from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from fiverivers.crud import dispatcher as dispatcher_crud
from fiverivers.crud import driver as driver_crud
from fiverivers.crud import job as job_crud
from fiverivers.crud import job_type as job_type_crud
from fiverivers.crud import unit as unit_crud
from fiverivers.models.job import Job, InvoiceStatus
from fiverivers.schemas.job import JobCreate, JobUpdate
from fiverivers.services.base import EntityService, read_guard, write_guard
from fiverivers.services.calculation import calculate_job_gross_amount
from fiverivers.services.invoice import invoice_service

PRICING_FIELDS = ("job_type_id", "start_time", "end_time", "hours_of_job", "loads", "weight")


class JobService(EntityService[Job]):
    """
    Service layer for jobs.

    Checks that referenced records exist and prices the job from its job
    type whenever no explicit gross amount is supplied.
    """

    label = "job"
    plural = "jobs"

    def validate(self, db: Session, data: Dict[str, Any]) -> None:
        for field, crud, label in (
            ("job_type_id", job_type_crud, "Job type"),
            ("driver_id", driver_crud, "Driver"),
            ("unit_id", unit_crud, "Unit"),
        ):
            if field in data:
                if data[field] is None:
                    raise self.bad_request(f"{label} is required")
                self.require(db, crud, data[field], label)
        if data.get("dispatcher_id") is not None:
            self.require(db, dispatcher_crud, data["dispatcher_id"], "Dispatcher")

    def price(self, db: Session, values: Dict[str, Any]) -> float:
        job_type = job_type_crud.get(db=db, id=values["job_type_id"])
        return calculate_job_gross_amount(
            job_type.dispatch_type,
            job_type.rate_of_job,
            start_time=values.get("start_time"),
            end_time=values.get("end_time"),
            hours_of_job=values.get("hours_of_job"),
            loads=values.get("loads"),
            weight=values.get("weight"),
        )

    def create(self, db: Session, obj_in: JobCreate) -> Job:
        """
        Create a new job.

        Raises:
            HTTPException 400: If a referenced record does not exist
        """
        data = obj_in.model_dump()
        self.validate(db, data)
        data["invoice_status"] = InvoiceStatus(data["invoice_status"]).value
        if data.get("job_gross_amount") is None:
            data["job_gross_amount"] = self.price(db, data)
        with write_guard(db, "create job"):
            return self.crud.create(db=db, obj_in=data)

    def update(self, db: Session, id: int, obj_in: JobUpdate) -> Job:
        """
        Update a job, re-pricing it when a pricing input changes.

        Raises:
            HTTPException 404: If job not found
            HTTPException 400: If a referenced record does not exist
        """
        job = self.get(db=db, id=id)
        data = obj_in.model_dump(exclude_unset=True)
        self.validate(db, data)
        if data.get("invoice_status") is not None:
            data["invoice_status"] = InvoiceStatus(data["invoice_status"]).value
        elif "invoice_status" in data:
            del data["invoice_status"]

        if data.get("job_gross_amount") is None and any(f in data for f in PRICING_FIELDS):
            current = {field: getattr(job, field) for field in PRICING_FIELDS}
            current.update({k: v for k, v in data.items() if k in PRICING_FIELDS})
            data["job_gross_amount"] = self.price(db, current)

        invoice_id = job.invoice_id
        with write_guard(db, "update job"):
            if invoice_id is None:
                return self.crud.update(db=db, db_obj=job, obj_in=data)
            for field, value in data.items():
                setattr(job, field, value)
            invoice_service.refresh_totals(db, invoice_id)
            db.commit()
            db.refresh(job)
        return job

    def delete(self, db: Session, id: int) -> None:
        """
        Delete a job. An invoice it was billed on is re-totalled.

        Raises:
            HTTPException 404: If job not found
        """
        job = self.get(db=db, id=id)
        invoice_id = job.invoice_id
        with write_guard(db, "delete job"):
            db.delete(job)
            if invoice_id is not None:
                invoice_service.refresh_totals(db, invoice_id)
            db.commit()

    def toggle_payment_received(self, db: Session, id: int) -> Job:
        job = self.get(db=db, id=id)
        with write_guard(db, "toggle payment status"):
            return self.crud.update(
                db=db, db_obj=job, obj_in={"payment_received": not job.payment_received}
            )

    def set_invoice_status(self, db: Session, id: int, invoice_status: InvoiceStatus) -> Job:
        job = self.get(db=db, id=id)
        with write_guard(db, "update invoice status"):
            return self.crud.update(
                db=db, db_obj=job, obj_in={"invoice_status": InvoiceStatus(invoice_status).value}
            )

    def filter_jobs(self, db: Session, limit: Optional[int] = None, offset: Optional[int] = None, **filters):
        with read_guard("fetch jobs"):
            return self.crud.get_filtered(db, limit=limit, offset=offset, **filters)


# Create a singleton instance
job_service = JobService(job_crud)
