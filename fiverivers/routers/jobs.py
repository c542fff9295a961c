from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.models.job import InvoiceStatus
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.job import JobCreate, JobUpdate, JobResponse
from fiverivers.services.job import job_service
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[JobResponse])
def list_jobs(
    search: Optional[str] = None,
    dispatcher_id: Optional[int] = Query(None, alias="dispatcherId"),
    unit_id: Optional[int] = Query(None, alias="unitId"),
    driver_id: Optional[int] = Query(None, alias="driverId"),
    invoice_status: Optional[InvoiceStatus] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of jobs, newest job date first.

    Args:
        search: Matches job type title or driver, unit or dispatcher name
        dispatcher_id: Only jobs of this dispatcher
        unit_id: Only jobs run with this unit
        driver_id: Only jobs of this driver
        invoice_status: Only jobs in this invoice status
        params: ``page`` and ``pageSize`` query parameters
    """
    filters = {
        "dispatcher_id": dispatcher_id,
        "unit_id": unit_id,
        "driver_id": driver_id,
        "invoice_status": invoice_status.value if invoice_status else None,
    }
    return job_service.list_page(db=db, params=params, search=search, filters=filters)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a specific job by ID.

    Raises:
        HTTPException 404: If job not found
    """
    return job_service.get(db=db, id=job_id)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(job_data: JobCreate, db: Session = Depends(get_db)):
    """
    Create a new job.

    When ``jobGrossAmount`` is omitted it is priced from the job type.

    Raises:
        HTTPException 400: If the job type, driver, unit or dispatcher does not exist
    """
    try:
        logger.info(
            f"Creating job: date={job_data.job_date}, job_type_id={job_data.job_type_id}, "
            f"driver_id={job_data.driver_id}"
        )
        result = job_service.create(db=db, obj_in=job_data)
        logger.info(f"Job created successfully: id={result.id}, gross={result.job_gross_amount}")
        return result
    except Exception as e:
        logger.error(f"Error creating job: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{job_id}", response_model=JobResponse)
def update_job(job_id: int, job_data: JobUpdate, db: Session = Depends(get_db)):
    """
    Update an existing job. Changing hours, loads, weights or the job type
    re-prices it unless ``jobGrossAmount`` is sent as well.

    Raises:
        HTTPException 404: If job not found
        HTTPException 400: If a referenced record does not exist
    """
    logger.info(f"Updating job: id={job_id}")
    return job_service.update(db=db, id=job_id, obj_in=job_data)


@router.patch("/{job_id}/toggle-payment", response_model=JobResponse)
def toggle_job_payment(job_id: int, db: Session = Depends(get_db)):
    """
    Flip the job's ``paymentReceived`` flag.
    """
    logger.info(f"Toggling payment received for job {job_id}")
    return job_service.toggle_payment_received(db=db, id=job_id)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    logger.info(f"Deleting job: id={job_id}")
    job_service.delete(db=db, id=job_id)
    return {"message": "Job deleted"}
