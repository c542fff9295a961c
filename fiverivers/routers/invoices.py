from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.models.invoice import InvoiceState
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.invoice import InvoiceCreate, InvoiceUpdate, InvoiceResponse
from fiverivers.schemas.job import JobResponse
from fiverivers.services.invoice import invoice_service
from fiverivers.services.invoice_pdf import render_invoice_pdf
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[InvoiceResponse])
def list_invoices(
    search: Optional[str] = None,
    dispatcher_id: Optional[int] = Query(None, alias="dispatcherId"),
    invoice_status: Optional[InvoiceState] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of invoices, newest invoice date first.

    Args:
        search: Matches invoice number, billed-to name or email, or dispatcher name
        dispatcher_id: Only invoices of this dispatcher
        invoice_status: Pending, Raised or Received
        params: ``page`` and ``pageSize`` query parameters
    """
    filters = {
        "dispatcher_id": dispatcher_id,
        "status": invoice_status.value if invoice_status else None,
    }
    return invoice_service.list_page(db=db, params=params, search=search, filters=filters)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """
    Retrieve an invoice with its lines and billed jobs.

    Raises:
        HTTPException 404: If invoice not found
    """
    return invoice_service.get(db=db, id=invoice_id)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(invoice_data: InvoiceCreate, db: Session = Depends(get_db)):
    """
    Bill a set of jobs from one dispatcher.

    The invoice number is generated when omitted, and the billed-to fields
    default to the dispatcher. Totals are computed from the jobs' gross
    amounts, the commission percentage and HST.

    Raises:
        HTTPException 400: If a job is missing or already invoiced, or the
            jobs belong to different dispatchers
    """
    try:
        logger.info(f"Creating invoice for jobs {invoice_data.job_ids}")
        result = invoice_service.create(db=db, obj_in=invoice_data)
        logger.info(f"Invoice created successfully: id={result.id}, number={result.invoice_number}")
        return result
    except Exception as e:
        logger.error(f"Error creating invoice: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(invoice_id: int, invoice_data: InvoiceUpdate, db: Session = Depends(get_db)):
    """
    Update an invoice, its billed jobs or its status.

    Raises:
        HTTPException 404: If invoice not found
        HTTPException 400: If the job list is empty or contains invalid jobs
    """
    logger.info(f"Updating invoice: id={invoice_id}")
    return invoice_service.update(db=db, id=invoice_id, obj_in=invoice_data)


@router.delete("/{invoice_id}", response_model=MessageResponse)
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """
    Delete an invoice. Its jobs return to Pending and can be billed again.
    """
    logger.info(f"Deleting invoice: id={invoice_id}")
    invoice_service.delete(db=db, id=invoice_id)
    return {"message": "Invoice deleted"}


@router.get("/{invoice_id}/jobs", response_model=Page[JobResponse])
def list_invoice_jobs(
    invoice_id: int,
    month: Optional[int] = None,
    year: Optional[int] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of the jobs billed on an invoice.

    Args:
        month: Only jobs in this month (1-12)
        year: Only jobs in this year
    """
    return invoice_service.list_jobs(
        db=db, id=invoice_id, params=params, month=month, year=year
    )


@router.get("/{invoice_id}/pdf")
def download_invoice_pdf(invoice_id: int, db: Session = Depends(get_db)):
    """
    Download the invoice as a PDF.

    Raises:
        HTTPException 404: If invoice not found
    """
    invoice = invoice_service.get(db=db, id=invoice_id)
    logger.info(f"Rendering PDF for invoice {invoice.invoice_number}")
    buffer = render_invoice_pdf(invoice)
    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{invoice.invoice_number}.pdf"'}
    )
