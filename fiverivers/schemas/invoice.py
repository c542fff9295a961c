from datetime import date
from typing import List, Optional
from pydantic import EmailStr, Field
from fiverivers.models.invoice import InvoiceState
from fiverivers.schemas.common import CamelModel, DispatcherSummary, Timestamped
from fiverivers.schemas.job import JobResponse

class InvoiceCreate(CamelModel):
    invoice_date: date
    invoice_number: Optional[str] = None
    billed_to: Optional[str] = None
    billed_email: Optional[EmailStr] = None
    dispatch_percent: Optional[float] = Field(None, ge=0, le=100)
    job_ids: List[int] = Field(..., min_length=1)

class InvoiceUpdate(CamelModel):
    invoice_date: Optional[date] = None
    invoice_number: Optional[str] = None
    billed_to: Optional[str] = None
    billed_email: Optional[EmailStr] = None
    dispatch_percent: Optional[float] = Field(None, ge=0, le=100)
    status: Optional[InvoiceState] = None
    job_ids: Optional[List[int]] = None

class InvoiceLineResponse(CamelModel):
    id: int
    job_id: Optional[int] = None
    line_amount: float

class InvoiceResponse(Timestamped):
    id: int
    invoice_number: str
    invoice_date: date
    dispatcher_id: int
    status: str
    sub_total: float
    dispatch_percent: float
    commission: float
    hst: float
    total: float
    billed_to: Optional[str] = None
    billed_email: Optional[str] = None
    dispatcher: Optional[DispatcherSummary] = None
    lines: List[InvoiceLineResponse] = []
    jobs: List[JobResponse] = []
