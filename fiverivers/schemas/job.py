from datetime import date
from typing import List, Optional
from pydantic import Field, field_validator
from fiverivers.models.job import InvoiceStatus
from fiverivers.schemas.common import (
    CamelModel,
    DispatcherSummary,
    DriverSummary,
    InvoiceSummary,
    JobTypeSummary,
    Timestamped,
    UnitSummary,
)

TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


def _split_legacy_list(value):
    # Older clients send tickets and weights as one space/comma separated string
    if isinstance(value, str):
        return [part for part in value.replace(",", " ").split() if part]
    return value


class JobBase(CamelModel):
    job_date: date
    job_type_id: int
    driver_id: int
    unit_id: int
    dispatcher_id: Optional[int] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    hours_of_job: Optional[float] = Field(None, ge=0)
    weight: Optional[List[float]] = None
    loads: Optional[int] = Field(None, ge=0)
    ticket_ids: Optional[List[str]] = None
    job_gross_amount: Optional[float] = Field(None, ge=0)
    invoice_status: InvoiceStatus = InvoiceStatus.pending
    payment_received: bool = False
    driver_paid: bool = False

    @field_validator("weight", "ticket_ids", mode="before")
    @classmethod
    def split_legacy_lists(cls, v):
        return _split_legacy_list(v)

class JobCreate(JobBase):
    pass

class JobUpdate(CamelModel):
    job_date: Optional[date] = None
    job_type_id: Optional[int] = None
    driver_id: Optional[int] = None
    unit_id: Optional[int] = None
    dispatcher_id: Optional[int] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    hours_of_job: Optional[float] = Field(None, ge=0)
    weight: Optional[List[float]] = None
    loads: Optional[int] = Field(None, ge=0)
    ticket_ids: Optional[List[str]] = None
    job_gross_amount: Optional[float] = Field(None, ge=0)
    invoice_status: Optional[InvoiceStatus] = None
    payment_received: Optional[bool] = None
    driver_paid: Optional[bool] = None

    @field_validator("weight", "ticket_ids", mode="before")
    @classmethod
    def split_legacy_lists(cls, v):
        return _split_legacy_list(v)

class JobResponse(JobBase, Timestamped):
    id: int
    invoice_id: Optional[int] = None
    job_gross_amount: Optional[float] = None
    driver: Optional[DriverSummary] = None
    unit: Optional[UnitSummary] = None
    dispatcher: Optional[DispatcherSummary] = None
    job_type: Optional[JobTypeSummary] = None
    invoice: Optional[InvoiceSummary] = None
